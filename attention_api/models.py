"""Shared response models for the public API."""
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Accepts field names or their camelCase wire aliases."""

    model_config = ConfigDict(populate_by_name=True)


class A2ARSummary(ApiModel):
    pause_opportunities: int = Field(..., alias="pauseOpportunities")
    qr_downloads: int = Field(..., alias="qrDownloads")
    percentage: float = Field(..., description="Conversion rate in percent, capped at 100 for display")
    tier: int
    label: str


class ASVSummary(ApiModel):
    average_seconds: float = Field(..., alias="averageSeconds", description="Mean seconds from opportunity to scan")
    tier: int
    label: str


class ACISummary(ApiModel):
    score: float
    level: int
    label: str


class AttentionMetricsResponse(ApiModel):
    a2ar: A2ARSummary
    asv: ASVSummary
    aci: ACISummary


class ProgramMetrics(AttentionMetricsResponse):
    program: str


class ProgramBreakdownResponse(ApiModel):
    programs: List[ProgramMetrics]


class PublisherMetrics(AttentionMetricsResponse):
    publisher: str


class PublisherBreakdownResponse(ApiModel):
    publishers: List[PublisherMetrics]


class DailyEntry(ApiModel):
    date: dt.date
    pause_opportunities: int = Field(..., alias="pauseOpportunities")
    verified_conversions: int = Field(..., alias="verifiedConversions")
    a2ar: float


class DailyResponse(ApiModel):
    daily: List[DailyEntry]


class IpMetricsResponse(ApiModel):
    ip: str
    metrics: AttentionMetricsResponse


class TierBand(ApiModel):
    tier: int
    label: str
    min: float
    max: Optional[float]
    description: str


class LevelBand(ApiModel):
    level: int
    label: str
    min: float
    max: Optional[float]
    description: str


class TierTablesResponse(ApiModel):
    a2ar: List[TierBand]
    asv: List[TierBand]
    aci: List[LevelBand]
