"""FastAPI application exposing attention metric endpoints."""
from __future__ import annotations

import ipaddress
from typing import Annotated

from fastapi import FastAPI, HTTPException, Path, Query, status
from fastapi.middleware.cors import CORSMiddleware

from .config import get_api_config
from .logging_config import get_logger
from .models import (
    AttentionMetricsResponse,
    DailyResponse,
    IpMetricsResponse,
    ProgramBreakdownResponse,
    PublisherBreakdownResponse,
    TierTablesResponse,
)
from .services.attention import (
    get_daily,
    get_ip_metrics,
    get_program_breakdown,
    get_publisher_breakdown,
    get_summary,
    get_tier_tables,
)

log = get_logger(__name__)
config = get_api_config()

app = FastAPI(
    title="Attention Metrics API",
    description="Scores QR scan activity into A2AR, ASV and ACI attention tiers.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

UNAVAILABLE_DETAIL = "Scan data is currently unavailable."

WindowDays = Annotated[
    int,
    Query(ge=1, le=config.max_window_days, description="Number of days to look back, starting at local midnight."),
]


def _unavailable() -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=UNAVAILABLE_DETAIL)


@app.get("/health", tags=["Health"])
def health() -> dict:
    return {"status": "ok"}


@app.get("/a2ar/summary", response_model=AttentionMetricsResponse, tags=["Attention Metrics"])
def read_summary(days: WindowDays = config.default_window_days) -> AttentionMetricsResponse:
    log.info("Handling incoming request for /a2ar/summary (days=%d)", days)

    payload = get_summary(days)
    if payload is None:
        raise _unavailable()
    return payload


@app.get("/a2ar/by-program", response_model=ProgramBreakdownResponse, tags=["Attention Metrics"])
def read_by_program(days: WindowDays = config.default_window_days) -> ProgramBreakdownResponse:
    log.info("Handling incoming request for /a2ar/by-program (days=%d)", days)

    payload = get_program_breakdown(days)
    if payload is None:
        raise _unavailable()
    return payload


@app.get("/a2ar/by-publisher", response_model=PublisherBreakdownResponse, tags=["Attention Metrics"])
def read_by_publisher(days: WindowDays = config.default_window_days) -> PublisherBreakdownResponse:
    log.info("Handling incoming request for /a2ar/by-publisher (days=%d)", days)

    payload = get_publisher_breakdown(days)
    if payload is None:
        raise _unavailable()
    return payload


@app.get("/a2ar/daily", response_model=DailyResponse, tags=["Attention Metrics"])
def read_daily(days: WindowDays = config.default_window_days) -> DailyResponse:
    log.info("Handling incoming request for /a2ar/daily (days=%d)", days)

    payload = get_daily(days)
    if payload is None:
        raise _unavailable()
    return payload


@app.get("/a2ar/tiers", response_model=TierTablesResponse, tags=["Reference"])
def read_tiers() -> TierTablesResponse:
    return get_tier_tables()


@app.get("/api/scans/metrics-by-ip/{ip}", response_model=IpMetricsResponse, tags=["Attention Metrics"])
def read_metrics_by_ip(
    ip: str = Path(..., description="IPv4 or IPv6 address of the scanning device"),
    days: WindowDays = config.default_window_days,
) -> IpMetricsResponse:
    # Stored addresses are matched as typed, so only validate here.
    address = ip.strip()
    try:
        ipaddress.ip_address(address)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"'{ip}' is not a valid IP address.",
        )

    log.info("Handling incoming request for /api/scans/metrics-by-ip/%s (days=%d)", address, days)

    payload = get_ip_metrics(address, days)
    if payload is None:
        raise _unavailable()
    return payload
