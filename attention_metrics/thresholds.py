"""Tier tables for the attention metrics.

These tables drive both classification and the reference tables served to
clients, so the displayed and enforced thresholds cannot drift apart.
"""

from typing import Dict, List, Tuple

from .models import Band

LABEL_LOW = "Low"
LABEL_FAIR = "Fair"
LABEL_AVERAGE = "Average"
LABEL_STRONG = "Strong"
LABEL_EXCEPTIONAL = "Exceptional"
NO_DATA_LABEL = "N/A"

# Percent of pause opportunities converted. Classification only uses ``min``;
# the top band is open-ended and 3.0 is its displayed upper bound.
A2AR_BANDS: Tuple[Band, ...] = (
    Band(1, LABEL_LOW, 0.2, 0.4, "Below standard CTV response"),
    Band(2, LABEL_FAIR, 0.5, 0.7, "Matches typical QR CTV ads"),
    Band(3, LABEL_AVERAGE, 0.8, 1.5, "Healthy baseline"),
    Band(4, LABEL_STRONG, 1.6, 2.5, "Clear advantage"),
    Band(5, LABEL_EXCEPTIONAL, 2.6, 3.0, "Rare, premium, context-perfect"),
)

# Mean seconds from opportunity to scan. A mean must be strictly above ``min``
# to fall into a slower band.
ASV_BANDS: Tuple[Band, ...] = (
    Band(1, LABEL_LOW, 40, None, "Slow scan response (>40s)"),
    Band(2, LABEL_FAIR, 20, 40, "Moderate scan response (20-40s)"),
    Band(3, LABEL_AVERAGE, 10, 20, "Standard scan response (10-20s)"),
    Band(4, LABEL_STRONG, 5, 10, "Quick scan response (5-10s)"),
    Band(5, LABEL_EXCEPTIONAL, 0, 5, "Instant scan response (<5s)"),
)

# Composite score (sum of the A2AR and ASV tiers). 9 sits in both Strong and
# Exceptional; ``score >= min`` checked from the top resolves it upward.
ACI_BANDS: Tuple[Band, ...] = (
    Band(1, LABEL_LOW, 2, 3, "Low attention quality"),
    Band(2, LABEL_FAIR, 4, 5, "Fair attention quality"),
    Band(3, LABEL_AVERAGE, 6, 7, "Average attention quality"),
    Band(4, LABEL_STRONG, 8, 9, "Strong attention quality"),
    Band(5, LABEL_EXCEPTIONAL, 9, 10, "Exceptional attention quality"),
)

ACI_MIN_SCORE = 2.0
ACI_MAX_SCORE = 10.0


def reference_tables() -> Dict[str, List[Dict[str, object]]]:
    """Return the three tables as plain rows for reference rendering."""

    return {
        "a2ar": [band.as_row("tier") for band in A2AR_BANDS],
        "asv": [band.as_row("tier") for band in ASV_BANDS],
        "aci": [band.as_row("level") for band in ACI_BANDS],
    }


__all__ = [
    "LABEL_LOW",
    "LABEL_FAIR",
    "LABEL_AVERAGE",
    "LABEL_STRONG",
    "LABEL_EXCEPTIONAL",
    "NO_DATA_LABEL",
    "A2AR_BANDS",
    "ASV_BANDS",
    "ACI_BANDS",
    "ACI_MIN_SCORE",
    "ACI_MAX_SCORE",
    "reference_tables",
]
