"""Modelos tipados para lecturas de glucosa."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

HOURLY_COLUMNS: tuple[str, ...] = (
    "hour",
    "mean",
    "p05",
    "p25",
    "p75",
    "p95",
    "count",
)


@dataclass(frozen=True)
class GlucoseReading:
    """One glucose measurement event (timestamped)."""

    timestamp: datetime
    mg_dl: float
