"""Estadísticas horarias de glucosa (media y percentiles por hora del día)."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from clarity_plot.model import HOURLY_COLUMNS, GlucoseReading

_PERCENTILES: dict[str, float] = {
    "p05": 0.05,
    "p25": 0.25,
    "p75": 0.75,
    "p95": 0.95,
}


def readings_to_frame(readings: Sequence[GlucoseReading]) -> pd.DataFrame:
    """Convert glucose readings to a DataFrame with an hour-of-day column."""
    rows = [
        {
            "datetime": r.timestamp,
            "hour": r.timestamp.hour,
            "glucose_mg_dl": r.mg_dl,
        }
        for r in readings
    ]
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    return df.sort_values("datetime", kind="stable").reset_index(drop=True)


def hourly_stats(glucose_events: pd.DataFrame) -> pd.DataFrame:
    """Aggregate glucose by hour of day.

    Percentiles use nearest-rank interpolation so every value is an actual
    measurement.

    Args:
        glucose_events: One row per reading (hour, glucose_mg_dl, ...).

    Returns:
        DataFrame with columns hour, mean, p05, p25, p75, p95, count,
        sorted by hour.
    """
    if glucose_events.empty:
        return pd.DataFrame(columns=list(HOURLY_COLUMNS))

    grouped = glucose_events.groupby("hour")["glucose_mg_dl"]
    data: dict[str, pd.Series] = {"mean": grouped.mean()}
    for name, q in _PERCENTILES.items():
        data[name] = grouped.quantile(q, interpolation="nearest")
    data["count"] = grouped.count()

    out = pd.DataFrame(data).reset_index()
    return out[list(HOURLY_COLUMNS)].sort_values("hour").reset_index(drop=True)


def y_axis_limit(max_value: float, step: int = 25) -> float:
    """Upper y bound aligned to the grid step, with headroom above the data."""
    return (max_value + 50) - (max_value % step)
