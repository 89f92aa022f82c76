"""Lectura de exportaciones CSV de DexCom Clarity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path

import numpy as np
import pandas as pd
from dateutil import tz

from clarity_plot.errors import ParseError
from clarity_plot.model import GlucoseReading
from clarity_plot.sources.base import DataSource, SourcePaths

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
# Clarity escribe "Low"/"High" fuera del rango del sensor.
LOW_MG_DL = 30.0
EGV_EVENT = "EGV"


@dataclass(frozen=True)
class ClarityExport(SourcePaths):
    """Path of a Clarity CSV export."""

    # path: Clarity_Export_*.csv


@dataclass(frozen=True)
class ClarityColumns:
    """Column names of the Clarity export."""

    timestamp: str = "Timestamp (YYYY-MM-DDThh:mm:ss)"
    glucose: str = "Glucose Value (mg/dL)"
    event_type: str = "Event Type"


class DexcomClaritySource(DataSource):
    """DexCom Clarity CSV reading source."""

    def __init__(
        self,
        paths: SourcePaths,
        columns: ClarityColumns | None = None,
        tzname: str | None = None,
    ) -> None:
        """Create a Clarity source.

        Args:
            paths: Location of the CSV export.
            columns: Column names; defaults to the Clarity schema.
            tzname: Optional IANA zone used to localize naive timestamps.

        Raises:
            ValueError: If ``tzname`` is not a known time zone.
        """
        super().__init__(paths)
        self._columns = columns or ClarityColumns()
        self._tz = _resolve_tz(tzname)

    def validate(self) -> None:
        """Validate that the export file exists."""
        if not self._paths.path.is_file():
            raise FileNotFoundError(str(self._paths.path))

    def load_readings(self, path: Path | None = None) -> list[GlucoseReading]:
        """Parse a Clarity CSV export into typed readings.

        Metadata rows (patient info, devices, alerts) and rows with a
        malformed timestamp or value are skipped.

        Args:
            path: CSV file; defaults to the configured export path.

        Returns:
            Glucose readings sorted by timestamp.

        Raises:
            ParseError: If required columns are missing or no row is usable.
        """
        csv_path = path or self._paths.path
        try:
            df = pd.read_csv(
                csv_path, dtype=str, skip_blank_lines=True, on_bad_lines="skip"
            )
        except pd.errors.EmptyDataError as exc:
            raise ParseError(f"Empty export: {csv_path}") from exc

        df = df.rename(columns={c: c.strip() for c in df.columns})
        cols = self._columns
        missing = [c for c in (cols.timestamp, cols.glucose) if c not in df.columns]
        if missing:
            raise ParseError(f"Missing columns in {csv_path}: {', '.join(missing)}")

        if cols.event_type in df.columns:
            df = df[df[cols.event_type].str.strip() == EGV_EVENT]

        out = _frame_to_readings(df, cols, self._tz)
        if not out:
            raise ParseError(f"No glucose readings in {csv_path}")
        return out


def _resolve_tz(tzname: str | None) -> tzinfo | None:
    if tzname is None:
        return None
    zone = tz.gettz(tzname)
    if zone is None:
        raise ValueError(f"Unknown time zone: {tzname}")
    return zone


def _clean_glucose(raw: pd.Series) -> pd.Series:
    """Convierte texto a mg/dL: Low -> 30, High/negativos/inf/texto -> NaN."""
    text = raw.str.strip()
    values = pd.to_numeric(text, errors="coerce")
    values = values.mask(text.str.casefold() == "low", LOW_MG_DL)
    finite = np.isfinite(values.to_numpy(dtype=float, na_value=np.nan))
    return values.mask(~finite | (values < 0))


def _parse_timestamps(raw: pd.Series) -> pd.Series:
    """Parses the export timestamps; malformed values become NaT."""
    return pd.to_datetime(raw.str.strip(), format=TIMESTAMP_FORMAT, errors="coerce")


def _frame_to_readings(
    df: pd.DataFrame, cols: ClarityColumns, zone: tzinfo | None
) -> list[GlucoseReading]:
    if df.empty:
        return []
    clean = pd.DataFrame(
        {
            "timestamp": _parse_timestamps(df[cols.timestamp]),
            "mg_dl": _clean_glucose(df[cols.glucose]),
        }
    ).dropna()
    clean = clean.sort_values("timestamp", kind="stable")

    out: list[GlucoseReading] = []
    for ts, mg_dl in zip(clean["timestamp"], clean["mg_dl"]):
        dt = ts.to_pydatetime()
        if zone is not None:
            dt = dt.replace(tzinfo=zone)
        out.append(GlucoseReading(timestamp=dt, mg_dl=float(mg_dl)))
    return out
