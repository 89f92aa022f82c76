from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

CLARITY_HEADER = (
    "Index,Timestamp (YYYY-MM-DDThh:mm:ss),Event Type,Event Subtype,"
    "Patient Info,Device Info,Source Device ID,Glucose Value (mg/dL),"
    "Insulin Value (u),Carb Value (grams),Duration (hh:mm:ss),"
    "Glucose Rate of Change (mg/dL/min),Transmitter Time (Long Integer),"
    "Transmitter ID"
)

CLARITY_METADATA = (
    "1,,FirstName,,Jane,,,,,,,,,",
    "2,,LastName,,Doe,,,,,,,,,",
    "3,,Device,,,G6 Mobile App,Android G6,,,,,,,",
    "4,,Alert,High,,,Android G6,250,,,,,,",
)


def egv_row(index: int, timestamp: str, value: str) -> str:
    return f"{index},{timestamp},EGV,,,,Android G6,{value},,,,,{index * 300},8XXXXX"


@pytest.fixture()
def clarity_csv(
    tmp_path: Path,
) -> Callable[[Sequence[tuple[str, str] | str]], Path]:
    """Write a Clarity-shaped export with metadata rows and the given EGVs.

    Plain strings are written as raw lines between the EGV rows.
    """

    def _write(
        egvs: Sequence[tuple[str, str] | str], name: str = "export.csv"
    ) -> Path:
        lines = [CLARITY_HEADER, *CLARITY_METADATA]
        for i, egv in enumerate(egvs):
            if isinstance(egv, str):
                lines.append(egv)
            else:
                lines.append(egv_row(i + 10, *egv))
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
