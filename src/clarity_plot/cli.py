"""CLI para graficar glucosa desde una exportación CSV de DexCom Clarity."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from clarity_plot.errors import ParseError, RenderError
from clarity_plot.plotting import DEFAULT_OUTPUT, PlotLayout, render_glucose_png
from clarity_plot.sources.dexcom import ClarityExport, DexcomClaritySource


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Exits with status 2 and prints usage to stderr if the CSV path is missing.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Gráfico de glucosa desde una exportación de DexCom Clarity."
    )
    parser.add_argument("csv_file_path", help="CSV exportado desde Clarity.")
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT),
        help=f"PNG de salida (default: {DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "--tz",
        default=None,
        help="Zona horaria de los timestamps (ej. America/Argentina/Buenos_Aires).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the plotting CLI.

    Returns:
        Exit code (0 on success, 1 on error).
    """
    ns = parse_args(argv)
    csv_path = Path(ns.csv_file_path).expanduser()
    out_path = Path(ns.output).expanduser()

    try:
        source = DexcomClaritySource(ClarityExport(path=csv_path), tzname=ns.tz)
        source.validate()
        readings = source.load_readings()
        written = render_glucose_png(readings, out_path, PlotLayout())
    except FileNotFoundError as exc:
        print(f"Error: file not found: {exc}", file=sys.stderr)
        return 1
    except (OSError, ParseError, RenderError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"OK: Clarity file: {csv_path}")
    print(f"OK: Readings: {len(readings)}")
    print(f"Plot has been saved as {written}")
    return 0
