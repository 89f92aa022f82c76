"""Punto de entrada: python -m clarity_plot."""

from __future__ import annotations

from clarity_plot.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
