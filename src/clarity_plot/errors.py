"""Errores del pipeline lectura -> gráfico."""

from __future__ import annotations


class ParseError(ValueError):
    """The export has no usable glucose rows."""


class RenderError(RuntimeError):
    """The chart image could not be produced."""
