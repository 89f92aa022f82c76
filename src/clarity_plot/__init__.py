"""Gráficos de glucosa a partir de exportaciones CSV de DexCom Clarity."""

__version__ = "0.1.0"
