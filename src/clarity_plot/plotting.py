"""Generación del gráfico PNG de glucosa (serie temporal + perfil horario)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from matplotlib.axes import Axes  # noqa: E402
from matplotlib.ticker import MultipleLocator  # noqa: E402

from clarity_plot.errors import RenderError  # noqa: E402
from clarity_plot.model import GlucoseReading  # noqa: E402
from clarity_plot.stats import hourly_stats, readings_to_frame, y_axis_limit  # noqa: E402

DEFAULT_OUTPUT = Path("glucose_levels.png")

# (columna, etiqueta, color)
_PERCENTILE_LINES: tuple[tuple[str, str, str], ...] = (
    ("p05", "5th Percentile", "#d33"),
    ("p95", "95th Percentile", "#833"),
    ("p25", "25th Percentile", "#33d"),
    ("p75", "75th Percentile", "#338"),
)


@dataclass(frozen=True)
class PlotLayout:
    """Size, labels and colours of the output image."""

    width_px: int = 1400
    height_px: int = 800
    dpi: int = 100
    y_step: int = 25
    title: str = "Glucose Levels"
    hourly_title: str = "Hourly Mean Glucose Levels"
    y_label: str = "Glucose Value (mg/dL)"
    background: str = "#fff"
    line_color: str = "#1f77b4"
    mean_color: str = "#4d4"
    band_outer_color: str = "#ddd"
    band_inner_color: str = "#ccc"


def render_glucose_png(
    readings: Sequence[GlucoseReading],
    out_path: Path = DEFAULT_OUTPUT,
    layout: PlotLayout | None = None,
) -> Path:
    """Render readings to a PNG file, overwriting it if present.

    The upper panel is the time series; the lower one shows the mean and
    percentile bands per hour of day.

    Args:
        readings: Glucose readings, ordered by timestamp.
        out_path: Output path for the PNG file.
        layout: Image parameters.

    Returns:
        The written path.

    Raises:
        RenderError: If there are no readings or the file cannot be written.
    """
    if not readings:
        raise RenderError("No glucose readings to plot")
    layout = layout or PlotLayout()

    events = readings_to_frame(readings)
    stats = hourly_stats(events)

    fig, (ax_series, ax_hourly) = plt.subplots(
        2,
        1,
        figsize=(layout.width_px / layout.dpi, layout.height_px / layout.dpi),
        dpi=layout.dpi,
    )
    try:
        _draw_series(ax_series, events, layout)
        _draw_hourly(ax_hourly, stats, layout)
        fig.tight_layout()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(
            out_path,
            format="png",
            facecolor=layout.background,
            bbox_inches="tight",
        )
    except (OSError, ValueError) as exc:
        raise RenderError(f"Error rendering the chart: {exc}") from exc
    finally:
        plt.close(fig)
    return out_path


def _style_y_axis(ax: Axes, max_value: float, layout: PlotLayout) -> None:
    """Eje Y desde 0 con grilla cada ``y_step`` mg/dL."""
    ax.set_ylim(0, y_axis_limit(max_value, layout.y_step))
    ax.yaxis.set_major_locator(MultipleLocator(layout.y_step))
    ax.set_ylabel(layout.y_label)
    ax.grid(True, alpha=0.3)


def _draw_series(ax: Axes, events: pd.DataFrame, layout: PlotLayout) -> None:
    times = list(events["datetime"])
    values = events["glucose_mg_dl"].to_numpy(dtype=float)
    zone = times[0].tzinfo

    ax.plot(
        times,
        values,
        color=layout.line_color,
        linewidth=1.2,
        marker=".",
        markersize=3,
    )
    locator = mdates.AutoDateLocator(tz=zone)
    ax.xaxis.set_major_locator(locator)
    ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator, tz=zone))
    ax.set_title(layout.title)
    ax.set_xlabel("Time")
    _style_y_axis(ax, float(values.max()), layout)


def _draw_hourly(ax: Axes, stats: pd.DataFrame, layout: PlotLayout) -> None:
    hours = stats["hour"].to_numpy(dtype=int)

    def col(name: str) -> list[float]:
        return stats[name].to_numpy(dtype=float).tolist()

    ax.fill_between(
        hours,
        col("p05"),
        col("p95"),
        color=layout.band_outer_color,
        alpha=0.5,
        linewidth=0,
    )
    ax.fill_between(
        hours,
        col("p25"),
        col("p75"),
        color=layout.band_inner_color,
        alpha=0.65,
        linewidth=0,
    )
    for name, label, color in _PERCENTILE_LINES:
        ax.plot(hours, col(name), color=color, label=label, linewidth=1)
    ax.plot(hours, col("mean"), color=layout.mean_color, label="Mean Glucose", linewidth=2)

    ax.set_xticks(range(24))
    ax.set_xlim(0, 23)
    ax.set_title(layout.hourly_title)
    ax.set_xlabel("Hour of the Day")
    _style_y_axis(ax, max(col("p95")), layout)
    ax.legend(
        loc="upper center",
        bbox_to_anchor=(0.5, -0.2),
        ncol=5,
        frameon=False,
    )
