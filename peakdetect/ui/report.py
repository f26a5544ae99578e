"""Peak output rendering and plot report."""

from __future__ import annotations

from typing import List, Optional, TextIO

import matplotlib.pyplot as plt

from peakdetect.config import plotting_disabled
from peakdetect.data.samples import SampleSeries
from peakdetect.detection.peaks import PeakResult
from peakdetect.logging_config import get_logger


def _format_point(series: SampleSeries, index: int) -> str:
    point = series.point(index)
    return f"{point.x:e},{point.y:e}"


def format_peaks(series: SampleSeries, result: PeakResult) -> List[str]:
    """Render emission peaks, an empty separator line, then absorption peaks."""

    lines = [_format_point(series, index) for index in result.maxima]
    lines.append("")
    lines.extend(_format_point(series, index) for index in result.minima)
    return lines


def write_peaks(out: TextIO, series: SampleSeries, result: PeakResult) -> None:
    """Write formatted peaks to ``out``, one per line."""

    for line in format_peaks(series, result):
        out.write(line + "\n")
    out.flush()


def plot_peak_report(
    series: SampleSeries,
    result: PeakResult,
    output_path: Optional[str] = None,
) -> None:
    """Plot the signal and mark the detected peaks.

    Args:
        series: Samples in input order.
        result: Peaks found in ``series``.
        output_path: Save the figure here instead of showing it.

    Raises:
        OSError: If the figure cannot be written to ``output_path``.
    """

    logger = get_logger(__name__)
    if len(series) == 0:
        logger.info("No samples to plot.")
        return

    if plotting_disabled():
        logger.info("Plotting disabled via PEAKDETECT_NO_PLOT.")
        return

    xs = series.x
    ys = series.y

    fig, ax = plt.subplots(figsize=(12, 5))
    ax.plot(xs, ys, color="#34495e", linewidth=1.0, label="Signal", zorder=2)
    ax.scatter(
        [xs[i] for i in result.maxima],
        [ys[i] for i in result.maxima],
        color="#c0392b",
        marker="v",
        s=40,
        label=f"Emission ({len(result.maxima)})",
        zorder=3,
    )
    ax.scatter(
        [xs[i] for i in result.minima],
        [ys[i] for i in result.minima],
        color="#27ae60",
        marker="^",
        s=40,
        label=f"Absorption ({len(result.minima)})",
        zorder=3,
    )

    ax.set_title("Peak Report")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.grid(True, linestyle="--", alpha=0.25)
    ax.legend(loc="best")

    plt.tight_layout()
    if not output_path:
        plt.show()
        return
    try:
        fig.savefig(output_path)
    finally:
        plt.close(fig)
    logger.info("Plot saved to %s", output_path)
