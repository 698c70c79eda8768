"""
Plot theme.

All styling of the composite figure is carried by a `PlotTheme` instance that
is passed to every chart function. Nothing here touches matplotlib's global
rcParams.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import matplotlib.ticker as mticker


@dataclass(frozen=True)
class PlotTheme:
    """
    Styling for the four charts and their composition.

    Parameters
    ----------
    base_size:
        Font size of tick labels and annotations.
    title_size / subtitle_size:
        Font sizes of panel titles and subtitles.
    trend_color:
        Line and marker colour of the national trend.
    bar_cmap:
        Colormap of the operator bars (reversed plasma by default).
    box_color / box_alpha / outlier_color:
        Box-plot fill, fill opacity and outlier marker colour.
    scatter_color / scatter_alpha / scatter_size:
        Marker styling of the volume-vs-efficiency scatter.
    figsize / dpi:
        Size and resolution of the composite figure.
    """

    base_size: float = 13
    title_size: float = 14
    subtitle_size: float = 11
    trend_color: str = "#D55E00"
    trend_linewidth: float = 1.8
    trend_markersize: float = 6
    bar_cmap: str = "plasma_r"
    box_color: str = "#56B4E9"
    box_alpha: float = 0.7
    outlier_color: str = "red"
    scatter_color: str = "#009E73"
    scatter_alpha: float = 0.6
    scatter_size: float = 20
    grid_color: str = "#DDDDDD"
    figsize: Tuple[float, float] = (18, 13)
    dpi: int = 150

    def style_axes(self, ax) -> None:
        """Minimal look: major grid only, no top/right spines."""
        ax.grid(True, which="major", color=self.grid_color, linewidth=0.8)
        ax.grid(False, which="minor")
        ax.set_axisbelow(True)
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)
        ax.tick_params(labelsize=self.base_size - 2)

    def set_titles(self, ax, title: str, subtitle: str = "") -> None:
        ax.set_title(title, loc="left", fontsize=self.title_size, fontweight="bold", pad=24 if subtitle else 8)
        if subtitle:
            ax.text(0.0, 1.02, subtitle, transform=ax.transAxes, fontsize=self.subtitle_size, va="bottom")

    def set_axis_labels(self, ax, xlabel: str, ylabel: str) -> None:
        ax.set_xlabel(xlabel, fontsize=self.base_size, fontweight="bold")
        ax.set_ylabel(ylabel, fontsize=self.base_size, fontweight="bold")


def comma_formatter() -> mticker.Formatter:
    """Thousands separators, no decimals (1234567 -> '1,234,567')."""
    return mticker.FuncFormatter(lambda v, _pos: f"{v:,.0f}")


def percent_formatter() -> mticker.Formatter:
    """Fractions as percentages (0.85 -> '85%')."""
    return mticker.PercentFormatter(xmax=1.0, decimals=0)
