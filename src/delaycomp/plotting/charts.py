"""
Chart builders.

Each function draws one derived table onto a provided matplotlib Axes and
returns it. `compose_figure` lays the four panels out as

    (national trend | operator claims)
    (periodic claims | volume vs efficiency)

on a `matplotlib.figure.Figure` created without pyplot, so no global figure
state is involved. Empty tables render an annotated empty panel.
"""

from __future__ import annotations

from typing import Mapping, Optional

import matplotlib
import numpy as np
import pandas as pd
from matplotlib.cm import ScalarMappable
from matplotlib.colors import Normalize
from matplotlib.figure import Figure

from delaycomp import config
from delaycomp.labels import label_for
from delaycomp.transforms.figures import FigureTables
from .theme import PlotTheme, comma_formatter, percent_formatter


OP = config.OPERATOR_COLUMN


def _empty_panel(ax, theme: PlotTheme, message: str = "No data available"):
    ax.text(
        0.5, 0.5, message,
        transform=ax.transAxes, ha="center", va="center",
        fontsize=theme.base_size, color="grey",
    )
    ax.set_xticks([])
    ax.set_yticks([])
    return ax


def plot_national_trend(ax, trend: pd.DataFrame, theme: PlotTheme):
    """Line chart of national claims per period (['time_period','claims'])."""
    theme.set_titles(ax, "Delay Compensation Claims Across Great Britain", "Annual trend in total claims received")
    theme.set_axis_labels(ax, "Financial Year", "Number of Claims")
    if trend.empty:
        return _empty_panel(ax, theme)

    theme.style_axes(ax)
    # categorical x keeps financial-year strings such as "2023-24" in order
    x = np.arange(len(trend))
    ax.plot(
        x, trend["claims"].to_numpy(),
        color=theme.trend_color, linewidth=theme.trend_linewidth,
        marker="o", markersize=theme.trend_markersize,
    )
    ax.set_xticks(x)
    ax.set_xticklabels([str(p) for p in trend[config.PERIOD_COLUMN]])
    ax.yaxis.set_major_formatter(comma_formatter())
    ax.margins(y=0.05)
    return ax


def plot_operator_claims(
    ax,
    claims: pd.DataFrame,
    theme: PlotTheme,
    period=None,
    labels: Optional[Mapping[str, str]] = None,
):
    """Horizontal bars of claims per operator (['operator','claims']), largest on top."""
    suffix = f" ({period})" if period is not None else ""
    theme.set_titles(ax, f"Delay Compensation Claims by Train Operator{suffix}", "Substantial inequality across operators")
    theme.set_axis_labels(ax, "Number of Claims", "Train Operator")
    if claims.empty:
        return _empty_panel(ax, theme)

    theme.style_axes(ax)
    data = claims.sort_values("claims", kind="mergesort")
    values = data["claims"].to_numpy()
    norm = Normalize(vmin=float(values.min()), vmax=float(values.max()))
    cmap = matplotlib.colormaps[theme.bar_cmap]

    y = np.arange(len(data))
    ax.barh(y, values, color=cmap(norm(values)))
    ax.set_yticks(y)
    ax.set_yticklabels([label_for(op, labels) for op in data[OP]])
    ax.xaxis.set_major_formatter(comma_formatter())

    cbar = ax.figure.colorbar(ScalarMappable(norm=norm, cmap=cmap), ax=ax, format=comma_formatter())
    cbar.set_label("Number of Claims", fontsize=theme.base_size - 2)
    return ax


def plot_periodic_distribution(
    ax,
    claims: pd.DataFrame,
    theme: PlotTheme,
    labels: Optional[Mapping[str, str]] = None,
):
    """Horizontal box plot of periodic claims per operator (['operator','claims'])."""
    theme.set_titles(ax, "Distribution of Periodic Delay Compensation Claims", "Extreme values highlight uneven passenger burden")
    theme.set_axis_labels(ax, "Claims per Reporting Period", "Train Operator")
    if claims.empty:
        return _empty_panel(ax, theme)

    theme.style_axes(ax)
    operators = sorted(claims[OP].unique())
    groups = [claims.loc[claims[OP] == op, "claims"].to_numpy() for op in operators]

    bp = ax.boxplot(
        groups,
        orientation="horizontal",
        patch_artist=True,
        flierprops={"marker": "o", "markeredgecolor": theme.outlier_color, "markerfacecolor": "none"},
        medianprops={"color": "black"},
    )
    for box in bp["boxes"]:
        box.set_facecolor(theme.box_color)
        box.set_alpha(theme.box_alpha)

    ax.set_yticks(np.arange(1, len(operators) + 1))
    ax.set_yticklabels([label_for(op, labels) for op in operators])
    ax.xaxis.set_major_formatter(comma_formatter())
    return ax


def plot_volume_efficiency(ax, joined: pd.DataFrame, theme: PlotTheme):
    """
    Scatter of claims against share closed within 20 working days.

    Points are unlabelled (one per operator and period), so unlike the bar and
    box charts this takes no operator label mapping. Rows missing either value
    are not drawn.
    """
    theme.set_titles(ax, "Claim Volume vs Processing Efficiency", "Higher volume does not necessarily imply lower efficiency")
    theme.set_axis_labels(ax, "Number of Claims", "Percentage Closed Within 20 Working Days")
    points = joined.dropna(subset=["claims", "closed_pct"])
    if points.empty:
        return _empty_panel(ax, theme)

    theme.style_axes(ax)
    ax.scatter(
        points["claims"], points["closed_pct"],
        color=theme.scatter_color, alpha=theme.scatter_alpha, s=theme.scatter_size,
    )
    ax.xaxis.set_major_formatter(comma_formatter())
    ax.yaxis.set_major_formatter(percent_formatter())
    return ax


def compose_figure(
    tables: FigureTables,
    theme: Optional[PlotTheme] = None,
    labels: Optional[Mapping[str, str]] = None,
) -> Figure:
    """
    Render the four derived tables into one 2x2 composite figure.
    """
    theme = theme or PlotTheme()
    fig = Figure(figsize=theme.figsize, dpi=theme.dpi, layout="constrained")
    (ax1, ax2), (ax3, ax4) = fig.subplots(2, 2)

    plot_national_trend(ax1, tables.national_trend, theme)
    plot_operator_claims(ax2, tables.operator_claims, theme, period=tables.latest_period, labels=labels)
    plot_periodic_distribution(ax3, tables.periodic_claims, theme, labels=labels)
    plot_volume_efficiency(ax4, tables.volume_efficiency, theme)
    return fig
