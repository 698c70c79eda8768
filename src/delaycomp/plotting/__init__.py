"""
Plotting for delaycomp.

Pure drawing functions: they accept derived DataFrames and an explicit
`PlotTheme`, and draw on matplotlib Axes. No file I/O happens here.
"""

from .charts import (
    compose_figure,
    plot_national_trend,
    plot_operator_claims,
    plot_periodic_distribution,
    plot_volume_efficiency,
)
from .theme import PlotTheme

__all__ = [
    "PlotTheme",
    "compose_figure",
    "plot_national_trend",
    "plot_operator_claims",
    "plot_periodic_distribution",
    "plot_volume_efficiency",
]
