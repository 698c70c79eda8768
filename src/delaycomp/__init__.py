"""
delaycomp

Reshape the UK rail delay-compensation workbook (annual and periodic
worksheets) into tidy pandas DataFrames and render them as one composite
figure.

Public API:
- get_logger
- load_workbook
- check_tables
- build_figure_tables
- compose_figure
- run
"""

from __future__ import annotations

# Public logging utility
from .logging_utils import get_logger

# Loading and structural checks
from .load import NormalizedWorkbook, load_workbook
from .validation.checks import check_tables

# Derivation and rendering
from .transforms.figures import FigureTables, build_figure_tables
from .plotting import PlotTheme, compose_figure
from .pipeline import run

__all__ = [
    "get_logger",
    "load_workbook",
    "NormalizedWorkbook",
    "check_tables",
    "build_figure_tables",
    "FigureTables",
    "PlotTheme",
    "compose_figure",
    "run",
]
