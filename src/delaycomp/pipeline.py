"""
End-to-end run: workbook in, composite figure out.

Steps
-----
1) Load both worksheets, normalize their headers, derive the schemas
2) Structural checks on the normalized tables
3) Derive the four figure tables
4) Render the composite figure and save it
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Union

from delaycomp.load import load_workbook
from delaycomp.plotting import PlotTheme, compose_figure
from delaycomp.transforms.figures import FigureTables, build_figure_tables
from delaycomp.validation.checks import check_tables


DEFAULT_OUTPUT = "delay_compensation_composite.png"


def run(
    logger,
    workbook: Union[str, "os.PathLike[str]"],
    output: Union[str, "os.PathLike[str]"] = DEFAULT_OUTPUT,
    *,
    theme: Optional[PlotTheme] = None,
    labels: Optional[Mapping[str, str]] = None,
) -> FigureTables:
    """
    Build the composite delay-compensation figure from a workbook.

    Returns the derived tables so callers can inspect or export them.
    Raises a DelayCompensationError subclass on any fatal condition; nothing is
    written in that case.
    """
    theme = theme or PlotTheme()

    wb = load_workbook(logger, workbook)
    check_tables(logger, wb.annual, wb.periodic, a_schema=wb.annual_schema, p_schema=wb.periodic_schema)

    tables = build_figure_tables(
        logger, wb.annual, wb.periodic, a_schema=wb.annual_schema, p_schema=wb.periodic_schema
    )

    fig = compose_figure(tables, theme, labels=labels)
    fig.savefig(output, dpi=theme.dpi)
    logger.info(f"Composite figure written to {os.fspath(output)}")

    return tables
