"""
Transformations for delaycomp.

This subpackage turns the normalized workbook tables into the tidy tables
plotted by `delaycomp.plotting`.

Design principles:
- Column roles come from an explicit schema derived once per table.
- Functions take and return pandas DataFrames and never mutate their inputs.
- Empty selections are valid and propagate as empty tables.

Public API:
- normalize_name / normalize_columns
- filter_by_category / reshape_long
- align_claims_efficiency
- build_figure_tables
"""

from .align import align_claims_efficiency
from .columns import TableSchema, derive_schema, normalize_columns, normalize_name
from .figures import FigureTables, build_figure_tables
from .reshape import filter_by_category, reshape_long

__all__ = [
    "normalize_name",
    "normalize_columns",
    "derive_schema",
    "TableSchema",
    "filter_by_category",
    "reshape_long",
    "align_claims_efficiency",
    "build_figure_tables",
    "FigureTables",
]
