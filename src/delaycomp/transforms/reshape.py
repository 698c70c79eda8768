"""
Row filtering and wide-to-long reshaping.

The source tables are "wide": one row per (period, category) and one column per
operator. Plotting and alignment need "long" tables:

    wide:  ['time_period','delay_compensation','great_britain','c2c',...]
    long:  ['time_period','operator','value']

Only numeric cells become long records; missing values and text cells
(footnote markers, suppressed-value symbols) are dropped.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

import pandas as pd

from delaycomp import config
from delaycomp.errors import SchemaError
from .columns import is_number


def filter_by_category(
    table: pd.DataFrame,
    key: str,
    category_column: str = config.CATEGORY_COLUMN,
) -> pd.DataFrame:
    """
    Return the rows whose category column equals `key` exactly.

    Matching is case-sensitive with no trimming. A key absent from the table
    yields an empty frame with the table's columns, never an error.
    """
    if category_column not in table.columns:
        raise SchemaError(f"cannot filter by category: missing column {category_column!r}")
    return table.loc[table[category_column] == key].copy()


def _ordered_unique(cols: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for c in cols:
        if c not in seen:
            seen.add(c)
            out.append(c)
    return out


def reshape_long(
    rows: pd.DataFrame,
    key_columns: Sequence[str] = (),
    exclude_columns: Iterable[str] = (),
    *,
    value_name: str = "value",
    operator_name: str = config.OPERATOR_COLUMN,
) -> pd.DataFrame:
    """
    Reshape wide rows into long (key..., operator, value) records.

    Every column that is neither a key column nor excluded, and whose cell
    holds a number, produces one record. Records are ordered by row, then by
    column position within the row.

    Parameters
    ----------
    rows:
        Wide rows, typically the output of `filter_by_category`.
    key_columns:
        Columns copied onto every record of their row (e.g. ['time_period']).
    exclude_columns:
        Columns never treated as operators (category, notes).
    value_name:
        Name of the value column in the output.

    Returns
    -------
    pd.DataFrame
        Columns: [*key_columns, operator_name, value_name]; value is float64.
    """
    key_columns = _ordered_unique(key_columns)
    missing = sorted(set(key_columns) - set(rows.columns))
    if missing:
        raise SchemaError(f"rows missing key columns: {missing}")

    skip = set(key_columns) | set(exclude_columns)
    value_cols = [c for c in rows.columns if c not in skip]
    out_cols = key_columns + [operator_name, value_name]

    if rows.empty or not value_cols:
        return pd.DataFrame({c: pd.Series(dtype="float64" if c == value_name else "object") for c in out_cols})

    work = rows[key_columns + value_cols].reset_index(drop=True)
    long = work.melt(
        id_vars=key_columns,
        value_vars=value_cols,
        var_name=operator_name,
        value_name=value_name,
        ignore_index=False,
    )

    # melt is column-major; restore row-major order
    col_pos = {c: i for i, c in enumerate(value_cols)}
    long["_row"] = long.index
    long["_col"] = long[operator_name].map(col_pos)
    long = long.sort_values(["_row", "_col"], kind="mergesort")

    long = long.loc[long[value_name].map(is_number).to_numpy(dtype=bool)]
    long = long.drop(columns=["_row", "_col"]).reset_index(drop=True)
    long[value_name] = pd.to_numeric(long[value_name]).astype("float64")
    long[operator_name] = long[operator_name].astype("object")
    return long[out_cols]
