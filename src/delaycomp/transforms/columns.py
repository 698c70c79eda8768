"""
Column normalization and table schemas.

Spreadsheet headers are free-form text ("Avanti West Coast",
"Elizabeth line (note 3)(note5)", "Time period"). This module maps them to
stable snake_case identifiers:

    "Elizabeth line (note 3)(note5)"  ->  "elizabeth_line_note_3_note5"

and derives, once per table, an explicit `TableSchema` that separates the
metadata columns (period, category, free-text notes) from the operator
columns. Downstream reshaping reads the schema instead of re-inferring column
roles from dtypes.
"""

from __future__ import annotations

import math
import numbers
import re
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from delaycomp import config
from delaycomp.errors import ColumnCollisionError, SchemaError


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_name(raw_name) -> str:
    """
    Normalize one raw column header.

    Non-ASCII letters are transliterated (NFKD, combining marks dropped), the
    result is lowercased, every run of non-alphanumeric characters becomes a
    single separator, and leading/trailing separators are trimmed.

    The function is total (non-string headers are converted with `str`) and
    idempotent.
    """
    text = unicodedata.normalize("NFKD", str(raw_name))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    sep = config.COLUMN_SEPARATOR
    return _NON_ALNUM.sub(sep, text).strip(sep)


def normalize_columns(df: pd.DataFrame, table_name: str = "table") -> pd.DataFrame:
    """
    Return a copy of `df` with every column name normalized.

    Raises
    ------
    ColumnCollisionError
        If two distinct raw headers normalize to the same name. The message
        lists every colliding group so the workbook can be fixed.
    """
    groups: Dict[str, List[str]] = {}
    for raw in df.columns:
        groups.setdefault(normalize_name(raw), []).append(str(raw))

    collisions = {k: v for k, v in groups.items() if len(v) > 1}
    if collisions:
        detail = "; ".join(f"{v} -> {k!r}" for k, v in sorted(collisions.items()))
        raise ColumnCollisionError(
            f"column names of {table_name} collide after normalization: {detail}"
        )

    out = df.copy()
    out.columns = [normalize_name(c) for c in df.columns]
    return out


def is_number(value) -> bool:
    """True for real, non-boolean, non-NaN scalars."""
    if isinstance(value, (bool, np.bool_)):
        return False
    if not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


@dataclass(frozen=True)
class TableSchema:
    """
    Column roles of one normalized table.

    Attributes
    ----------
    name:
        Table name used in log and error messages ("annual", "periodic").
    category_column:
        Row-type discriminator column.
    period_column:
        Reporting-period column, or None when the table has none.
    operator_columns:
        Non-metadata columns holding at least one numeric cell, in table order.
    text_columns:
        Remaining non-metadata columns (notes, footnotes, empty columns).
    """

    name: str
    category_column: str
    period_column: Optional[str]
    operator_columns: Tuple[str, ...]
    text_columns: Tuple[str, ...] = ()

    @property
    def metadata_columns(self) -> Tuple[str, ...]:
        cols = [self.category_column]
        if self.period_column is not None:
            cols.insert(0, self.period_column)
        return tuple(cols) + self.text_columns

    @property
    def key_columns(self) -> Tuple[str, ...]:
        return () if self.period_column is None else (self.period_column,)


def derive_schema(
    df: pd.DataFrame,
    name: str,
    *,
    category_column: str = config.CATEGORY_COLUMN,
    period_column: Optional[str] = config.PERIOD_COLUMN,
    require_period: bool = False,
) -> TableSchema:
    """
    Derive the explicit schema of a normalized table.

    `period_column` is optional unless `require_period` is set; a table without
    it gets `period_column=None`.

    Raises
    ------
    SchemaError
        If the category column (or a required period column) is missing.
    """
    if category_column not in df.columns:
        raise SchemaError(f"{name} table missing required column: {category_column!r}")

    if period_column is not None and period_column not in df.columns:
        if require_period:
            raise SchemaError(f"{name} table missing required column: {period_column!r}")
        period_column = None

    meta = {category_column, period_column}
    operators: List[str] = []
    texts: List[str] = []
    for c in df.columns:
        if c in meta:
            continue
        if df[c].map(is_number).any():
            operators.append(c)
        else:
            texts.append(c)

    return TableSchema(
        name=name,
        category_column=category_column,
        period_column=period_column,
        operator_columns=tuple(operators),
        text_columns=tuple(texts),
    )


def ensure_comparable_periods(periods: pd.Series, table_name: str = "annual") -> None:
    """
    Fail unless the non-null periods share one kind (all numbers or all of one type).

    Mixed kinds such as 2023 next to "2024-25" cannot be ordered.

    Raises
    ------
    SchemaError
    """
    kinds = {"number" if is_number(v) else type(v).__name__ for v in periods.dropna()}
    if len(kinds) > 1:
        raise SchemaError(
            f"{table_name} table column {periods.name!r} mixes period types {sorted(kinds)}; "
            "use one format for every period"
        )
