"""
Alignment of claim volumes with processing efficiency.

Input (both long format, see reshape.py):

    claims_df:     ['time_period','operator','claims']
    efficiency_df: ['time_period','operator','closed_pct']

Output:

    joined_df: ['time_period','operator','claims','closed_pct']

Left-outer on (time_period, operator): every claims record survives exactly
once; a missing efficiency value stays NaN. The national aggregate is removed
after matching.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from delaycomp import config
from delaycomp.errors import JoinKeyCollisionError, SchemaError


def _ensure_columns(df: pd.DataFrame, req: Sequence[str], side: str) -> None:
    missing = sorted(set(req) - set(df.columns))
    if missing:
        raise SchemaError(f"{side} table missing required columns: {missing}", stage="align")


def _ensure_unique_keys(df: pd.DataFrame, keys: Sequence[str], side: str) -> None:
    dup = df.duplicated(subset=list(keys), keep=False)
    if dup.any():
        sample = df.loc[dup, list(keys)].drop_duplicates().head(5).to_dict("records")
        raise JoinKeyCollisionError(
            f"{side} table has {int(dup.sum())} rows sharing a join key; e.g. {sample}"
        )


def drop_operator(
    df: pd.DataFrame,
    operator: str = config.NATIONAL_AGGREGATE,
    operator_column: str = config.OPERATOR_COLUMN,
) -> pd.DataFrame:
    """Remove every record of one operator (default: the national aggregate)."""
    return df.loc[df[operator_column] != operator].reset_index(drop=True)


def align_claims_efficiency(
    claims_df: pd.DataFrame,
    efficiency_df: pd.DataFrame,
    *,
    keys: Sequence[str] = (config.PERIOD_COLUMN, config.OPERATOR_COLUMN),
    drop_aggregate: str = config.NATIONAL_AGGREGATE,
) -> pd.DataFrame:
    """
    Left-join efficiency values onto claim volumes.

    Keys match by equality only; a null key never matches, so left rows with a
    null period or operator keep a NaN efficiency value.

    Raises
    ------
    SchemaError
        If a key column is missing, or both sides carry the same value column.
    JoinKeyCollisionError
        If `efficiency_df` holds more than one row for some key. The match
        would be ambiguous, so no row is picked.
    """
    keys = list(keys)
    left_value = [c for c in claims_df.columns if c not in keys]
    right_value = [c for c in efficiency_df.columns if c not in keys]
    _ensure_columns(claims_df, keys, "claims")
    _ensure_columns(efficiency_df, keys, "efficiency")

    overlap = sorted(set(left_value) & set(right_value))
    if overlap:
        raise SchemaError(
            f"claims and efficiency tables share value columns {overlap}; rename one side",
            stage="align",
        )

    left = claims_df.reset_index(drop=True)
    # null keys are not equal to each other; they cannot be matched
    right = efficiency_df.dropna(subset=keys)[keys + right_value]
    _ensure_unique_keys(right, keys, "efficiency")

    # pandas refuses to merge an empty object key with a numeric one
    if left.empty or right.empty:
        joined = left.copy()
        for c in right_value:
            joined[c] = pd.Series(float("nan"), index=joined.index, dtype="float64")
    else:
        joined = left.merge(right, how="left", on=keys, validate="many_to_one", sort=False)

    joined = joined[keys + left_value + right_value]
    return drop_operator(joined, drop_aggregate, operator_column=keys[-1])
