"""
Build the four derived tables behind the composite figure.

Inputs are the normalized workbook tables:

    annual_df:   ['time_period','delay_compensation', <operator columns>, ...]
    periodic_df: ['delay_compensation', <operator columns>, ...]

Outputs (collected in `FigureTables`):

    national_trend:     ['time_period','claims']              (great_britain only)
    operator_claims:    ['operator','claims']                 (latest period)
    periodic_claims:    ['operator','claims']                 (every periodic row)
    volume_efficiency:  ['time_period','operator','claims','closed_pct']

Pipeline (high level)
---------------------
1) Derive the explicit schema of each table (metadata vs operator columns)
2) Resolve the latest reporting period of the annual table
3) Filter by category and reshape wide rows to long records
4) Align claim volumes with closure percentages, drop the national aggregate

An empty category selection flows through as an empty table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd

from delaycomp import config
from .align import align_claims_efficiency
from .columns import TableSchema, derive_schema, ensure_comparable_periods
from .reshape import filter_by_category, reshape_long


def annual_schema(annual_df: pd.DataFrame) -> TableSchema:
    return derive_schema(annual_df, "annual", require_period=True)


def periodic_schema(periodic_df: pd.DataFrame) -> TableSchema:
    return derive_schema(periodic_df, "periodic")


def latest_period(annual_df: pd.DataFrame, period_column: str = config.PERIOD_COLUMN) -> Optional[Any]:
    """Most recent reporting period across all categories, or None if there is none."""
    ensure_comparable_periods(annual_df[period_column])
    periods = annual_df[period_column].dropna()
    if periods.empty:
        return None
    return periods.max()


def _category_long(
    df: pd.DataFrame,
    schema: TableSchema,
    category: str,
    value_name: str,
    *,
    with_period: bool,
) -> pd.DataFrame:
    rows = filter_by_category(df, category, schema.category_column)
    keys = list(schema.key_columns) if with_period else []
    exclude = set(schema.metadata_columns) - set(keys)
    return reshape_long(rows, keys, exclude, value_name=value_name)


def national_trend(
    annual_df: pd.DataFrame,
    schema: Optional[TableSchema] = None,
    operator: str = config.NATIONAL_AGGREGATE,
) -> pd.DataFrame:
    """
    Claims received per period for the national aggregate, ordered by period.

    Returns ['time_period','claims'].
    """
    schema = schema or annual_schema(annual_df)
    long = _category_long(annual_df, schema, config.CLAIMS_RECEIVED, "claims", with_period=True)
    out = long.loc[long[config.OPERATOR_COLUMN] == operator, [schema.period_column, "claims"]]
    ensure_comparable_periods(out[schema.period_column])
    return out.sort_values(schema.period_column, kind="mergesort").reset_index(drop=True)


def operator_claims_for_period(
    annual_df: pd.DataFrame,
    period,
    schema: Optional[TableSchema] = None,
) -> pd.DataFrame:
    """
    Claims received by each operator in one period.

    The national aggregate is kept. Returns ['operator','claims'].
    """
    schema = schema or annual_schema(annual_df)
    rows = annual_df.loc[annual_df[schema.period_column] == period]
    return _category_long(rows, schema, config.CLAIMS_RECEIVED, "claims", with_period=False)


def periodic_claims(periodic_df: pd.DataFrame, schema: Optional[TableSchema] = None) -> pd.DataFrame:
    """
    Claims received per operator across every periodic row.

    Several rows of the category are separate reporting periods; their records
    are concatenated. Returns ['operator','claims'].
    """
    schema = schema or periodic_schema(periodic_df)
    return _category_long(periodic_df, schema, config.CLAIMS_RECEIVED, "claims", with_period=False)


def volume_vs_efficiency(annual_df: pd.DataFrame, schema: Optional[TableSchema] = None) -> pd.DataFrame:
    """
    Claim volume against the share of claims closed within 20 working days.

    Returns ['time_period','operator','claims','closed_pct'] without the
    national aggregate; closed_pct is NaN where no efficiency value exists.
    """
    schema = schema or annual_schema(annual_df)
    claims = _category_long(annual_df, schema, config.CLAIMS_RECEIVED, "claims", with_period=True)
    efficiency = _category_long(
        annual_df, schema, config.CLOSED_WITHIN_20_DAYS, "closed_pct", with_period=True
    )
    return align_claims_efficiency(
        claims,
        efficiency,
        keys=(schema.period_column, config.OPERATOR_COLUMN),
    )


@dataclass(frozen=True)
class FigureTables:
    latest_period: Optional[Any]
    national_trend: pd.DataFrame
    operator_claims: pd.DataFrame
    periodic_claims: pd.DataFrame
    volume_efficiency: pd.DataFrame


def build_figure_tables(
    logger,
    annual_df: pd.DataFrame,
    periodic_df: pd.DataFrame,
    *,
    a_schema: Optional[TableSchema] = None,
    p_schema: Optional[TableSchema] = None,
) -> FigureTables:
    """
    Derive every table the composite figure needs from the normalized workbook.

    Pass the schemas built at load time; they are derived here only when absent.
    """
    a_schema = a_schema or annual_schema(annual_df)
    p_schema = p_schema or periodic_schema(periodic_df)

    latest = latest_period(annual_df, a_schema.period_column)
    logger.info(f"Latest reporting period: {latest}")

    trend = national_trend(annual_df, a_schema)
    bars = operator_claims_for_period(annual_df, latest, a_schema)
    periodic = periodic_claims(periodic_df, p_schema)
    scatter = volume_vs_efficiency(annual_df, a_schema)

    for label, df in [
        ("national trend", trend),
        ("operator claims", bars),
        ("periodic claims", periodic),
        ("volume vs efficiency", scatter),
    ]:
        if df.empty:
            logger.warning(f"Derived table '{label}' is empty")
        else:
            logger.info(f"Derived table '{label}': {len(df)} rows")

    return FigureTables(
        latest_period=latest,
        national_trend=trend,
        operator_claims=bars,
        periodic_claims=periodic,
        volume_efficiency=scatter,
    )
