# src/delaycomp/validation/checks.py
"""
Structural checks ("emergency brake") for the normalized workbook tables.

Run once after loading and before any derivation. Missing metadata columns
are fatal. Conditions the pipeline tolerates (a category with no rows,
repeated (period, category) rows, operators without a display label) are
logged as warnings so a changed workbook layout is visible in the run log.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from delaycomp import config
from delaycomp.errors import SchemaError
from delaycomp.labels import unlabelled
from delaycomp.transforms.columns import TableSchema, derive_schema, ensure_comparable_periods


def _require_columns(df: pd.DataFrame, name: str, req) -> None:
    missing = sorted(set(req) - set(df.columns))
    if missing:
        raise SchemaError(f"{name} table missing required columns: {missing}")


def check_annual(logger, annual: pd.DataFrame) -> None:
    """
    Validate the annual table.
    Raises SchemaError on failure.
    """
    _require_columns(annual, "annual", [config.PERIOD_COLUMN, config.CATEGORY_COLUMN])
    ensure_comparable_periods(annual[config.PERIOD_COLUMN], "annual")

    keys = [config.PERIOD_COLUMN, config.CATEGORY_COLUMN]
    dup = annual.dropna(subset=keys).duplicated(subset=keys, keep=False)
    if dup.any():
        logger.warning(
            f"annual table has {int(dup.sum())} rows sharing a (period, category) pair"
        )

    categories = set(annual[config.CATEGORY_COLUMN].dropna())
    for key in (config.CLAIMS_RECEIVED, config.CLOSED_WITHIN_20_DAYS):
        if key not in categories:
            logger.warning(f"annual table has no rows for category {key!r}")

    logger.info("Annual table checks OK")


def check_periodic(logger, periodic: pd.DataFrame) -> None:
    """
    Validate the periodic table.
    Raises SchemaError on failure.
    """
    _require_columns(periodic, "periodic", [config.CATEGORY_COLUMN])

    if config.CLAIMS_RECEIVED not in set(periodic[config.CATEGORY_COLUMN].dropna()):
        logger.warning(f"periodic table has no rows for category {config.CLAIMS_RECEIVED!r}")

    logger.info("Periodic table checks OK")


def check_tables(
    logger,
    annual: pd.DataFrame,
    periodic: pd.DataFrame,
    *,
    a_schema: Optional[TableSchema] = None,
    p_schema: Optional[TableSchema] = None,
) -> None:
    """
    Run all structural checks on the normalized tables.

    The schemas built at load time are reused when given.
    """
    check_annual(logger, annual)
    check_periodic(logger, periodic)

    a_schema = a_schema or derive_schema(annual, "annual")
    p_schema = p_schema or derive_schema(periodic, "periodic")
    operators = list(a_schema.operator_columns) + list(p_schema.operator_columns)
    missing_labels = unlabelled(operators)
    if missing_labels:
        logger.warning(f"Operators without display label (raw name used): {missing_labels}")
