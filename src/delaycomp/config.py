"""
Global configuration for delaycomp.

Policy-level constants shared by loading, reshaping and alignment:
worksheet names, the metadata columns of the normalized tables, the category
keys that select each derived table, and the national-aggregate operator.

This module MUST NOT contain any computation logic.
"""

from __future__ import annotations


# =============================================================================
# Workbook layout
# =============================================================================

ANNUAL_SHEET = "Annual_Data"
PERIODIC_SHEET = "Periodic_Data"


# =============================================================================
# Column normalization
# =============================================================================

# Replaces every run of non-alphanumeric characters in a header
COLUMN_SEPARATOR = "_"


# =============================================================================
# Metadata columns (normalized names)
# =============================================================================

# Reporting period; present in the annual table only
PERIOD_COLUMN = "time_period"

# Row-type discriminator; present in both tables
CATEGORY_COLUMN = "delay_compensation"

# Name of the operator column in long-format tables
OPERATOR_COLUMN = "operator"


# =============================================================================
# Category keys (exact, case-sensitive)
# =============================================================================

CLAIMS_RECEIVED = "Volume of claims received within period"

CLOSED_WITHIN_20_DAYS = "Percentage closed within 20 working days"


# =============================================================================
# Operators
# =============================================================================

# Whole-network total; excluded from per-operator efficiency comparisons
NATIONAL_AGGREGATE = "great_britain"
