"""
Structural checks for the loaded workbook tables.

Public API:
- check_tables
"""

from .checks import check_tables

__all__ = ["check_tables"]
