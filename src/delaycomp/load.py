"""
Workbook loading.

Reads the two worksheets of the delay-compensation workbook with pandas
(openpyxl engine for .xlsx), normalizes their headers and derives the table
schemas once:

    wb = load_workbook(logger, "Delay_TrainClaim.xlsx")
    wb.annual, wb.annual_schema, wb.periodic, wb.periodic_schema

The workbook is opened once. A missing file, an unreadable file or a missing
worksheet raises WorkbookLoadError; colliding headers (including repeated
identical headers) raise ColumnCollisionError.
"""

from __future__ import annotations

import os
import zipfile
from dataclasses import dataclass
from typing import List, Tuple, Union

import pandas as pd

from delaycomp import config
from delaycomp.errors import WorkbookLoadError
from delaycomp.transforms.columns import TableSchema, derive_schema, normalize_columns


PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class NormalizedWorkbook:
    annual: pd.DataFrame
    periodic: pd.DataFrame
    annual_schema: TableSchema
    periodic_schema: TableSchema


def _raw_headers(xl: pd.ExcelFile, sheet: str) -> List[str]:
    # pandas renames repeated headers ("X", "X.1"); read them verbatim instead
    first = xl.parse(sheet, header=None, nrows=1)
    if first.empty:
        return []
    return [
        f"Unnamed: {i}" if pd.isna(h) else h
        for i, h in enumerate(first.iloc[0].tolist())
    ]


def _parse_sheet(xl: pd.ExcelFile, sheet: str, path: PathLike) -> pd.DataFrame:
    df = xl.parse(sheet)
    headers = _raw_headers(xl, sheet)
    # data cells to the right of the last header get positional names
    headers += [f"Unnamed: {i}" for i in range(len(headers), len(df.columns))]
    if len(headers) != len(df.columns):
        raise WorkbookLoadError(
            f"worksheet {sheet!r} of {os.fspath(path)}: header row has {len(headers)} cells, "
            f"table has {len(df.columns)} columns"
        )
    df.columns = headers
    return df


def read_sheets(path: PathLike) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Read the raw annual and periodic worksheets.

    Returns
    -------
    (annual_raw, periodic_raw)
        DataFrames with the headers exactly as written in the workbook,
        repeated headers included.
    """
    if not os.path.isfile(path):
        raise WorkbookLoadError(f"workbook not found: {os.fspath(path)}")

    try:
        xl = pd.ExcelFile(path)
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        raise WorkbookLoadError(f"cannot read workbook {os.fspath(path)}: {exc}") from exc

    with xl:
        missing = [s for s in (config.ANNUAL_SHEET, config.PERIODIC_SHEET) if s not in xl.sheet_names]
        if missing:
            raise WorkbookLoadError(
                f"workbook {os.fspath(path)} missing worksheets: {missing} "
                f"(found {xl.sheet_names})"
            )
        annual = _parse_sheet(xl, config.ANNUAL_SHEET, path)
        periodic = _parse_sheet(xl, config.PERIODIC_SHEET, path)

    return annual, periodic


def load_workbook(logger, path: PathLike) -> NormalizedWorkbook:
    """
    Read both worksheets, normalize their column names and derive their schemas.
    """
    annual_raw, periodic_raw = read_sheets(path)
    logger.info(
        f"Workbook loaded: annual={annual_raw.shape[0]}x{annual_raw.shape[1]}, "
        f"periodic={periodic_raw.shape[0]}x{periodic_raw.shape[1]}"
    )

    annual = normalize_columns(annual_raw, "annual")
    periodic = normalize_columns(periodic_raw, "periodic")

    a_schema = derive_schema(annual, "annual", require_period=True)
    p_schema = derive_schema(periodic, "periodic")
    logger.info(
        f"Column names normalized: annual={len(a_schema.operator_columns)} operators, "
        f"periodic={len(p_schema.operator_columns)} operators"
    )

    return NormalizedWorkbook(annual, periodic, a_schema, p_schema)
