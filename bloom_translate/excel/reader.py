from __future__ import annotations

from pathlib import Path

import pandas as pd

from bloom_translate.models.document import Row, TabularDocument

"""BloomBook sheet reader.

The first sheet row holds the column headers ("[row type]", "[en]",
"[fr-x-ai-google]", ...); every following row is a record. All cells are read
as text so numbers and "NA"-like strings reach the translator verbatim.
"""

DEFAULT_SHEET_NAME = "BloomBook"


class SpreadsheetReadError(Exception):
    """Raised when the input workbook cannot be read."""

class SheetNotFoundError(SpreadsheetReadError):
    """Raised when the workbook has no sheet with the expected name."""


def read_sheet_frame(path: Path, sheet_name: str = DEFAULT_SHEET_NAME) -> pd.DataFrame:
    """Read one sheet as a raw, headerless DataFrame of strings."""
    if not path.exists():
        raise SpreadsheetReadError(f"input file not found: {path}")
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:  # openpyxl raises a variety of zip / xml errors
        raise SpreadsheetReadError(f"cannot read workbook {path}: {e}") from e
    sheet_names = [str(n) for n in xls.sheet_names]
    if sheet_name not in sheet_names:
        raise SheetNotFoundError(
            f'sheet "{sheet_name}" not found in workbook. '
            f"Available sheets: {', '.join(sheet_names)}"
        )
    # ヘッダなしで生読み、NA 変換は無効化 (空セルは "")
    return xls.parse(sheet_name, header=None, dtype=str, keep_default_na=False, na_values=[])


def normalize_frame(df: pd.DataFrame) -> TabularDocument:
    """Turn a raw sheet DataFrame into a TabularDocument.

    Steps:
    1. First row becomes the header list (blank headers get __EMPTY_<n> names)
    2. Remaining rows become Row mappings; blank cells are left out of the mapping
    3. Rows with no content at all are dropped
    """
    if df.shape[0] == 0:
        return TabularDocument()
    headers: list[str] = []
    empty_count = 0
    for raw in df.iloc[0].tolist():
        name = "" if _is_na(raw) else str(raw).strip()
        if not name:
            name = f"__EMPTY_{empty_count}" if empty_count else "__EMPTY"
            empty_count += 1
        headers.append(name)

    rows: list[Row] = []
    for values in df.iloc[1:].itertuples(index=False, name=None):
        row: Row = {}
        for col, val in zip(headers, values, strict=False):
            if _is_na(val) or val == "":
                continue
            row[col] = val if isinstance(val, str) else str(val)
        if row:
            rows.append(row)
    return TabularDocument(headers=headers, rows=rows)


def read_document(path: Path, sheet_name: str = DEFAULT_SHEET_NAME) -> TabularDocument:
    return normalize_frame(read_sheet_frame(path, sheet_name))


def _is_na(value: object) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
