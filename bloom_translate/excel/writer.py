from __future__ import annotations

import errno
from pathlib import Path

import pandas as pd

from bloom_translate.config.loader import ConfigurationError
from bloom_translate.models.document import TabularDocument, cell_text

from .reader import DEFAULT_SHEET_NAME

"""BloomBook sheet writer.

prepare_output_path() runs before any translation work so an unwritable
target (typically a file held open by Excel) fails the run early.
write_document() serializes the committed header order.
"""


class SpreadsheetWriteError(Exception):
    """Raised when the output workbook cannot be written."""


def _busy_message(path: Path) -> str:
    return (
        f"Cannot write to {path} because it is being used by another program "
        "(probably Excel). Please close the file and try again."
    )


def prepare_output_path(path: Path, input_path: Path | None = None) -> None:
    """Remove any stale output file and prove the location is writable.

    When path is the input workbook itself it is kept (it is only replaced once
    something was translated) and writability is checked with a scratch file
    next to it.

    Raises:
        ConfigurationError: when the stale file cannot be removed or a probe
            file cannot be created in its place.
    """
    overwrites_input = input_path is not None and path.resolve() == input_path.resolve()
    check_path = path.with_name(f".{path.name}.write-check") if overwrites_input else path
    try:
        if not overwrites_input and path.exists():
            path.unlink()
        with check_path.open("wb"):
            pass
        check_path.unlink()
    except OSError as e:
        raise ConfigurationError(
            f"Output file {path} is not writable. Make sure it isn't open in another program. ({e})"
        ) from e


def document_frame(doc: TabularDocument) -> pd.DataFrame:
    records = [[cell_text(row, h) for h in doc.headers] for row in doc.rows]
    return pd.DataFrame(records, columns=doc.headers)


def _keep_formula_like_text(sheet) -> None:
    # openpyxl は "=" で始まる文字列を数式として保存するので文字列型に戻す
    for row in sheet.iter_rows():
        for cell in row:
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"


def write_document(doc: TabularDocument, path: Path, sheet_name: str = DEFAULT_SHEET_NAME) -> Path:
    """Write the document as a single-sheet workbook, replacing any existing file."""
    df = document_frame(doc)
    try:
        if path.exists():
            path.unlink()
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, header=True, index=False)
            _keep_formula_like_text(writer.sheets[sheet_name])
    except OSError as e:
        if isinstance(e, PermissionError) or e.errno in (errno.EBUSY, errno.EACCES):
            raise SpreadsheetWriteError(_busy_message(path)) from e
        raise SpreadsheetWriteError(f"cannot write {path}: {e}") from e
    return path
