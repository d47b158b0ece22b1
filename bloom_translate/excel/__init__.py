from .reader import DEFAULT_SHEET_NAME, SheetNotFoundError, SpreadsheetReadError, read_document
from .writer import SpreadsheetWriteError, prepare_output_path, write_document

__all__ = [
    "DEFAULT_SHEET_NAME",
    "SheetNotFoundError",
    "SpreadsheetReadError",
    "SpreadsheetWriteError",
    "prepare_output_path",
    "read_document",
    "write_document",
]
