"""Domain models for the BloomBook spreadsheet translator."""

from .column_tag import SUPPORTED_MODELS, ColumnTag
from .document import Row, TabularDocument, cell_text, is_blank
from .error_record import ErrorRecord
from .processing_result import ColumnStat, ColumnStatus, RunResult
from .translatable_column import TranslatableColumn

__all__ = [
    # Sheet models
    "Row",
    "TabularDocument",
    "cell_text",
    "is_blank",
    # Column models
    "SUPPORTED_MODELS",
    "ColumnTag",
    "TranslatableColumn",
    # Result models
    "ColumnStat",
    "ColumnStatus",
    "ErrorRecord",
    "RunResult",
]
