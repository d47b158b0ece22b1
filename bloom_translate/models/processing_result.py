from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Run result models for the spreadsheet translator.

ColumnStat tracks one column operation; RunResult aggregates a whole run and
feeds the SUMMARY line.
"""


class ColumnStatus(Enum):
    """Outcome of one column operation.

    - TRANSLATED: translations committed to the document
    - SKIPPED: nothing to do (no candidate rows, or already complete)
    - FAILED: backend/model error, document left untouched for this column
    """
    TRANSLATED = "translated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ColumnStat:
    column_name: str
    status: ColumnStatus
    translated_cells: int = 0
    elapsed_seconds: float = 0.0
    error: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Aggregated results of one translation run."""
    translated_columns: int
    failed_columns: int
    skipped_columns: int
    translated_cells: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_path: Path | None = None  # None when nothing was written
    column_stats: list[ColumnStat] | None = None

    @property
    def attempted_columns(self) -> int:
        return self.translated_columns + self.failed_columns + self.skipped_columns
