from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per column operation that failed (backend rejection, polling
timeout, unsupported model, missing source column). Records carry no row
number: failures are all-or-nothing per column.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: spreadsheet filename being processed
        column: target column header, e.g. "[fr-x-ai-google]"
        error_type: error classification in UPPER_SNAKE_CASE format
        message: backend or validation message
    """
    timestamp: str  # ISO8601 UTC
    file: str
    column: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, column: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            column=column,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
