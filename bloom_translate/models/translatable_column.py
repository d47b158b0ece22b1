from __future__ import annotations

from dataclasses import dataclass

from .column_tag import ColumnTag

"""TranslatableColumn: scanner output, recomputed on every run."""

__all__ = [
    "TranslatableColumn",
]


@dataclass(frozen=True)
class TranslatableColumn:
    column_name: str  # header exactly as found in the sheet
    language_code: str
    model: str
    has_missing_translations: bool

    @property
    def tag(self) -> str:
        """Canonical tag used to request translations for this column."""
        return ColumnTag(self.language_code, self.model).tag
