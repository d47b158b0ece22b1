from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bloom_translate.config.loader import DEFAULT_ROW_TYPES, TranslateConfig
from bloom_translate.models.document import Row, TabularDocument, cell_text

"""Row-category policy: which rows hold end-user text.

Bloom exports label every row in a "[row type]" column. Only content rows
(book title, page content, page description) may be sent to a translation
backend; structural rows ("[topic]", image rows, the "Row type" label row
that carries language names) are never translated. A document without the
category column is unrestricted.
"""

__all__ = [
    "RowPolicy",
]


def _norm(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class RowPolicy:
    row_type_column: str = "[row type]"
    allowed_row_types: frozenset[str] = frozenset(_norm(t) for t in DEFAULT_ROW_TYPES)

    @classmethod
    def create(cls, row_type_column: str, allowed: Iterable[str]) -> RowPolicy:
        return cls(row_type_column=row_type_column, allowed_row_types=frozenset(_norm(t) for t in allowed))

    @classmethod
    def from_config(cls, config: TranslateConfig) -> RowPolicy:
        return cls.create(config.row_type_column, config.translatable_row_types)

    def applies_to(self, doc: TabularDocument) -> bool:
        return doc.has_column(self.row_type_column)

    def is_translatable(self, row: Row, restricted: bool) -> bool:
        """restricted: result of applies_to() for the row's document."""
        if not restricted:
            return True
        return _norm(cell_text(row, self.row_type_column)) in self.allowed_row_types
