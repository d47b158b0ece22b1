from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

"""TabularDocument model: one BloomBook sheet held in memory.

The reader builds it once per run, the column synchronizer mutates it in place,
and the writer serializes it once at the end.
"""

__all__ = [
    "Row",
    "TabularDocument",
    "cell_text",
    "is_blank",
]

Row = dict[str, Any]


def cell_text(row: Row, column: str) -> str:
    """Return the cell as text; absent or None cells read as ""."""
    value = row.get(column)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def is_blank(row: Row, column: str) -> bool:
    # 空白のみのセルも空扱い
    return not cell_text(row, column).strip()


@dataclass
class TabularDocument:
    """Header list plus row mappings (header -> cell value).

    Row 0 carries language display names rather than content. A row may lack a
    key for a column that does not exist yet or whose cell was blank.
    """
    headers: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    def has_column(self, name: str) -> bool:
        return name in self.headers

    def column_index(self, name: str) -> int:
        return self.headers.index(name)

    def snapshot(self) -> TabularDocument:
        return TabularDocument(headers=list(self.headers), rows=copy.deepcopy(self.rows))
