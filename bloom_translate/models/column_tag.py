from __future__ import annotations

from dataclasses import dataclass

"""ColumnTag model parsed from AI column headers such as "[fr-x-ai-google]"."""

__all__ = [
    "SUPPORTED_MODELS",
    "ColumnTag",
]

# 検出順 (dispatcher の部分一致判定もこの順)
SUPPORTED_MODELS: tuple[str, ...] = ("acts2", "google", "piglatin")


@dataclass(frozen=True)
class ColumnTag:
    language_code: str  # original casing preserved
    model: str  # lowercase, member of SUPPORTED_MODELS

    @property
    def tag(self) -> str:
        return f"{self.language_code}-x-ai-{self.model}"

    @property
    def column_name(self) -> str:
        return f"[{self.tag}]"
