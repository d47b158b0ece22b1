from __future__ import annotations

import re

from bloom_translate.models.column_tag import SUPPORTED_MODELS, ColumnTag

"""Header tag parsing for machine-translated columns.

Grammar (whole header, anchored):

    "[" <languageCode> "-" "x" "-" "ai" "-" <model> "]"

The bracket payload must split on "-" into exactly four segments, so language
codes with their own subtags ("zh-Hant") are not recognised. "x", "ai" and the
model compare case-insensitively; the language code keeps its casing.
"""

__all__ = [
    "column_name_for_tag",
    "parse_tag",
    "source_column_name",
]

_BRACKETED = re.compile(r"\[([^\[\]]*)\]")


def parse_tag(header: object) -> ColumnTag | None:
    """Parse a column header into a ColumnTag, or None when it is not an AI column.

    Total: never raises, whatever the input.

    >>> parse_tag("[fr-x-AI-Google]")
    ColumnTag(language_code='fr', model='google')
    >>> parse_tag("[fr]-x-ai-google") is None
    True
    """
    if not isinstance(header, str):
        return None
    m = _BRACKETED.fullmatch(header)
    if m is None:
        return None
    segments = m.group(1).split("-")
    if len(segments) != 4:
        return None
    language_code, x, ai, model = segments
    if not language_code or x.lower() != "x" or ai.lower() != "ai":
        return None
    model = model.lower()
    if model not in SUPPORTED_MODELS:
        return None
    return ColumnTag(language_code=language_code, model=model)


def source_column_name(source_lang: str) -> str:
    return f"[{source_lang}]"


def column_name_for_tag(tag: str) -> str:
    """"fr-x-ai-google" -> "[fr-x-ai-google]"."""
    return f"[{tag}]"
