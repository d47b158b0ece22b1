from __future__ import annotations

import re

from .base import TranslationBackend

"""Deterministic letter-reordering backend ("pig latin").

Used by tests and for offline dry runs: no credentials, no network.
"""

__all__ = [
    "PigLatinBackend",
    "to_pig_latin",
]

_WHITESPACE = re.compile(r"(\s+)")
_LEADING = re.compile(r"^[^a-zA-Z]*")
_TRAILING = re.compile(r"[^a-zA-Z]*$")


def _transform_word(word: str) -> str:
    leading = _LEADING.match(word).group(0)  # type: ignore[union-attr]
    rest = word[len(leading):]
    trailing = _TRAILING.search(rest).group(0)  # type: ignore[union-attr]
    letters = rest[: len(rest) - len(trailing)]
    if not letters:
        return word
    return f"{leading}{letters[1:]}{letters[0]}ay{trailing}"


def to_pig_latin(text: str) -> str:
    """Move each word's first letter to the end and append "ay".

    Punctuation around a word stays where it is; whitespace is kept verbatim.

    >>> to_pig_latin("Hello, World!")
    'elloHay, orldWay!'
    """
    if not text:
        return ""
    parts = _WHITESPACE.split(text)
    return "".join(p if not p or p.isspace() else _transform_word(p) for p in parts)


class PigLatinBackend(TranslationBackend):
    model = "piglatin"

    def translate_batch(self, texts: list[str], target_lang: str, source_lang: str) -> list[str]:
        return [to_pig_latin(t) for t in texts]
