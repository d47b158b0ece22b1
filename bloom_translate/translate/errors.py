from __future__ import annotations

"""Translation error taxonomy.

ConfigurationError lives in bloom_translate.config.loader; it is re-exported
here because missing backend credentials surface through the dispatcher.
"""

from bloom_translate.config.loader import ConfigurationError

__all__ = [
    "BackendError",
    "ConfigurationError",
    "TranslationTimeoutError",
    "UnsupportedModelError",
]


class UnsupportedModelError(Exception):
    """The target tag names no implemented translation model."""


class BackendError(Exception):
    """A backend rejected the request or returned a malformed response."""


class TranslationTimeoutError(BackendError):
    """An asynchronous backend did not complete within its polling budget."""
