from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from bloom_translate.config.loader import ConfigurationError, TranslateConfig

"""Abstract base class for translation backends.

A backend declares the credentials it needs as (attribute, env var) pairs so
the dispatcher can fail fast, naming the exact missing variable, before any
network activity.
"""

__all__ = [
    "TranslationBackend",
]


class TranslationBackend(ABC):
    """Interface for translation backends."""

    model: ClassVar[str]
    # (BackendCredentials attribute, environment variable name)
    required_settings: ClassVar[tuple[tuple[str, str], ...]] = ()

    def __init__(self, config: TranslateConfig) -> None:
        self.config = config

    @classmethod
    def check_configuration(cls, config: TranslateConfig) -> None:
        """Raise ConfigurationError naming the first missing credential."""
        for attr, env_var in cls.required_settings:
            if not getattr(config.credentials, attr):
                raise ConfigurationError(
                    f"Translating with {cls.model} requires the environment variable {env_var}. "
                    "After setting it, you may have to restart your terminal."
                )

    @abstractmethod
    def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str,
    ) -> list[str]:
        """Translate a batch of texts.

        Args:
            texts: strings to translate, in row order
            target_lang: target language code, e.g. "fr"
            source_lang: source language code, e.g. "en"

        Returns:
            Translated strings, same length and order as input.

        Raises:
            BackendError: on request failure or malformed response.
        """
        ...
