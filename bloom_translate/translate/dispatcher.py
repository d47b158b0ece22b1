from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from bloom_translate.config.loader import ConfigurationError, TranslateConfig
from bloom_translate.models.column_tag import SUPPORTED_MODELS

from .backends import Acts2Backend, GoogleTranslateBackend, PigLatinBackend, TranslationBackend
from .errors import BackendError, UnsupportedModelError

"""Translation dispatcher: target tag -> backend.

The model comes from the target tag ("fr-x-ai-google" -> "google") and selects
an implementation from a lookup table. Credential preconditions are checked
before a backend is built, so a missing variable never costs a network call.
"""

__all__ = [
    "DEFAULT_BACKENDS",
    "BackendFactory",
    "TranslationDispatcher",
    "parse_model_from_tag",
]

logger = logging.getLogger(__name__)

BackendFactory = Callable[[TranslateConfig], TranslationBackend]

DEFAULT_BACKENDS: dict[str, type[TranslationBackend]] = {
    "acts2": Acts2Backend,
    "google": GoogleTranslateBackend,
    "piglatin": PigLatinBackend,
}


def parse_model_from_tag(target_tag: str) -> str | None:
    """Return the first supported model whose "-<model>" occurs in the tag."""
    lowered = target_tag.lower()
    for model in SUPPORTED_MODELS:
        if f"-{model}" in lowered:
            return model
    return None


class TranslationDispatcher:
    """Route text batches to the backend named by a target tag.

    backends maps a model identifier to a backend class (or any factory taking
    the TranslateConfig). Backend instances are cached per model for the run.
    """

    def __init__(
        self,
        config: TranslateConfig,
        backends: Mapping[str, type[TranslationBackend] | BackendFactory] | None = None,
    ) -> None:
        self.config = config
        self._factories = dict(DEFAULT_BACKENDS if backends is None else backends)
        self._instances: dict[str, TranslationBackend] = {}

    def _backend(self, model: str) -> TranslationBackend:
        if model not in self._instances:
            factory = self._factories.get(model)
            if factory is None:
                raise UnsupportedModelError(f"Unknown translation model {model}")
            check = getattr(factory, "check_configuration", None)
            if check is not None:
                check(self.config)
            self._instances[model] = factory(self.config)
        return self._instances[model]

    def translate(
        self, texts: Sequence[str], target_tag: str, source_lang: str | None = None
    ) -> list[str]:
        """Translate texts into the language/model encoded by target_tag.

        Raises:
            UnsupportedModelError: no known model in the tag
            ConfigurationError: malformed tag or missing backend credentials
            BackendError: backend failure, or a result of the wrong length
        """
        if not target_tag:
            raise ConfigurationError("Target language code is required")
        model = parse_model_from_tag(target_tag)
        if model is None:
            raise UnsupportedModelError(
                f"No supported translation model found in language code: {target_tag}"
            )
        language_code = target_tag.split("-")[0]
        if not language_code:
            raise ConfigurationError(f"Invalid language code format: {target_tag}")

        if not texts:
            return []

        backend = self._backend(model)
        source = source_lang or self.config.source_language
        logger.debug(f"dispatch: {len(texts)} texts -> {model} ({source}->{language_code})")
        result = backend.translate_batch(list(texts), language_code, source)
        if len(result) != len(texts):
            raise BackendError(
                f"{model} returned {len(result)} translations for {len(texts)} texts"
            )
        return list(result)
