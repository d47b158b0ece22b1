from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..errors import BackendError
from .base import TranslationBackend

"""Google Cloud Translation (v2 / Basic) backend.

Credentials are a service account's email plus private key, taken from the
environment (BLOOM_GOOGLE_TRANSLATION_SERVICE_ACCOUNT_EMAIL /
BLOOM_GOOGLE_TRANSLATION_SERVICE_PRIVATE_KEY). The key is usually pasted into
an env var with literal "\\n" sequences; those are turned back into newlines.
"""

__all__ = [
    "GoogleTranslateBackend",
]

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
# v2 API: at most 128 text segments per request
MAX_SEGMENTS_PER_REQUEST = 128

ClientFactory = Callable[[str, str], Any]


def _default_client_factory(email: str, private_key: str) -> Any:
    from google.cloud import translate_v2
    from google.oauth2 import service_account

    credentials = service_account.Credentials.from_service_account_info(
        {
            "type": "service_account",
            "client_email": email,
            "private_key": private_key,
            "token_uri": TOKEN_URI,
        }
    )
    return translate_v2.Client(credentials=credentials)


class GoogleTranslateBackend(TranslationBackend):
    model = "google"
    required_settings = (
        ("google_service_account_email", "BLOOM_GOOGLE_TRANSLATION_SERVICE_ACCOUNT_EMAIL"),
        ("google_private_key", "BLOOM_GOOGLE_TRANSLATION_SERVICE_PRIVATE_KEY"),
    )

    def __init__(self, config, client_factory: ClientFactory | None = None) -> None:
        super().__init__(config)
        self._client_factory = client_factory or _default_client_factory
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            creds = self.config.credentials
            private_key = (creds.google_private_key or "").replace("\\n", "\n")
            try:
                self._client = self._client_factory(
                    creds.google_service_account_email or "", private_key
                )
            except ValueError as e:
                # from_service_account_info rejects malformed keys with ValueError
                raise BackendError(f"invalid Google service account credentials: {e}") from e
        return self._client

    def translate_batch(self, texts: list[str], target_lang: str, source_lang: str) -> list[str]:
        from google.api_core import exceptions as google_exceptions
        from google.auth import exceptions as auth_exceptions

        client = self._get_client()
        batch_size = min(self.config.google.batch_size, MAX_SEGMENTS_PER_REQUEST)
        out: list[str] = []
        for start in range(0, len(texts), batch_size):
            chunk = texts[start:start + batch_size]
            logger.debug(f"google: translating {len(chunk)} texts {source_lang}->{target_lang}")
            try:
                result = client.translate(
                    chunk,
                    target_language=target_lang,
                    source_language=source_lang,
                    format_="text",
                )
            except (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
                raise BackendError(f"Google Translate request failed: {e}") from e
            if isinstance(result, dict):
                result = [result]
            try:
                out.extend(item["translatedText"] for item in result)
            except (KeyError, TypeError) as e:
                raise BackendError(f"malformed Google Translate response: {e}") from e
        return out
