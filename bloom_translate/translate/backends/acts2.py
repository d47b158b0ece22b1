from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import requests

from ..errors import BackendError, TranslationTimeoutError
from ..language_codes import to_iso639_3
from .base import TranslationBackend

"""ACTS2 terminology-aware translation backend.

The service works on "text collections":

1. POST {base}                       create a collection holding the source texts
2. POST {base}/{id}/translate        start translation into the target language
3. GET  {base}/{id}/texts            poll until every text reports "complete"

Polling is a bounded loop: sleep poll_interval_seconds, fetch, and give up
with TranslationTimeoutError after max_poll_attempts. A partially complete
collection is never returned.
"""

__all__ = [
    "Acts2Backend",
]

logger = logging.getLogger(__name__)


def _error_detail(response: requests.Response) -> str:
    text = response.text
    try:
        body = response.json()
    except ValueError:
        return text
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return text


def _completed_text(item: Any) -> str | None:
    if not isinstance(item, dict):
        return None
    for t in item.get("translations") or []:
        if isinstance(t, dict) and t.get("translation_status") == "complete" and t.get("text"):
            return t["text"]
    return None


class Acts2Backend(TranslationBackend):
    model = "acts2"
    required_settings = (("acts2_key", "BLOOM_ACTS2_KEY"),)

    def __init__(
        self,
        config,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(config)
        self._session = session or requests.Session()
        self._sleep = sleep

    @property
    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "api_key": self.config.credentials.acts2_key or ""}

    def _request(self, method: str, url: str, what: str, **kwargs: Any) -> Any:
        try:
            resp = self._session.request(
                method,
                url,
                headers=self._headers,
                timeout=self.config.acts2.request_timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as e:
            raise BackendError(f"Failed to {what}: {e}") from e
        if not resp.ok:
            raise BackendError(f"Failed to {what}: {_error_detail(resp)}")
        try:
            return resp.json()
        except ValueError as e:
            raise BackendError(f"Failed to {what}: response is not JSON") from e

    def translate_batch(self, texts: list[str], target_lang: str, source_lang: str) -> list[str]:
        # 空文字は API エラーになるので送らない (位置は保持)
        positions = [i for i, t in enumerate(texts) if t.strip()]
        if not positions:
            return ["" for _ in texts]

        settings = self.config.acts2
        target = to_iso639_3(target_lang)
        collection = self._request(
            "POST",
            settings.base_url,
            "create text collection",
            json={
                "name": f"Translation {datetime.now(UTC).isoformat()}",
                "language": to_iso639_3(source_lang),
                "texts": [texts[i] for i in positions],
            },
        )
        collection_id = collection.get("id") if isinstance(collection, dict) else None
        if collection_id is None:
            raise BackendError("Failed to create text collection: response has no id")
        logger.debug(f"acts2: collection {collection_id} created with {len(positions)} texts")

        self._request(
            "POST",
            f"{settings.base_url}/{collection_id}/translate",
            "translate text collection",
            params={"target_language": target},
        )

        for attempt in range(1, settings.max_poll_attempts + 1):
            self._sleep(settings.poll_interval_seconds)
            items = self._request(
                "GET",
                f"{settings.base_url}/{collection_id}/texts",
                "get translations",
                params={"include_translations": "true", "target_language": target},
            )
            translated = self._collect(items, len(positions))
            if translated is not None:
                out = ["" for _ in texts]
                for pos, text in zip(positions, translated, strict=True):
                    out[pos] = text
                return out
            logger.debug(f"acts2: attempt {attempt}/{settings.max_poll_attempts} incomplete")

        raise TranslationTimeoutError(
            "Translation timed out - translations did not complete within "
            f"{settings.max_poll_attempts} attempts"
        )

    @staticmethod
    def _collect(items: Any, expected: int) -> list[str] | None:
        """All completed texts in submission order, or None while any is pending."""
        if not isinstance(items, list) or len(items) < expected:
            return None
        out: list[str] = []
        for item in items[:expected]:
            text = _completed_text(item)
            if text is None:
                return None
            out.append(text)
        return out
