from __future__ import annotations

from dataclasses import replace
from unittest.mock import MagicMock

import pytest
import requests

from bloom_translate.config.loader import Acts2Settings
from bloom_translate.translate.backends.acts2 import Acts2Backend
from bloom_translate.translate.errors import BackendError, TranslationTimeoutError

BASE = "https://acts2.example.org/api/v2/text_collections"


def _response(body=None, ok=True, status=200, text=""):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status
    resp.text = text
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


def _item(text=None, status="complete"):
    if text is None:
        return {"translations": []}
    return {"translations": [{"translation_status": status, "text": text}]}


@pytest.fixture()
def acts2_config(config_with_credentials):
    return replace(
        config_with_credentials,
        acts2=Acts2Settings(base_url=BASE, poll_interval_seconds=0.5, max_poll_attempts=3),
    )


@pytest.fixture()
def sleeps():
    return []


def _backend(config, session, sleeps):
    return Acts2Backend(config, session=session, sleep=sleeps.append)


def test_create_translate_poll(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [
        _response({"id": 17}),
        _response({}),
        _response([_item("Hola"), _item("Mundo")]),
    ]
    backend = _backend(acts2_config, session, sleeps)

    assert backend.translate_batch(["Hello", "World"], "es", "en") == ["Hola", "Mundo"]

    create, start, poll = session.request.call_args_list
    assert create.args == ("POST", BASE)
    assert create.kwargs["json"]["language"] == "eng"
    assert create.kwargs["json"]["texts"] == ["Hello", "World"]
    assert create.kwargs["headers"]["api_key"] == "acts2-secret"
    assert start.args == ("POST", f"{BASE}/17/translate")
    assert start.kwargs["params"] == {"target_language": "spa"}
    assert poll.args == ("GET", f"{BASE}/17/texts")
    assert poll.kwargs["params"] == {"include_translations": "true", "target_language": "spa"}
    assert sleeps == [0.5]


def test_keeps_polling_until_every_text_is_complete(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [
        _response({"id": "c1"}),
        _response({}),
        _response([_item("Hola"), _item("...", status="pending")]),
        _response([_item("Hola"), _item()]),
        _response([_item("Hola"), _item("Mundo")]),
    ]
    backend = _backend(acts2_config, session, sleeps)
    assert backend.translate_batch(["Hello", "World"], "es", "en") == ["Hola", "Mundo"]
    assert len(sleeps) == 3


def test_times_out_after_max_attempts(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [_response({"id": 1}), _response({})] + [
        _response([_item("Hola"), _item()]) for _ in range(3)
    ]
    backend = _backend(acts2_config, session, sleeps)
    with pytest.raises(TranslationTimeoutError, match="3 attempts"):
        backend.translate_batch(["Hello", "World"], "es", "en")
    assert len(sleeps) == 3
    assert session.request.call_count == 5


def test_timeout_is_a_backend_error():
    assert issubclass(TranslationTimeoutError, BackendError)


def test_blank_texts_are_not_sent(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [
        _response({"id": 2}),
        _response({}),
        _response([_item("Hola")]),
    ]
    backend = _backend(acts2_config, session, sleeps)
    assert backend.translate_batch(["", "Hello", "  "], "es", "en") == ["", "Hola", ""]
    assert session.request.call_args_list[0].kwargs["json"]["texts"] == ["Hello"]


def test_all_blank_makes_no_request(acts2_config, sleeps):
    session = MagicMock()
    backend = _backend(acts2_config, session, sleeps)
    assert backend.translate_batch(["", " "], "es", "en") == ["", ""]
    session.request.assert_not_called()


def test_http_error_uses_detail(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [
        _response({"detail": "Invalid API key"}, ok=False, status=401, text='{"detail": "Invalid API key"}'),
    ]
    backend = _backend(acts2_config, session, sleeps)
    with pytest.raises(BackendError, match="Failed to create text collection: Invalid API key"):
        backend.translate_batch(["Hello"], "es", "en")


def test_http_error_without_json_uses_body(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [
        _response({"id": 3}),
        _response(ValueError("no json"), ok=False, status=502, text="Bad Gateway"),
    ]
    backend = _backend(acts2_config, session, sleeps)
    with pytest.raises(BackendError, match="Failed to translate text collection: Bad Gateway"):
        backend.translate_batch(["Hello"], "es", "en")


def test_connection_error(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("refused")
    backend = _backend(acts2_config, session, sleeps)
    with pytest.raises(BackendError, match="refused"):
        backend.translate_batch(["Hello"], "es", "en")


def test_missing_collection_id(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [_response({"name": "x"})]
    backend = _backend(acts2_config, session, sleeps)
    with pytest.raises(BackendError, match="no id"):
        backend.translate_batch(["Hello"], "es", "en")


def test_non_json_success_body(acts2_config, sleeps):
    session = MagicMock()
    session.request.side_effect = [_response(ValueError("bad"), text="<html>")]
    backend = _backend(acts2_config, session, sleeps)
    with pytest.raises(BackendError, match="not JSON"):
        backend.translate_batch(["Hello"], "es", "en")
