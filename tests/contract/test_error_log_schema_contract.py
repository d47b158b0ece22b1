from __future__ import annotations

import json
from pathlib import Path

import pytest

from bloom_translate.cli import main as cli_main
from bloom_translate.translate.backends.base import TranslationBackend
from bloom_translate.translate.dispatcher import DEFAULT_BACKENDS
from bloom_translate.translate.errors import TranslationTimeoutError

"""Error log contract: JSON Lines, fixed keys, one line per failed column."""

EXPECTED_KEYS = {"timestamp", "file", "column", "error_type", "message"}


class SlowBackend(TranslationBackend):
    model = "acts2"

    def translate_batch(self, texts, target_lang, source_lang):
        raise TranslationTimeoutError("translations did not complete within 30 attempts")


@pytest.fixture()
def slow_acts2(monkeypatch):
    monkeypatch.setitem(DEFAULT_BACKENDS, "acts2", SlowBackend)


def test_error_log_lines(temp_workdir: Path, write_bloom_workbook, slow_acts2, capsys):
    book = write_bloom_workbook(
        temp_workdir / "data" / "book.xlsx",
        [
            ["[row type]", "[en]", "[fr-x-ai-acts2]", "[de-x-ai-acts2]"],
            ["Row type", "English", "French", "German"],
            ["[page content]", "Hello", None, None],
        ],
    )
    assert cli_main([str(book)]) == 2
    out = capsys.readouterr().out
    [log_file] = list((temp_workdir / "logs").glob("errors-*.log"))
    assert f"Error details written to: {log_file}" in out

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [r["column"] for r in records] == ["[fr-x-ai-acts2]", "[de-x-ai-acts2]"]
    for r in records:
        assert set(r.keys()) == EXPECTED_KEYS
        assert r["file"] == "book.xlsx"
        assert r["error_type"] == "TRANSLATION_TIMEOUT"
        assert r["timestamp"].endswith("Z")


def test_no_log_file_on_success(temp_workdir: Path, write_bloom_workbook):
    book = write_bloom_workbook(
        temp_workdir / "data" / "book.xlsx",
        [["[en]", "[es-x-ai-piglatin]"], ["English", "Spanish"], ["Hello", None]],
    )
    assert cli_main([str(book)]) == 0
    assert not (temp_workdir / "logs").exists()
