from __future__ import annotations

import pytest

from bloom_translate.models import ColumnTag, TabularDocument, TranslatableColumn, cell_text, is_blank


def test_column_tag_names():
    tag = ColumnTag("fr", "google")
    assert tag.tag == "fr-x-ai-google"
    assert tag.column_name == "[fr-x-ai-google]"


def test_translatable_column_tag_is_canonical():
    col = TranslatableColumn("[FR-X-AI-Google]", "FR", "google", True)
    assert col.tag == "FR-x-ai-google"


@pytest.mark.parametrize(
    "row, expected",
    [({}, ""), ({"[en]": None}, ""), ({"[en]": 3}, "3"), ({"[en]": " Hi "}, " Hi ")],
)
def test_cell_text(row, expected):
    assert cell_text(row, "[en]") == expected


def test_is_blank_treats_whitespace_as_empty():
    assert is_blank({"[en]": "   "}, "[en]")
    assert is_blank({}, "[en]")
    assert not is_blank({"[en]": "x"}, "[en]")


def test_snapshot_is_independent():
    doc = TabularDocument(headers=["[en]"], rows=[{"[en]": "a"}])
    snap = doc.snapshot()
    doc.headers.append("[fr]")
    doc.rows[0]["[fr]"] = "b"
    assert snap.headers == ["[en]"]
    assert snap.rows == [{"[en]": "a"}]
    assert doc.has_column("[fr]") and doc.column_index("[fr]") == 1
