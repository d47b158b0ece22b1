from __future__ import annotations

import logging

from bloom_translate.config.loader import ConfigurationError
from bloom_translate.models.document import TabularDocument, is_blank
from bloom_translate.models.translatable_column import TranslatableColumn
from bloom_translate.translate.tags import parse_tag, source_column_name

from .row_policy import RowPolicy

"""Column scanner: find AI translation columns and whether they need work.

Row 0 carries language display names and is never considered: a blank
display name on a fresh column does not mean a translation is missing.
"""

__all__ = [
    "require_source_column",
    "scan",
]

logger = logging.getLogger(__name__)


def require_source_column(doc: TabularDocument, source_lang: str) -> str:
    """Return the source column header, raising ConfigurationError if absent."""
    source_column = source_column_name(source_lang)
    if not doc.has_column(source_column):
        raise ConfigurationError(
            f"source column not found: {source_column} (headers: {', '.join(doc.headers)})"
        )
    return source_column


def _has_missing(
    doc: TabularDocument, source_column: str, column: str, policy: RowPolicy | None
) -> bool:
    restricted = policy is not None and policy.applies_to(doc)
    for row in doc.rows[1:]:
        if is_blank(row, source_column):
            continue
        if policy is not None and not policy.is_translatable(row, restricted):
            continue
        if is_blank(row, column):
            return True
    return False


def scan(
    doc: TabularDocument, source_lang: str = "en", row_policy: RowPolicy | None = None
) -> list[TranslatableColumn]:
    """List AI columns in header order with their missing-translation state.

    Args:
        doc: document to inspect (not modified)
        source_lang: language of the source column, "[<source_lang>]"
        row_policy: when given, rows the synchronizer would never translate do
            not count as missing

    Raises:
        ConfigurationError: source column absent (fatal for the whole run)
    """
    source_column = require_source_column(doc, source_lang)
    found: list[TranslatableColumn] = []
    for header in doc.headers:
        tag = parse_tag(header)
        if tag is None:
            continue
        missing = _has_missing(doc, source_column, header, row_policy)
        logger.debug(f"scan: {header} model={tag.model} missing={missing}")
        found.append(
            TranslatableColumn(
                column_name=header,
                language_code=tag.language_code,
                model=tag.model,
                has_missing_translations=missing,
            )
        )
    return found
