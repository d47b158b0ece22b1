from __future__ import annotations

import logging
from dataclasses import dataclass

from bloom_translate.config.loader import ConfigurationError
from bloom_translate.logging.error_log import ErrorLogBuffer
from bloom_translate.models.document import TabularDocument, cell_text, is_blank
from bloom_translate.models.error_record import ErrorRecord
from bloom_translate.translate.dispatcher import TranslationDispatcher
from bloom_translate.translate.errors import BackendError, TranslationTimeoutError
from bloom_translate.translate.tags import source_column_name

from .row_policy import RowPolicy

"""Column synchronizer: translate one target column into a document.

Each call works in two phases:

1. stage  - pick candidate rows, send their source texts to the dispatcher as
            one ordered batch, and compute the new header list and cell values
2. commit - swap the staged header list in and write the staged cells

Nothing touches the document before the backend has answered in full, so a
failure leaves headers and rows exactly as they were.
"""

__all__ = [
    "ColumnSynchronizer",
    "StagedColumn",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagedColumn:
    column_name: str
    headers: list[str]  # full header list after commit
    updates: list[tuple[int, str]]  # (row index, translated text)


class ColumnSynchronizer:
    """Insert or refresh machine-translated columns.

    Args:
        dispatcher: routes text batches to a backend
        row_policy: decides which rows may be translated
        error_log: failed column operations are recorded here (optional)
        file_name: spreadsheet name used in error records
    """

    def __init__(
        self,
        dispatcher: TranslationDispatcher,
        row_policy: RowPolicy | None = None,
        error_log: ErrorLogBuffer | None = None,
        file_name: str = "",
    ) -> None:
        self.dispatcher = dispatcher
        self.row_policy = row_policy or RowPolicy()
        self.error_log = error_log
        self.file_name = file_name
        self.cells_written = 0
        self.last_error: str | None = None  # message of the most recent failed sync

    def _record(self, column: str, error_type: str, message: str) -> None:
        self.last_error = message
        if self.error_log is not None:
            self.error_log.append(ErrorRecord.create(self.file_name, column, error_type, message))

    def candidate_rows(self, doc: TabularDocument, source_column: str) -> list[int]:
        """Indexes of rows to translate (row 0 included unless the policy excludes it)."""
        restricted = self.row_policy.applies_to(doc)
        return [
            i
            for i, row in enumerate(doc.rows)
            if not is_blank(row, source_column) and self.row_policy.is_translatable(row, restricted)
        ]

    def stage(
        self,
        doc: TabularDocument,
        target_column_name: str,
        target_tag: str,
        source_lang: str = "en",
    ) -> StagedColumn | None:
        """Translate without mutating doc; None when there is nothing to translate.

        Raises:
            ConfigurationError: source column missing, or backend credentials missing
            UnsupportedModelError: target tag names no known model
            BackendError: backend failure (TranslationTimeoutError included)
        """
        source_column = source_column_name(source_lang)
        if not doc.has_column(source_column):
            raise ConfigurationError(f"source column not found: {source_column}")

        rows = self.candidate_rows(doc, source_column)
        if not rows:
            return None

        texts = [cell_text(doc.rows[i], source_column) for i in rows]
        translations = self.dispatcher.translate(texts, target_tag, source_lang=source_lang)
        if len(translations) != len(texts):
            raise BackendError(
                f"expected {len(texts)} translations for {target_column_name}, got {len(translations)}"
            )

        headers = list(doc.headers)
        if target_column_name not in headers:
            headers.insert(doc.column_index(source_column) + 1, target_column_name)
        return StagedColumn(
            column_name=target_column_name,
            headers=headers,
            updates=list(zip(rows, translations, strict=True)),
        )

    def commit(self, doc: TabularDocument, staged: StagedColumn) -> None:
        doc.headers[:] = staged.headers
        for index, text in staged.updates:
            doc.rows[index][staged.column_name] = text
        self.cells_written += len(staged.updates)

    def sync(
        self,
        doc: TabularDocument,
        target_column_name: str,
        target_tag: str,
        source_lang: str = "en",
    ) -> bool:
        """Translate target_column_name from the source column.

        Returns True when translations were committed, False for a no-op or a
        recovered failure (missing source column, backend error). Credential
        errors and unsupported models propagate.
        """
        self.last_error = None
        source_column = source_column_name(source_lang)
        if not doc.has_column(source_column):
            message = f"source column not found: {source_column}"
            logger.error(f"{target_column_name}: {message}")
            self._record(target_column_name, "SOURCE_COLUMN_MISSING", message)
            return False

        try:
            staged = self.stage(doc, target_column_name, target_tag, source_lang)
        except TranslationTimeoutError as e:
            logger.error(f"{target_column_name}: {e}")
            self._record(target_column_name, "TRANSLATION_TIMEOUT", str(e))
            return False
        except BackendError as e:
            logger.error(f"{target_column_name}: translation failed: {e}")
            self._record(target_column_name, "BACKEND_ERROR", str(e))
            return False

        if staged is None:
            logger.info(f"{target_column_name}: no source text to translate")
            return False
        self.commit(doc, staged)
        logger.info(f"{target_column_name}: translated {len(staged.updates)} cells")
        return True
