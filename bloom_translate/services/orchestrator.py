from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ConfigurationError, TranslateConfig
from ..excel.reader import SpreadsheetReadError, read_document
from ..excel.writer import SpreadsheetWriteError, prepare_output_path, write_document
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.document import TabularDocument
from ..models.processing_result import ColumnStat, ColumnStatus, RunResult
from ..models.translatable_column import TranslatableColumn
from ..translate.dispatcher import TranslationDispatcher, parse_model_from_tag
from ..translate.errors import UnsupportedModelError
from ..translate.tags import column_name_for_tag
from .progress import ProgressTracker
from .row_policy import RowPolicy
from .scanner import scan
from .synchronizer import ColumnSynchronizer

"""Run orchestration: one spreadsheet in, at most one spreadsheet out.

1. Read the BloomBook sheet
2. Check the source column and prepare the output path (before any backend call)
3. Pick the columns to translate (explicit --target, or every AI column that
   has missing translations / all of them with --retranslate)
4. Sync each column; a failed column never stops the others
5. Flush the error log and write the output if anything changed
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal input/output failure (unreadable workbook, failed write)."""


@dataclass(frozen=True)
class ColumnJob:
    column_name: str
    tag: str


def default_output_path(input_path: Path, target: str | None, cwd: Path | None = None) -> Path:
    """<cwd>/<input stem>-<target>.xlsx, or -translated.xlsx without a target."""
    suffix = f"-{target}.xlsx" if target else "-translated.xlsx"
    return (cwd or Path.cwd()) / f"{input_path.stem}{suffix}"


def _describe(col: TranslatableColumn, retranslate: bool) -> str:
    state = "has missing translations" if col.has_missing_translations else "has no missing translations"
    return f"- {col.column_name}: {state}{' (will retranslate)' if retranslate else ''}"


def plan_columns(
    columns: list[TranslatableColumn],
    target: str | None,
    retranslate: bool,
) -> tuple[list[ColumnJob], list[ColumnStat]]:
    """Decide which columns to sync.

    Returns (jobs, skipped) where skipped holds columns left alone because they
    are already complete.

    Raises:
        UnsupportedModelError: an explicit target names no known model
    """
    if target:
        if parse_model_from_tag(target) is None:
            raise UnsupportedModelError(
                f"No supported translation model found in language code: {target}"
            )
        column_name = column_name_for_tag(target)
        existing = next((c for c in columns if c.column_name == column_name), None)
        if existing is not None and not existing.has_missing_translations and not retranslate:
            logger.info(
                f"Column {column_name} already exists in the spreadsheet and has no missing "
                "translations. Use --retranslate flag to overwrite."
            )
            return [], [ColumnStat(column_name, ColumnStatus.SKIPPED)]
        return [ColumnJob(column_name, target)], []

    if not columns:
        logger.info("No translatable columns found in the spreadsheet.")
        return [], []

    logger.info("Found ai columns:")
    jobs: list[ColumnJob] = []
    skipped: list[ColumnStat] = []
    for col in columns:
        logger.info(_describe(col, retranslate))
        if col.has_missing_translations or retranslate:
            jobs.append(ColumnJob(col.column_name, col.tag))
        else:
            skipped.append(ColumnStat(col.column_name, ColumnStatus.SKIPPED))
    return jobs, skipped


def _read(input_path: Path, sheet_name: str) -> TabularDocument:
    if not input_path.exists():
        raise ConfigurationError(f"Input file not found: {input_path}")
    try:
        return read_document(input_path, sheet_name)
    except SpreadsheetReadError as e:
        raise ProcessingError(str(e)) from e


def run_translation(
    config: TranslateConfig,
    input_path: Path,
    output_path: Path,
    target: str | None = None,
    retranslate: bool = False,
    source_lang: str | None = None,
    dispatcher: TranslationDispatcher | None = None,
) -> RunResult:
    """Translate the AI columns of one spreadsheet.

    Args:
        config: run configuration (credentials included)
        input_path: workbook to read
        output_path: workbook to write when at least one column changed
        target: explicit "<lang>-x-ai-<model>" tag, or None to scan
        retranslate: overwrite columns that are already complete
        source_lang: overrides config.source_language
        dispatcher: injected for tests; built from config otherwise

    Returns:
        RunResult with per-column stats

    Raises:
        ConfigurationError: missing input/source column, unwritable output,
            missing backend credentials
        UnsupportedModelError: explicit target with an unknown model
        ProcessingError: workbook read/write failure
    """
    start_time = datetime.now(UTC)
    source = source_lang or config.source_language
    row_policy = RowPolicy.from_config(config)

    doc = _read(input_path, config.sheet_name)
    logger.debug(f"Headers: {', '.join(doc.headers)}")
    columns = scan(doc, source, row_policy)

    # 出力先は翻訳 (課金 API 呼び出し) 前に検証
    prepare_output_path(output_path, input_path)

    jobs, column_stats = plan_columns(columns, target, retranslate)

    error_log = ErrorLogBuffer(Path(config.logs_directory))
    synchronizer = ColumnSynchronizer(
        dispatcher or TranslationDispatcher(config),
        row_policy=row_policy,
        error_log=error_log,
        file_name=input_path.name,
    )

    translated = failed = 0
    with ProgressTracker(len(jobs)) as progress:
        for job in jobs:
            progress.start_column(job.column_name)
            logger.info(f"Translating {job.column_name}...")
            col_start = datetime.now(UTC)
            cells_before = synchronizer.cells_written
            try:
                ok = synchronizer.sync(doc, job.column_name, job.tag, source)
            except UnsupportedModelError as e:
                if target:
                    raise
                # injected backend table without this column's model
                logger.error(f"{job.column_name}: {e}")
                error_log.append(
                    ErrorRecord.create(input_path.name, job.column_name, "UNSUPPORTED_MODEL", str(e))
                )
                ok = False
                synchronizer.last_error = str(e)
            elapsed = (datetime.now(UTC) - col_start).total_seconds()

            if ok:
                status = ColumnStatus.TRANSLATED
                translated += 1
            elif synchronizer.last_error is not None:
                status = ColumnStatus.FAILED
                failed += 1
            else:
                status = ColumnStatus.SKIPPED
            column_stats.append(
                ColumnStat(
                    column_name=job.column_name,
                    status=status,
                    translated_cells=synchronizer.cells_written - cells_before,
                    elapsed_seconds=elapsed,
                    error=synchronizer.last_error if status is ColumnStatus.FAILED else None,
                )
            )
            progress.set_postfix(translated=translated, failed=failed)
            progress.finish_column(success=ok)

    try:
        log_path = error_log.flush()
    except OSError as e:
        # エラーログ書き込み失敗で全体を失敗にしない
        logger.warning(f"could not write error log: {e}")
        log_path = None
    if log_path is not None:
        logger.info(f"Error details written to: {log_path}")

    written: Path | None = None
    if translated > 0:
        logger.debug(f"Writing output to: {output_path}")
        try:
            written = write_document(doc, output_path, config.sheet_name)
        except SpreadsheetWriteError as e:
            raise ProcessingError(str(e)) from e
        logger.info(f"Translated spreadsheet saved to: {written}")
    elif jobs:
        logger.info("Nothing translated; no output written.")

    end_time = datetime.now(UTC)
    skipped = sum(1 for s in column_stats if s.status is ColumnStatus.SKIPPED)
    return RunResult(
        translated_columns=translated,
        failed_columns=failed,
        skipped_columns=skipped,
        translated_cells=synchronizer.cells_written,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        output_path=written,
        column_stats=column_stats,
    )
