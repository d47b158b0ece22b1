from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from bloom_translate import __version__
from bloom_translate.config.loader import DEFAULT_CONFIG_PATH, ConfigurationError, load_config
from bloom_translate.logging.init import log_summary, setup_logging
from bloom_translate.services.orchestrator import ProcessingError, default_output_path, run_translation
from bloom_translate.services.summary import render_summary_line
from bloom_translate.translate.errors import UnsupportedModelError

"""CLI entrypoint: bloom-translate-spreadsheet.

Flow:
- Load .env (credentials) and the optional YAML config
- Resolve input/output paths
- Run the translation and print the SUMMARY line

Exit codes: 0 success or nothing to do, 1 fatal, 2 a column failed.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_COLUMN_FAILURE = 2

EPILOG = """\
Example:
  $ bloom-translate-spreadsheet foo.xlsx
  $ bloom-translate-spreadsheet foo.xlsx --target es-x-ai-google -o foo-with-spanish.xlsx
  $ bloom-translate-spreadsheet foo.xlsx --target fr-x-ai-google --retranslate
"""


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv without overriding variables already set."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="bloom-translate-spreadsheet",
        description="Translates Bloom spreadsheet content to different languages",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("input_path", help="Input Excel file path")
    p.add_argument(
        "-o", "--output",
        help="Output Excel file path (default: {input-filename}-{language}.xlsx)",
    )
    p.add_argument(
        "--target",
        help=(
            "BCP47 language code with model, e.g. fr-x-ai-google. If this is not provided, "
            "the program will look in the input spreadsheet for columns with missing translations."
        ),
    )
    p.add_argument("--source", help="Source language code (default: en)")
    p.add_argument(
        "--retranslate",
        action="store_true",
        help="Replace columns that already exist instead of skipping them",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument("--config", help=f"YAML config file (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    # None のときのみシステム引数を読む (テストの cli_main([...]) 呼び出し対策)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(verbose=args.verbose)
    logger.debug("Starting translation process with verbose logging enabled")

    _load_env_file(Path(".env"))
    if args.config:
        config_path: Path | None = Path(args.config)
    else:
        config_path = DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None
    try:
        cfg = load_config(config_path, environ=os.environ)
    except ConfigurationError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    input_path = Path(args.input_path).resolve()
    output_path = (
        Path(args.output).resolve() if args.output else default_output_path(input_path, args.target)
    )
    logger.debug(f"Input path: {input_path}")

    try:
        result = run_translation(
            cfg,
            input_path,
            output_path,
            target=args.target,
            retranslate=args.retranslate,
            source_lang=args.source,
        )
    except ConfigurationError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    except UnsupportedModelError as e:
        logger.error(f"model: {e}")
        return EXIT_FATAL
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.failed_columns > 0:
        return EXIT_COLUMN_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
