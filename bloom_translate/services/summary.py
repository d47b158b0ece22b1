from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY columns={attempted} translated={n} failed={n} skipped={n} cells={n}
elapsed_sec={elapsed} output={path|none}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a run.

    >>> from datetime import datetime, timezone
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> render_summary_line(RunResult(1, 0, 0, 12, t, t, 2.0))
    'SUMMARY columns=1 translated=1 failed=0 skipped=0 cells=12 elapsed_sec=2 output=none'
    """
    output = str(result.output_path) if result.output_path is not None else "none"
    return (
        f"SUMMARY columns={result.attempted_columns} "
        f"translated={result.translated_columns} "
        f"failed={result.failed_columns} "
        f"skipped={result.skipped_columns} "
        f"cells={result.translated_cells} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)} "
        f"output={output}"
    )
