from __future__ import annotations

from ..models.run_result import RunResult

"""Summary line rendering for the SUMMARY output."""


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
    """Render the SUMMARY line for a finished run.

    Format:
    SUMMARY locales={total} written={written} failed={failed} rows={rows}
    skipped_rows={skipped} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     rows_read=120, rows_skipped=3, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, locale_results=[],
        ... )
        >>> render_summary_line(result)
        'SUMMARY locales=0 written=0 failed=0 rows=120 skipped_rows=3 elapsed_sec=2'
    """
    return (
        f"SUMMARY locales={len(result.locale_results)} "
        f"written={result.written_locales} "
        f"failed={result.failed_locales} "
        f"rows={result.rows_read} "
        f"skipped_rows={result.rows_skipped} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
