from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import PipelineConfig
from ..ingest.reader import EXCEL_SUFFIXES, MalformedRecordError, iter_rows, read_excel_rows
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.row import Row
from ..models.run_result import RunResult
from .aggregator import AggregationResult, aggregate
from .persistence import persist_documents

"""Run orchestration: sheet -> rows -> locale documents -> files.

1. Open the source (CSV stream, or Excel workbook through pandas)
2. Aggregate every row into per-locale documents
3. Only after the whole input was consumed, write all locales concurrently
4. Record failures in the error log and return a RunResult

A malformed record aborts the run before anything is written.
"""

__all__ = [
    "ProcessingError",
    "source_rows",
    "run_pipeline",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the run (e.g. the source file is missing)."""
    pass


@contextmanager
def source_rows(config: PipelineConfig) -> Iterator[Iterator[Row]]:
    """Provide the Row iterator for the configured source file.

    Raises:
        ProcessingError: If the source file does not exist or cannot be opened
    """
    path = config.source_file
    if not path.exists():
        raise ProcessingError(f"source file not found: {path}")
    if not path.is_file():
        raise ProcessingError(f"source is not a file: {path}")

    if path.suffix.lower() in EXCEL_SUFFIXES:
        yield read_excel_rows(path, skip_rows=config.skip_rows, sheet_name=config.sheet_name)
        return

    try:
        f = path.open("r", encoding=config.encoding, newline="")
    except (OSError, LookupError) as e:  # LookupError: 未知のエンコーディング名
        raise ProcessingError(f"cannot open source file {path}: {e}") from e
    with f:
        yield iter_rows(f, skip_rows=config.skip_rows, delimiter=config.delimiter, quotechar=config.quotechar)


def _aggregate_source(config: PipelineConfig) -> AggregationResult:
    with source_rows(config) as rows:
        return aggregate(rows, config.column_mapping, config.key_column)


def run_pipeline(config: PipelineConfig, output_directory: Path | None = None) -> RunResult:
    """Convert the configured sheet and write one document per locale.

    Args:
        config: Pipeline configuration
        output_directory: Overrides ``config.output_directory`` when given

    Returns:
        RunResult with per-locale write outcomes

    Raises:
        ProcessingError: Source missing or unreadable
        MalformedRecordError: A record could not be parsed (nothing written)
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(config.logs_directory)
    source_name = config.source_file.name
    output_root = output_directory if output_directory is not None else config.output_directory

    logger.info(
        f"reading {config.source_file} (skip_rows={config.skip_rows} key_column={config.key_column} "
        f"locales={len(config.column_mapping)})"
    )
    try:
        aggregation = _aggregate_source(config)
    except MalformedRecordError as e:
        error_log.append(ErrorRecord.create(source_name, "", e.record_number, "MALFORMED_RECORD", str(e)))
        error_log.flush()
        raise

    logger.info(f"rows={aggregation.rows_read} skipped_rows={aggregation.rows_skipped} -> {output_root}")
    results = persist_documents(
        aggregation.documents,
        output_root,
        file_name=config.file_name,
        locale_field=config.locale_field,
        max_workers=config.max_workers,
    )

    for failed in (r for r in results if not r.ok):
        error_log.append(
            ErrorRecord.create(source_name, failed.locale, -1, "PERSISTENCE_ERROR", failed.error or "")
        )
    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return RunResult(
        rows_read=aggregation.rows_read,
        rows_skipped=aggregation.rows_skipped,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        locale_results=results,
    )
