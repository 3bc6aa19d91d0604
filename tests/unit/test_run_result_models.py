from __future__ import annotations
from datetime import UTC, datetime
from pathlib import Path

import pytest

from sheet_locales.models.run_result import LocaleWriteResult, RunResult, WriteStatus


def _run(results: list[LocaleWriteResult]) -> RunResult:
    now = datetime.now(UTC)
    return RunResult(
        rows_read=4, rows_skipped=1, start_time=now, end_time=now, elapsed_seconds=0.0, locale_results=results
    )


def test_run_result_counts_and_failures():
    ok = LocaleWriteResult(locale="en", status=WriteStatus.WRITTEN, path=Path("en/translation.json"), entries=3)
    bad = LocaleWriteResult(locale="fr", status=WriteStatus.FAILED, entries=2, error="disk full")
    result = _run([ok, bad])
    assert result.written_locales == 1
    assert result.failed_locales == 1
    assert result.failures == [bad]
    assert result.success is False
    assert ok.ok and not bad.ok


def test_run_result_success_when_no_failures():
    assert _run([]).success is True
    assert _run([LocaleWriteResult(locale="en", status=WriteStatus.WRITTEN)]).success is True


def test_models_are_frozen():
    r = LocaleWriteResult(locale="en", status=WriteStatus.WRITTEN)
    with pytest.raises(AttributeError):
        r.locale = "fr"  # type: ignore[misc]
    assert WriteStatus.FAILED.value == "failed"
