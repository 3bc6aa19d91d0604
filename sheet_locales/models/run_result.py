from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Run result models for the sheet -> locale documents conversion.

Aggregates per-locale write outcomes and the row counters needed for the
SUMMARY output line and the process exit code.
"""

__all__ = [
    "WriteStatus",
    "LocaleWriteResult",
    "RunResult",
]


class WriteStatus(str, Enum):
    WRITTEN = "written"
    FAILED = "failed"


@dataclass(frozen=True)
class LocaleWriteResult:
    """Outcome of persisting one locale document."""
    locale: str
    status: WriteStatus
    path: Path | None = None  # 成功時の出力先
    entries: int = 0  # 翻訳キー数 (localeCode 除く)
    error: str | None = None  # 失敗時の原因

    @property
    def ok(self) -> bool:
        return self.status is WriteStatus.WRITTEN


@dataclass(frozen=True)
class RunResult:
    """Aggregated results of one conversion run.

    The run counts as successful only when every locale write succeeded.
    """
    rows_read: int  # 読み込んだレコード数 (スキップ行を除く)
    rows_skipped: int  # キー列が空で捨てたレコード数
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    locale_results: list[LocaleWriteResult]

    @property
    def written_locales(self) -> int:
        return sum(1 for r in self.locale_results if r.ok)

    @property
    def failed_locales(self) -> int:
        return sum(1 for r in self.locale_results if not r.ok)

    @property
    def failures(self) -> list[LocaleWriteResult]:
        return [r for r in self.locale_results if not r.ok]

    @property
    def success(self) -> bool:
        return self.failed_locales == 0
