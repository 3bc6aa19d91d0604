from __future__ import annotations

import csv
import zipfile
from collections.abc import Iterable, Iterator
from itertools import islice
from pathlib import Path

import pandas as pd

from sheet_locales.models.row import Row

"""Row ingestion for the translation sheet.

- Leading lines (instructions / front matter) are dropped as raw lines,
  without looking at their content.
- The remaining lines are parsed with standard CSV quoting; there is no
  header row, cells are addressed by position.
- Rows are produced lazily and in input order.

Excel workbooks (.xlsx / .xls) are read through pandas and produce the same
Row sequence.
"""

__all__ = [
    "MalformedRecordError",
    "EXCEL_SUFFIXES",
    "iter_rows",
    "read_excel_rows",
]

EXCEL_SUFFIXES = frozenset({".xlsx", ".xls"})


class MalformedRecordError(Exception):
    """Raised when an input record cannot be decomposed into cells."""

    def __init__(self, message: str, record_number: int = -1) -> None:
        self.record_number = record_number
        super().__init__(message)


def _decoded(lines: Iterable[str], skipped: int) -> Iterator[str]:
    line_number = skipped
    try:
        for line in lines:
            line_number += 1
            yield line
    except UnicodeDecodeError as e:
        raise MalformedRecordError(f"cannot decode input after line {line_number}: {e}") from e


def iter_rows(
    stream: Iterable[str],
    skip_rows: int = 0,
    delimiter: str = ",",
    quotechar: str = '"',
) -> Iterator[Row]:
    """Yield Rows from a character stream.

    Args:
        stream: Text lines (an open text file or any iterable of lines).
            Files should be opened with ``newline=""``.
        skip_rows: Number of leading physical lines to discard.
        delimiter: Field delimiter.
        quotechar: Quote character for fields containing delimiters or
            line breaks.

    Raises:
        MalformedRecordError: On an unterminated quote, a CSV parse error or
            a text decode failure.
    """
    lines = iter(stream)
    try:
        for _ in islice(lines, skip_rows):
            pass
    except UnicodeDecodeError as e:
        raise MalformedRecordError(f"cannot decode leading lines: {e}") from e

    reader = csv.reader(
        _decoded(lines, skip_rows),
        delimiter=delimiter,
        quotechar=quotechar,
        strict=True,  # 閉じていない引用符はエラーにする
    )
    number = 0
    while True:
        try:
            cells = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            raise MalformedRecordError(f"record {number + 1}: {e}", number + 1) from e
        number += 1
        yield Row(number=number, cells=tuple(cells))


def read_excel_rows(path: Path, skip_rows: int = 0, sheet_name: str | int = 0) -> Iterator[Row]:
    """Yield Rows from one sheet of an Excel workbook.

    Every cell is read as text; empty cells become "".

    Raises:
        MalformedRecordError: If the workbook cannot be parsed.
    """
    try:
        # NA 変換は行わない (空セルは "" のまま)
        df = pd.read_excel(
            path,
            sheet_name=sheet_name,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
        )
    except (ValueError, KeyError, zipfile.BadZipFile) as e:
        raise MalformedRecordError(f"cannot read workbook {path.name}: {e}") from e

    data_part = df.iloc[skip_rows:]
    for number, raw in enumerate(data_part.itertuples(index=False, name=None), start=1):
        yield Row(number=number, cells=tuple("" if pd.isna(v) else str(v) for v in raw))
