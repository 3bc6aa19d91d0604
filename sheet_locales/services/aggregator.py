from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..models.column_mapping import ColumnMapping
from ..models.locale_document import LocaleDocument
from ..models.row import Row

"""Locale aggregation service.

Folds parsed rows into one accumulating key -> value table per locale, then
finalizes each table into a LocaleDocument.

The accumulator is passed into and returned from ``fold_row`` explicitly;
there is no module level state. Rules per row:

1. key = cell at the key column; an empty key drops the whole row
2. unmapped columns and empty cells are ignored (a blank never erases an
   existing translation)
3. otherwise documents[locale][key] = value (later rows win)
"""

__all__ = [
    "Documents",
    "AggregationResult",
    "empty_documents",
    "fold_row",
    "finalize",
    "aggregate",
]

logger = logging.getLogger(__name__)

# locale -> (translation key -> value)
Documents = dict[str, dict[str, str]]


@dataclass(frozen=True)
class AggregationResult:
    documents: list[LocaleDocument]
    rows_read: int = 0
    rows_skipped: int = 0


def empty_documents(mapping: ColumnMapping) -> Documents:
    """Create one empty accumulator per mapped locale, in mapping order."""
    return {locale: {} for locale in mapping.locales}


def fold_row(documents: Documents, row: Row, mapping: ColumnMapping, key_column: int) -> Documents:
    """Merge one row into ``documents`` and return it."""
    key = row.cell(key_column)
    if key is None:
        return documents

    for position, value in enumerate(row.cells):
        if position == key_column or not value:
            continue
        locale = mapping.locale_for(position)
        if locale is None:
            continue
        documents[locale][key] = value
    return documents


def finalize(documents: Documents, mapping: ColumnMapping) -> list[LocaleDocument]:
    """Attach locale identifiers; one document per mapped locale, mapping order."""
    return [LocaleDocument(locale=locale, entries=documents.get(locale, {})) for locale in mapping.locales]


def aggregate(rows: Iterable[Row], mapping: ColumnMapping, key_column: int) -> AggregationResult:
    """Consume every row and return the finalized documents with row counters.

    Performs no I/O. A MalformedRecordError raised while pulling rows
    propagates unchanged.
    """
    documents = empty_documents(mapping)
    rows_read = 0
    rows_skipped = 0
    seen_keys: set[str] = set()

    for row in rows:
        rows_read += 1
        key = row.cell(key_column)
        if key is None:
            rows_skipped += 1
            logger.debug(f"record {row.number}: empty key column -> skipped")
            continue
        if key in seen_keys:
            logger.warning(f"record {row.number}: duplicate key '{key}' (later values win)")
        seen_keys.add(key)
        documents = fold_row(documents, row, mapping, key_column)

    logger.debug(f"aggregated rows={rows_read} skipped={rows_skipped} keys={len(seen_keys)}")
    return AggregationResult(
        documents=finalize(documents, mapping),
        rows_read=rows_read,
        rows_skipped=rows_skipped,
    )
