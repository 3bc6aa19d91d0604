from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from ..models.locale_document import DEFAULT_LOCALE_FIELD, LocaleDocument
from ..models.run_result import LocaleWriteResult, WriteStatus
from .progress import ProgressTracker

"""Persistence of finalized locale documents.

Each document goes to ``<output_root>/<locale>/<file_name>`` and fully
replaces whatever was there. Writes touch disjoint directories and share
only read-only documents, so they run concurrently without locking.
"""

__all__ = [
    "PersistenceError",
    "serialize_document",
    "write_locale_document",
    "persist_documents",
]

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "translation.json"


class PersistenceError(Exception):
    """Directory creation or write failure for one locale."""

    def __init__(self, locale: str, cause: BaseException) -> None:
        self.locale = locale
        self.cause = cause
        super().__init__(f"locale={locale}: {cause}")


def serialize_document(document: LocaleDocument, locale_field: str = DEFAULT_LOCALE_FIELD) -> str:
    # 2 スペースインデント, 非 ASCII はエスケープしない
    return json.dumps(document.to_dict(locale_field), ensure_ascii=False, indent=2)


def write_locale_document(
    document: LocaleDocument,
    output_root: Path,
    file_name: str = DEFAULT_FILE_NAME,
    locale_field: str = DEFAULT_LOCALE_FIELD,
) -> Path:
    """Write one document, creating its locale directory if needed.

    Returns:
        Path of the written file

    Raises:
        PersistenceError: If the directory or the file cannot be written.
    """
    target_dir = output_root / document.locale
    target = target_dir / file_name
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(serialize_document(document, locale_field), encoding="utf-8")
    except (OSError, ValueError) as e:  # ValueError: パスに NUL が含まれる場合
        raise PersistenceError(document.locale, e) from e
    return target


def persist_documents(
    documents: Sequence[LocaleDocument],
    output_root: Path,
    file_name: str = DEFAULT_FILE_NAME,
    locale_field: str = DEFAULT_LOCALE_FIELD,
    max_workers: int = 8,
) -> list[LocaleWriteResult]:
    """Write every document concurrently; a failure does not stop the others.

    Returns:
        One LocaleWriteResult per document, in the order of ``documents``.
    """
    results: dict[str, LocaleWriteResult] = {}
    if not documents:
        return []

    with ProgressTracker(len(documents)) as progress, ThreadPoolExecutor(
        max_workers=min(max_workers, len(documents)),
        thread_name_prefix="locale-writer",
    ) as executor:
        future_map = {
            executor.submit(write_locale_document, doc, output_root, file_name, locale_field): doc
            for doc in documents
        }
        for future in as_completed(future_map):
            doc = future_map[future]
            try:
                path = future.result()
            except PersistenceError as e:
                logger.debug(f"locale={e.locale} write failed: {e.cause}")
                results[doc.locale] = LocaleWriteResult(
                    locale=doc.locale,
                    status=WriteStatus.FAILED,
                    entries=len(doc),
                    error=str(e.cause),
                )
                progress.advance(doc.locale, success=False)
                continue
            logger.debug(f"locale={doc.locale} wrote {len(doc)} keys -> {path}")
            results[doc.locale] = LocaleWriteResult(
                locale=doc.locale,
                status=WriteStatus.WRITTEN,
                path=path,
                entries=len(doc),
            )
            progress.advance(doc.locale)

    return [results[doc.locale] for doc in documents]
