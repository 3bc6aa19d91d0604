"""Domain models for the spreadsheet -> locale documents converter.

This package contains the record types shared by the ingestor, the
aggregator and the persistence sink.
"""

from .column_mapping import ColumnMapping, DuplicateLocaleError
from .error_record import ErrorRecord
from .locale_document import DEFAULT_LOCALE_FIELD, LocaleDocument
from .row import Row
from .run_result import LocaleWriteResult, RunResult, WriteStatus

__all__ = [
    # Configuration models
    "ColumnMapping",
    "DuplicateLocaleError",
    # Processing models
    "Row",
    "LocaleDocument",
    "DEFAULT_LOCALE_FIELD",
    # Results
    "ErrorRecord",
    "LocaleWriteResult",
    "RunResult",
    "WriteStatus",
]
