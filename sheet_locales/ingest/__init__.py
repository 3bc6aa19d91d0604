from .reader import EXCEL_SUFFIXES, MalformedRecordError, iter_rows, read_excel_rows

__all__ = [
    "EXCEL_SUFFIXES",
    "MalformedRecordError",
    "iter_rows",
    "read_excel_rows",
]
