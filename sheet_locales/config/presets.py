from __future__ import annotations

from dataclasses import dataclass

from sheet_locales.models.column_mapping import ColumnMapping

"""Built-in sheet layouts.

Two layouts are in use for the shared translation spreadsheet:

- ``standard``: key in column 0, one instruction line on top, locales in
  columns 1..52.
- ``demo``: an extra leading column, key in column 1, seven instruction lines
  on top, locales in columns 2..46.

Edit these tables when a language column is added to the sheet.
"""

__all__ = [
    "SheetPreset",
    "PRESETS",
    "get_preset",
]

STANDARD_LOCALES = [
    "am", "ar", "ca", "chk", "de", "en", "es", "eu", "fa", "fj",
    "fr", "gu", "he", "hi", "hmn", "ht", "hy", "it", "ja", "kar",
    "km", "ko", "lo", "mam", "mh", "ml", "mr", "mxb", "my", "ne",
    "om", "pa", "prs", "ps", "pt-BR", "ro", "ru", "sm", "so", "sw",
    "ta", "te", "th", "ti", "tl", "to", "tr", "uk", "ur", "vi",
    "zh", "zh-TW",
]

DEMO_LOCALES = [
    "am", "ar", "chk", "de", "en", "es", "fa", "fj", "fr", "gu",
    "hi", "hmn", "ja", "kar", "km", "ko", "lo", "mam", "mh", "mr",
    "mxb", "my", "ne", "om", "pa", "prs", "ps", "pt-BR", "ro", "ru",
    "sm", "so", "sw", "ta", "te", "th", "ti", "tl", "to", "tr",
    "uk", "ur", "vi", "zh", "zh-tw",
]


@dataclass(frozen=True)
class SheetPreset:
    name: str
    skip_rows: int
    key_column: int
    column_mapping: ColumnMapping


PRESETS: dict[str, SheetPreset] = {
    "standard": SheetPreset(
        name="standard",
        skip_rows=1,
        key_column=0,
        column_mapping=ColumnMapping.from_locales(STANDARD_LOCALES, start=1),
    ),
    "demo": SheetPreset(
        name="demo",
        skip_rows=7,
        key_column=1,
        column_mapping=ColumnMapping.from_locales(DEMO_LOCALES, start=2),
    ),
}


def get_preset(name: str) -> SheetPreset:
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"unknown preset '{name}' (available: {sorted(PRESETS)})") from None
