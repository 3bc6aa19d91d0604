from __future__ import annotations

from dataclasses import dataclass

"""Row model: one parsed tabular record.

A Row is created by the ingestor per input record, consumed once by the
aggregator and not retained afterwards.
"""

__all__ = [
    "Row",
]


@dataclass(frozen=True)
class Row:
    """Ordered cell values of a single record, addressed by zero-based position.

    ``number`` is the 1-based record number counted after the skipped
    leading lines (used for diagnostics only).
    """
    number: int
    cells: tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, "cells", tuple(self.cells))
        for cell in self.cells:
            if not isinstance(cell, str):
                raise TypeError(f"row {self.number}: cell values must be str, got {type(cell).__name__}")

    def cell(self, position: int) -> str | None:
        """Return the cell at ``position`` or None when absent or empty."""
        if position < 0 or position >= len(self.cells):
            return None
        value = self.cells[position]
        return value if value else None

    def __len__(self) -> int:
        return len(self.cells)
