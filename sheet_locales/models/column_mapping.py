from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

"""ColumnMapping model: column position -> locale identifier.

The mapping is built once at startup (from config or a preset) and is closed
afterwards. Positions that are not mapped are ignored by the aggregator.
"""

__all__ = [
    "ColumnMapping",
    "DuplicateLocaleError",
]

_UNSAFE_LOCALE_PARTS = ("/", "\\", "..", "\x00")


class DuplicateLocaleError(ValueError):
    """Raised when two column positions target the same locale identifier."""

    def __init__(self, locale: str, positions: list[int]) -> None:
        self.locale = locale
        self.positions = positions
        super().__init__(
            f"locale '{locale}' is mapped from more than one column: {positions}"
        )


class ColumnMapping:
    """Validated, immutable association of column positions to locales.

    Iteration yields ``(position, locale)`` pairs in the order the mapping
    was declared. That order is also the emission order of locale documents.
    """

    __slots__ = ("_by_position",)

    def __init__(self, pairs: Mapping[int, str]) -> None:
        by_position: dict[int, str] = {}
        seen: dict[str, int] = {}
        for position, locale in pairs.items():
            if isinstance(position, bool) or not isinstance(position, int):
                raise ValueError(f"column position must be an integer: {position!r}")
            if position < 0:
                raise ValueError(f"column position must be >= 0: {position}")
            if not isinstance(locale, str) or not locale.strip():
                raise ValueError(f"locale identifier for column {position} must be a non-empty string")
            locale = locale.strip()
            if any(part in locale for part in _UNSAFE_LOCALE_PARTS):
                # ロケールはそのまま出力ディレクトリ名になる
                raise ValueError(f"locale identifier for column {position} is not a safe directory name: {locale!r}")
            if locale in seen:
                # 後勝ちで黙って上書きされるのを防ぐ
                raise DuplicateLocaleError(locale, [seen[locale], position])
            seen[locale] = position
            by_position[position] = locale
        self._by_position: Mapping[int, str] = MappingProxyType(by_position)

    @classmethod
    def from_locales(cls, locales: list[str], *, start: int = 0) -> ColumnMapping:
        """Build a mapping for consecutive columns beginning at ``start``."""
        return cls({start + i: locale for i, locale in enumerate(locales)})

    def locale_for(self, position: int) -> str | None:
        return self._by_position.get(position)

    @property
    def locales(self) -> list[str]:
        return list(self._by_position.values())

    def __contains__(self, position: object) -> bool:
        return position in self._by_position

    def __iter__(self) -> Iterator[tuple[int, str]]:
        return iter(self._by_position.items())

    def __len__(self) -> int:
        return len(self._by_position)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnMapping):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"ColumnMapping({dict(self._by_position)!r})"
