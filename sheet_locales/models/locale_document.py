from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

"""LocaleDocument model: finalized translations for one locale."""

__all__ = [
    "DEFAULT_LOCALE_FIELD",
    "LocaleDocument",
]

DEFAULT_LOCALE_FIELD = "localeCode"


@dataclass(frozen=True)
class LocaleDocument:
    """Translation key -> value table for a single locale.

    Entries keep insertion order (first appearance of each key in the
    source). The reserved locale field is not part of ``entries``; it is
    attached by :meth:`to_dict` when the document is serialized.
    """
    locale: str
    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.locale:
            raise ValueError("locale identifier must not be empty")
        # 確定後は読み取り専用
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def to_dict(self, locale_field: str = DEFAULT_LOCALE_FIELD) -> dict[str, str]:
        """Return entries followed by ``locale_field`` holding the locale identifier.

        A translation key equal to ``locale_field`` is replaced by the
        locale identifier.
        """
        data = dict(self.entries)
        data.pop(locale_field, None)
        data[locale_field] = self.locale
        return data

    def __len__(self) -> int:
        return len(self.entries)
