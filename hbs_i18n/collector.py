"""Deduplicated store of translation keys missing per locale."""

from __future__ import annotations

import threading
from typing import Any


class MissingTranslations:
    """Per-locale mapping of missing keys to their short description.

    Additions are idempotent and the store only ever grows; start a new
    instance to reset it.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()

    def add(self, locale: str, key: str, description: str | None = None) -> None:
        """Record ``key`` as missing for ``locale``; repeated calls are no-ops."""

        with self._lock:
            records = self._records.setdefault(str(locale), {})
            records.setdefault(key, description if description is not None else key)

    def is_empty(self, locale: str) -> bool:
        return not self._records.get(str(locale))

    def contains(self, locale: str, key: str) -> bool:
        return key in self._records.get(str(locale), {})

    def __getitem__(self, locale: str) -> set[str]:
        return set(self._records.get(str(locale), {}))

    def __len__(self) -> int:
        return sum(len(records) for records in self._records.values())

    def locales(self) -> list[str]:
        return sorted(locale for locale, records in self._records.items() if records)

    def serializable_view(self, locale: str) -> list[dict[str, Any]]:
        """Return the records for ``locale`` as JSON-ready dicts sorted by key."""

        locale = str(locale)
        with self._lock:
            records = dict(self._records.get(locale, {}))
        return [
            {"key": key, "locale": locale, "description": records[key], "options": {}}
            for key in sorted(records)
        ]

    def to_send(self) -> list[dict[str, Any]]:
        """Return the records of every locale in transmission order."""

        payload: list[dict[str, Any]] = []
        for locale in self.locales():
            payload.extend(self.serializable_view(locale))
        return payload

    def copy(self) -> "MissingTranslations":
        clone = MissingTranslations()
        with self._lock:
            clone._records = {
                locale: dict(records) for locale, records in self._records.items()
            }
        return clone


__all__ = ["MissingTranslations"]
