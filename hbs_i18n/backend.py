"""YAML translation backend answering key lookups for a locale."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml

from .errors import BackendFailure

LookupStatus = Literal["found", "missing"]


@dataclass(frozen=True, slots=True)
class Lookup:
    """Outcome of a single ``translate`` call."""

    locale: str
    key: str
    status: LookupStatus
    value: Any = None

    @property
    def found(self) -> bool:
        return self.status == "found"

    @property
    def missing(self) -> bool:
        return self.status == "missing"


def _stringify_keys(data: Mapping[Any, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            value = _stringify_keys(value)
        result[str(key)] = value
    return result


def _deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            target[key] = value


class YamlBackend:
    """In-memory store of nested ``{locale: {scope: {key: text}}}`` documents.

    Keys are looked up with dotted paths, ``"existing.key"`` walks
    ``{"existing": {"key": ...}}`` below the locale. Files passed to the
    constructor are loaded on the first lookup.
    """

    extension = "yml"

    def __init__(self, *paths: str | Path) -> None:
        self._translations: dict[str, dict[str, Any]] = {}
        self._pending: list[Path] = [Path(path) for path in paths]
        self.loaded_paths: list[Path] = []

    def _load_pending(self) -> None:
        while self._pending:
            self.load(self._pending[0])
            self._pending.pop(0)

    def load(self, *paths: str | Path) -> None:
        """Merge the YAML documents at ``paths`` into the store.

        Raises
        ------
        BackendFailure
            If a file is missing, is not valid YAML or is not a mapping of
            locales to mappings.
        """

        for raw_path in paths:
            path = Path(raw_path)
            if not path.exists():
                raise BackendFailure(
                    f"Can not load translations from {path}, the file is missing."
                )
            try:
                with path.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle)
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
                raise BackendFailure(f"Can not load translations from {path}: {exc}") from exc
            if data is None:
                data = {}
            if not isinstance(data, Mapping):
                raise BackendFailure(
                    f"Translation file {path} must contain a mapping of locales."
                )
            data = _stringify_keys(data)
            for locale, entries in data.items():
                if entries is None:
                    entries = {}
                if not isinstance(entries, Mapping):
                    raise BackendFailure(
                        f"Locale '{locale}' in {path} must map to translation entries."
                    )
                _deep_merge(self._translations.setdefault(locale, {}), entries)
            self.loaded_paths.append(path)

    @property
    def available_locales(self) -> list[str]:
        return sorted(self._translations)

    def translate(self, locale: str, key: str) -> Lookup:
        """Resolve ``key`` for ``locale``.

        A key is found when its dotted path reaches any non-null value.
        Absent keys are a normal ``missing`` result, never an exception.
        Translation files that cannot be loaded raise :class:`BackendFailure`.
        """

        self._load_pending()
        locale = str(locale)
        cursor: Any = self._translations.get(locale)
        pieces = [piece for piece in key.split(".") if piece]
        if cursor is None or not pieces:
            return Lookup(locale=locale, key=key, status="missing")
        for piece in pieces:
            if not isinstance(cursor, Mapping):
                return Lookup(locale=locale, key=key, status="missing")
            cursor = cursor.get(piece)
            if cursor is None:
                return Lookup(locale=locale, key=key, status="missing")
        return Lookup(locale=locale, key=key, status="found", value=cursor)


__all__ = ["Lookup", "LookupStatus", "YamlBackend"]
