"""Extraction of translation keys from Handlebars templates."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from .errors import TemplateReadError

_QUOTES = re.compile(r"[\"']")


@lru_cache(maxsize=16)
def build_pattern(helper: str) -> re.Pattern[str]:
    """Return the compiled ``{{<helper> (.*?)}}`` pattern for ``helper``.

    The match is non-greedy so ``{{t a}} text {{t b}}`` yields ``a`` and ``b``.
    """

    return re.compile(r"\{\{" + re.escape(helper) + r" (.*?)\}\}")


def extract_keys(text: str, pattern: re.Pattern[str]) -> list[str]:
    """Return every candidate key captured by ``pattern`` in source order."""

    return pattern.findall(text)


def normalize_key(candidate: str) -> str:
    """Strip single and double quotes from a candidate key."""

    return _QUOTES.sub("", candidate)


def short_label(key: str) -> str:
    return key.rsplit(".", 1)[-1]


def read_template(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateReadError(f"Cannot read template {path}: {exc}") from exc


def scan_template(path: str | Path, helper: str) -> list[str]:
    """Read ``path`` and return its normalized keys in source order."""

    text = read_template(path)
    return [normalize_key(key) for key in extract_keys(text, build_pattern(helper))]


__all__ = [
    "build_pattern",
    "extract_keys",
    "normalize_key",
    "read_template",
    "scan_template",
    "short_label",
]
