"""Exception types raised by the template scanner."""

from __future__ import annotations


class HandlebarsI18nError(Exception):
    """Base class for every error raised by :mod:`hbs_i18n`."""


class ConfigurationError(HandlebarsI18nError, ValueError):
    """Raised when an operation needs settings that were never provided."""


class BackendFailure(HandlebarsI18nError):
    """Raised when the translation data itself cannot be used.

    This is distinct from a key that is simply absent from the locale, which
    is reported through :class:`hbs_i18n.backend.Lookup` instead.
    """


class TemplateReadError(HandlebarsI18nError, OSError):
    """Raised when a template file cannot be read."""


class TransportError(HandlebarsI18nError):
    """Raised when the missing-translation report could not be delivered."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "BackendFailure",
    "ConfigurationError",
    "HandlebarsI18nError",
    "TemplateReadError",
    "TransportError",
]
