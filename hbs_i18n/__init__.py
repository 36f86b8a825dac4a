"""Report translation keys used in Handlebars templates but missing from a locale."""

from .backend import Lookup, YamlBackend
from .collector import MissingTranslations
from .config import Config, expand_templates, from_yaml
from .engine import HandlebarsI18n, collect_keys, reconcile_all
from .errors import (
    BackendFailure,
    ConfigurationError,
    HandlebarsI18nError,
    TemplateReadError,
    TransportError,
)
from .matcher import build_pattern, extract_keys, normalize_key, short_label
from .reporter import LocaleappClient, ReportOutcome, send_missing_translations

__all__ = [
    "BackendFailure",
    "Config",
    "ConfigurationError",
    "HandlebarsI18n",
    "HandlebarsI18nError",
    "LocaleappClient",
    "Lookup",
    "MissingTranslations",
    "ReportOutcome",
    "TemplateReadError",
    "TransportError",
    "YamlBackend",
    "build_pattern",
    "collect_keys",
    "expand_templates",
    "extract_keys",
    "from_yaml",
    "normalize_key",
    "reconcile_all",
    "send_missing_translations",
    "short_label",
]
