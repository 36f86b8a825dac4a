"""Reconciliation of template keys against a locale's translations."""

from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Protocol, TextIO

from .backend import Lookup, YamlBackend
from .collector import MissingTranslations
from .config import Config
from .errors import BackendFailure
from .matcher import scan_template, short_label
from .reporter import LocaleappClient, ReportOutcome, send_missing_translations


class TranslationBackend(Protocol):
    def translate(self, locale: str, key: str) -> Lookup: ...


def collect_keys(
    templates: Iterable[str | Path], helper: str, max_workers: int | None = None
) -> list[str]:
    """Return the unique normalized keys used across ``templates``.

    Files are read in the given order and keys keep the order of their first
    occurrence. With ``max_workers`` above one the files are read by a thread
    pool; a file that cannot be read aborts the whole scan.
    """

    templates = list(templates)
    if max_workers and max_workers > 1 and len(templates) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            per_file = list(pool.map(lambda path: scan_template(path, helper), templates))
    else:
        per_file = [scan_template(path, helper) for path in templates]
    return list(dict.fromkeys(key for keys in per_file for key in keys))


def reconcile_all(
    templates: Iterable[str | Path],
    helper: str,
    locale: str,
    backend: TranslationBackend,
    collector: MissingTranslations,
    output: TextIO | None = None,
    *,
    treat_backend_errors_as_missing: bool = False,
    max_workers: int | None = None,
) -> list[str]:
    """Record every key from ``templates`` that ``backend`` cannot resolve.

    Each miss prints ``translation missing: <key>`` to ``output`` and is added
    to ``collector`` with the text after its last dot as description. Keys
    that resolve produce no output.

    Returns
    -------
    list of str
        Keys found missing during this call, in scan order.
    """

    sink = output if output is not None else sys.stdout
    missing: list[str] = []
    for key in collect_keys(templates, helper, max_workers=max_workers):
        try:
            absent = backend.translate(locale, key).missing
        except BackendFailure:
            if not treat_backend_errors_as_missing:
                raise
            absent = True
        if absent:
            print(f"translation missing: {key}", file=sink)
            collector.add(locale, key, short_label(key))
            missing.append(key)
    return missing


class HandlebarsI18n:
    """Scan configured templates and report their missing translations.

    Examples
    --------
    ::

        reporter = HandlebarsI18n.configure(
            yml_load_path="config/locales",
            hbs_load_path=glob.glob("app/templates/**/*.hbs", recursive=True),
            default_locale="ru",
        )
        reporter.send_missing_translations()
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        collector: MissingTranslations | None = None,
        backend: TranslationBackend | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config if config is not None else Config()
        self.missing_translations = (
            collector if collector is not None else MissingTranslations()
        )
        self.max_workers = max_workers
        self._backend = backend
        self._backend_source: Path | None = None

    @classmethod
    def configure(
        cls,
        config: Config | None = None,
        *,
        collector: MissingTranslations | None = None,
        backend: TranslationBackend | None = None,
        max_workers: int | None = None,
        **settings: object,
    ) -> "HandlebarsI18n":
        """Build a reporter and immediately register missing translations.

        ``settings`` are :class:`Config` fields applied on top of ``config``.
        """

        config = config if config is not None else Config()
        if settings:
            config = config.reconfigure(**settings)
        reporter = cls(
            config, collector=collector, backend=backend, max_workers=max_workers
        )
        reporter.register_missing_translations()
        return reporter

    @property
    def backend(self) -> TranslationBackend:
        """Translation backend for the configured locale file.

        A backend built from configuration is rebuilt when the locale file
        changes; an injected backend is always kept.
        """

        if self._backend is not None and self._backend_source is None:
            return self._backend
        source = self.config.locale_file
        if self._backend is None or self._backend_source != source:
            self._backend = YamlBackend(source)
            self._backend_source = source
        return self._backend

    def reconfigure(self, **changes: object) -> "HandlebarsI18n":
        """Return an independent reporter with ``changes`` applied to its config.

        The new reporter starts from a copy of the collected keys.
        """

        injected = self._backend if self._backend_source is None else None
        return type(self)(
            self.config.reconfigure(**changes),
            collector=self.missing_translations.copy(),
            backend=injected,
            max_workers=self.max_workers,
        )

    def register_missing_translations(self) -> list[str]:
        config = self.config
        config.ensure_configured()
        return reconcile_all(
            config.templates,
            config.helper,
            config.default_locale,
            self.backend,
            self.missing_translations,
            config.sink,
            treat_backend_errors_as_missing=config.treat_backend_errors_as_missing,
            max_workers=self.max_workers,
        )

    def send_missing_translations(
        self, client: LocaleappClient | None = None
    ) -> ReportOutcome | None:
        return send_missing_translations(self.config, self.missing_translations, client)


__all__ = [
    "HandlebarsI18n",
    "TranslationBackend",
    "collect_keys",
    "reconcile_all",
]
