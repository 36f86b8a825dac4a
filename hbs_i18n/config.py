"""Settings shared by the scanner, the backend and the reporter."""

from __future__ import annotations

import glob
import os
import sys
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Iterable, Mapping, TextIO

import yaml

from .errors import ConfigurationError

DEFAULT_HELPER = "t"
DEFAULT_LOCALE = "en"
DEFAULT_API_BASE = "https://api.localeapp.com"
DEFAULT_TIMEOUT = 60.0
API_KEY_ENV = "LOCALEAPP_API_KEY"
LOCALE_EXTENSION = "yml"
_GLOB_CHARS = frozenset("*?[")

CONFIG_EXAMPLE = """\
You must configure hbs_i18n before scanning templates or sending missing translations.
example (hbs_i18n.yml):

  api_key: your-localeapp-api-key   # or set LOCALEAPP_API_KEY
  yml_load_path: config/locales
  hbs_load_path:
    - assets/scripts/app/templates/**/*.hbs
  helper: t
  default_locale: en

or in Python:

  Config(
      yml_load_path="config/locales",
      hbs_load_path=glob.glob("assets/scripts/app/templates/**/*.hbs", recursive=True),
      helper="t",
      default_locale="en",
  )
"""


def _flatten(items: Iterable[Any]) -> list[str]:
    flat: list[str] = []
    for item in items:
        if isinstance(item, (list, tuple)):
            flat.extend(_flatten(item))
        else:
            flat.append(str(item))
    return flat


@dataclass(frozen=True)
class Config:
    """Immutable scanner settings.

    Parameters
    ----------
    helper
        Name of the Handlebars helper used for translations, ``t`` for
        ``{{t some.key}}``.
    default_locale
        Locale whose translation file is loaded and reported against.
    yml_load_path
        Directory holding ``<locale>.yml`` translation files.
    hbs_load_path
        Already expanded template paths. Nested sequences are flattened.
    output
        Text sink for progress lines. ``None`` means the current
        ``sys.stdout`` at write time.
    api_key
        Localeapp project API key, only needed to send reports.
    api_base
        Root URL of the Localeapp API.
    timeout
        Seconds allowed for the report request.
    treat_backend_errors_as_missing
        Record keys as missing when the translation data cannot be read
        instead of raising :class:`~hbs_i18n.errors.BackendFailure`.
    """

    helper: str = DEFAULT_HELPER
    default_locale: str = DEFAULT_LOCALE
    yml_load_path: str | None = None
    hbs_load_path: tuple[str, ...] | None = None
    output: TextIO | None = field(default=None, repr=False, compare=False)
    api_key: str | None = field(default=None, repr=False)
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT
    treat_backend_errors_as_missing: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.helper, str) or not self.helper.strip():
            raise ConfigurationError("helper must be a non-empty string.")
        object.__setattr__(self, "default_locale", str(self.default_locale))
        if self.yml_load_path is not None:
            object.__setattr__(self, "yml_load_path", str(self.yml_load_path))
        if self.hbs_load_path is not None:
            paths = self.hbs_load_path
            if isinstance(paths, (str, Path)):
                paths = [paths]
            object.__setattr__(self, "hbs_load_path", tuple(_flatten(paths)))

    @property
    def is_configured(self) -> bool:
        return self.hbs_load_path is not None and self.yml_load_path is not None

    @property
    def sink(self) -> TextIO:
        return self.output if self.output is not None else sys.stdout

    @property
    def templates(self) -> tuple[str, ...]:
        return self.hbs_load_path or ()

    @property
    def locale_file(self) -> Path:
        """Return ``{yml_load_path}/{default_locale}.yml``."""

        self.ensure_configured()
        return Path(self.yml_load_path) / f"{self.default_locale}.{LOCALE_EXTENSION}"

    def ensure_configured(self) -> None:
        if not self.is_configured:
            raise ConfigurationError(CONFIG_EXAMPLE)

    def reconfigure(self, **changes: Any) -> "Config":
        """Return a new configuration with ``changes`` applied."""

        return replace(self, **changes)


def api_key_from_env(env: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if env is None else env
    return env.get(API_KEY_ENV) or None


def expand_templates(patterns: Iterable[str], base: Path | None = None) -> list[str]:
    """Expand glob ``patterns`` into an ordered list of existing files.

    Relative patterns are resolved against ``base`` when given. Paths that
    contain no glob characters are kept as-is so that a missing template is
    reported when it is read rather than silently dropped.
    """

    expanded: list[str] = []
    for pattern in patterns:
        path = Path(pattern).expanduser()
        if base is not None and not path.is_absolute():
            path = base / path
        if _GLOB_CHARS.intersection(str(path)):
            matches = sorted(glob.glob(str(path), recursive=True))
            expanded.extend(match for match in matches if Path(match).is_file())
        else:
            expanded.append(str(path))
    return list(dict.fromkeys(expanded))


def from_yaml(
    path: Path, env: Mapping[str, str] | None = None, **overrides: Any
) -> Config:
    """Load a :class:`Config` from a YAML document.

    Parameters
    ----------
    path
        YAML file with :class:`Config` field names as keys.
    env
        Environment used to look up ``LOCALEAPP_API_KEY`` when the file does
        not set ``api_key``. Defaults to ``os.environ``.
    overrides
        Values taking precedence over the file contents.
    """

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path}.")

    known = {item.name for item in fields(Config)} - {"output"}
    unknown = sorted(str(key) for key in raw if str(key) not in known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys in {path}: {', '.join(unknown)}"
        )

    base = path.parent
    values: dict[str, Any] = dict(raw)
    if values.get("yml_load_path") is not None:
        if not isinstance(values["yml_load_path"], str):
            msg = f"yml_load_path in {path} must be a directory path."
            raise ConfigurationError(msg)
        locales_dir = Path(values["yml_load_path"]).expanduser()
        if not locales_dir.is_absolute():
            locales_dir = base / locales_dir
        values["yml_load_path"] = str(locales_dir)
    if values.get("hbs_load_path") is not None:
        patterns = values["hbs_load_path"]
        if isinstance(patterns, str):
            patterns = [patterns]
        if not isinstance(patterns, list):
            raise ConfigurationError(
                f"hbs_load_path in {path} must be a path or a list of paths."
            )
        values["hbs_load_path"] = expand_templates(_flatten(patterns), base)
    if not values.get("api_key"):
        values["api_key"] = api_key_from_env(env)
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Config(**values)


__all__ = [
    "API_KEY_ENV",
    "CONFIG_EXAMPLE",
    "Config",
    "DEFAULT_HELPER",
    "DEFAULT_LOCALE",
    "api_key_from_env",
    "expand_templates",
    "from_yaml",
]
