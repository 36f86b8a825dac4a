"""Command line interface for the Handlebars translation scanner."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

from .config import Config, api_key_from_env, expand_templates, from_yaml
from .engine import HandlebarsI18n
from .errors import HandlebarsI18nError


def _build_config(args: argparse.Namespace) -> Config:
    overrides = {
        "helper": args.helper,
        "default_locale": args.locale,
        "yml_load_path": args.locales_dir,
        "hbs_load_path": expand_templates(args.templates) if args.templates else None,
        "api_key": args.api_key,
        "api_base": args.api_base,
        "treat_backend_errors_as_missing": True if args.lenient_backend else None,
    }
    if args.config is not None:
        return from_yaml(args.config, **overrides)
    values = {key: value for key, value in overrides.items() if value is not None}
    values.setdefault("api_key", api_key_from_env())
    return Config(**values)


def cmd_check(args: argparse.Namespace) -> int:
    config = _build_config(args)
    reporter = HandlebarsI18n(config, max_workers=args.jobs)
    missing = reporter.register_missing_translations()
    locale = config.default_locale
    if missing:
        print(f"{len(missing)} missing translation(s) for {locale}")
    else:
        print(f"{locale}: ok")

    if args.send:
        outcome = reporter.send_missing_translations()
        if outcome is not None:
            print(f"localeapp responded {outcome.status_code}")
    return 1 if missing else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hbs-i18n",
        description="Find translation keys used in Handlebars templates but missing from a locale.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_check = subparsers.add_parser(
        "check", help="Scan templates and list missing translations"
    )
    parser_check.add_argument(
        "--config", type=Path, help="YAML configuration file (see Config fields)"
    )
    parser_check.add_argument(
        "--templates",
        nargs="+",
        help="Template paths or glob patterns, e.g. 'app/templates/**/*.hbs'",
    )
    parser_check.add_argument(
        "--locales-dir", help="Directory containing <locale>.yml files"
    )
    parser_check.add_argument("--locale", help="Locale to check (default: en)")
    parser_check.add_argument("--helper", help="Translation helper name (default: t)")
    parser_check.add_argument(
        "--send",
        action="store_true",
        help="Report missing translations to Localeapp",
    )
    parser_check.add_argument(
        "--api-key", help="Localeapp API key (default: $LOCALEAPP_API_KEY)"
    )
    parser_check.add_argument("--api-base", help="Localeapp API root URL")
    parser_check.add_argument(
        "--jobs", type=int, default=None, help="Read templates with N threads"
    )
    parser_check.add_argument(
        "--lenient-backend",
        action="store_true",
        help="Count keys as missing when the locale file cannot be loaded",
    )
    parser_check.set_defaults(func=cmd_check)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except HandlebarsI18nError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main(sys.argv[1:]))
