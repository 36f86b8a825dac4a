"""Tests for configuration defaults, validation and YAML loading."""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path

import pytest
from hbs_i18n.config import Config, expand_templates, from_yaml
from hbs_i18n.errors import ConfigurationError


def test_defaults_are_unconfigured() -> None:
    config = Config()
    assert config.helper == "t"
    assert config.default_locale == "en"
    assert config.templates == ()
    assert not config.is_configured
    with pytest.raises(ConfigurationError, match="example"):
        config.ensure_configured()


def test_configured_with_empty_template_list(tmp_path: Path) -> None:
    config = Config(yml_load_path=str(tmp_path), hbs_load_path=[], default_locale="ru")
    assert config.is_configured
    assert config.locale_file == tmp_path / "ru.yml"


def test_locale_file_requires_configuration() -> None:
    with pytest.raises(ConfigurationError):
        Config(hbs_load_path=[]).locale_file


def test_template_paths_are_flattened() -> None:
    config = Config(hbs_load_path=[["a.hbs", ("b.hbs",)], "c.hbs"])
    assert config.hbs_load_path == ("a.hbs", "b.hbs", "c.hbs")
    assert Config(hbs_load_path="only.hbs").hbs_load_path == ("only.hbs",)


def test_config_is_immutable() -> None:
    config = Config(helper="t", default_locale="ru")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.helper = "translate"  # type: ignore[misc]


def test_reconfigure_returns_independent_instance(tmp_path: Path) -> None:
    original = Config(yml_load_path=str(tmp_path), hbs_load_path=["a.hbs"])
    changed = original.reconfigure(default_locale="ru", helper="i18n")

    assert changed is not original
    assert (changed.default_locale, changed.helper) == ("ru", "i18n")
    assert (original.default_locale, original.helper) == ("en", "t")
    assert changed.hbs_load_path == original.hbs_load_path


def test_blank_helper_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        Config(helper="  ")


def test_sink_defaults_to_current_stdout() -> None:
    assert Config().sink is sys.stdout


def test_expand_templates_globs_and_keeps_plain_paths(tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    (templates / "nested").mkdir(parents=True)
    (templates / "b.hbs").write_text("", encoding="utf-8")
    (templates / "a.hbs").write_text("", encoding="utf-8")
    (templates / "nested" / "c.hbs").write_text("", encoding="utf-8")

    expanded = expand_templates(
        ["templates/**/*.hbs", "templates/a.hbs", "templates/absent.hbs"], tmp_path
    )
    assert expanded == [
        str(templates / "a.hbs"),
        str(templates / "b.hbs"),
        str(templates / "nested" / "c.hbs"),
        str(templates / "absent.hbs"),
    ]


def test_from_yaml_resolves_relative_paths(tmp_path: Path) -> None:
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "index.hbs").write_text("", encoding="utf-8")
    config_path = tmp_path / "hbs_i18n.yml"
    config_path.write_text(
        "yml_load_path: locales\n"
        "hbs_load_path:\n"
        "  - templates/*.hbs\n"
        "default_locale: ru\n"
        "helper: t\n",
        encoding="utf-8",
    )

    config = from_yaml(config_path, env={"LOCALEAPP_API_KEY": "from-env"})

    assert config.yml_load_path == str(tmp_path / "locales")
    assert config.hbs_load_path == (str(tmp_path / "templates" / "index.hbs"),)
    assert config.default_locale == "ru"
    assert config.api_key == "from-env"


def test_from_yaml_overrides_take_precedence(tmp_path: Path) -> None:
    config_path = tmp_path / "hbs_i18n.yml"
    config_path.write_text(
        "yml_load_path: /srv/locales\nhbs_load_path: []\napi_key: file-key\n",
        encoding="utf-8",
    )

    config = from_yaml(config_path, env={}, default_locale="de", helper=None)

    assert config.default_locale == "de"
    assert config.helper == "t"
    assert config.api_key == "file-key"
    assert config.is_configured


@pytest.mark.parametrize(
    "content",
    [
        "unknown_setting: 1\n",
        "- a\n- b\n",
        "helper: [unclosed\n",
        "1: x\nyml_load_path: loc\nhbs_load_path: []\n",
        "yml_load_path: loc\nhbs_load_path: 5\n",
        "yml_load_path: [loc]\nhbs_load_path: []\n",
    ],
)
def test_from_yaml_rejects_bad_documents(tmp_path: Path, content: str) -> None:
    config_path = tmp_path / "hbs_i18n.yml"
    config_path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        from_yaml(config_path, env={})


def test_from_yaml_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        from_yaml(tmp_path / "absent.yml", env={})
