"""Project config loading and environment overrides."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from tsformat.lib.config.settings import TsformatConfig, load_config


def _install_config(project_root: Path, content: str) -> None:
    config_path = project_root / ".tsformat" / "config.toml"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(content, encoding="utf-8")


def test_load_config_from_fixture_toml(package_root: Path, tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    fixture_path = package_root / "tests" / "fixtures" / "config" / "settings.toml"
    config_path = project_root / ".tsformat" / "config.toml"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(fixture_path, config_path)

    loaded = load_config(project_root)

    assert loaded == TsformatConfig(
        policy="abort",
        newline=False,
        flush=True,
        typed_arguments=False,
        locale="C",
    )


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir(parents=True, exist_ok=True)

    loaded = load_config(project_root)

    assert loaded == TsformatConfig()


def test_load_config_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _install_config(
        project_root,
        (
            "[defaults]\n"
            "policy = 'report'\n"
            "[output]\n"
            "newline = true\n"
        ),
    )
    monkeypatch.setenv("TSFORMAT_POLICY", "ABORT")
    monkeypatch.setenv("TSFORMAT_NEWLINE", "off")
    monkeypatch.setenv("TSFORMAT_TYPED_ARGUMENTS", "no")
    monkeypatch.setenv("TSFORMAT_LOCALE", " de_DE.UTF-8 ")

    loaded = load_config(project_root)

    assert loaded.policy == "abort"
    assert loaded.newline is False
    assert loaded.typed_arguments is False
    assert loaded.locale == "de_DE.UTF-8"


def test_empty_locale_env_clears_file_value(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    project_root = tmp_path / "project"
    _install_config(project_root, "[arguments]\nlocale = 'C'\n")
    monkeypatch.setenv("TSFORMAT_LOCALE", "")

    assert load_config(project_root).locale is None


def test_invalid_env_bool_names_the_variable(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("TSFORMAT_FLUSH", "sometimes")

    with pytest.raises(ValueError, match="TSFORMAT_FLUSH"):
        load_config(tmp_path)


def test_invalid_policy_is_rejected(tmp_path: Path) -> None:
    _install_config(tmp_path, "[defaults]\npolicy = 'explode'\n")

    with pytest.raises(ValueError, match=r"defaults\.policy"):
        load_config(tmp_path)


def test_file_bool_must_be_toml_bool(tmp_path: Path) -> None:
    _install_config(tmp_path, "[output]\nnewline = 'yes'\n")

    with pytest.raises(ValueError, match="expected bool"):
        load_config(tmp_path)


def test_section_must_be_a_table(tmp_path: Path) -> None:
    _install_config(tmp_path, "output = 1\n")

    with pytest.raises(ValueError, match="expected table"):
        load_config(tmp_path)


def test_unknown_keys_are_ignored_with_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    _install_config(
        tmp_path,
        (
            "[output]\n"
            "color = true\n"
            "[plugins]\n"
            "enabled = true\n"
        ),
    )

    with caplog.at_level(logging.WARNING, logger="tsformat.lib.config.settings"):
        loaded = load_config(tmp_path)

    assert loaded == TsformatConfig()
    assert "output.color" in caplog.text
    assert "plugins" in caplog.text
