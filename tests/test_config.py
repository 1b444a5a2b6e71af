"""Tests for YAML settings and environment overrides."""

from pathlib import Path

import pytest

from variates.config import CONFIG_PATH, load_settings, load_yaml
from variates.defaults import get_default_seed


def test_bundled_config_exists() -> None:
    assert CONFIG_PATH.is_file()


def test_load_yaml_returns_default_for_missing_or_invalid(tmp_path: Path) -> None:
    assert load_yaml(tmp_path / "missing.yaml") == {}
    bad = tmp_path / "bad.yaml"
    bad.write_text("seed: [unclosed", encoding="utf-8")
    assert load_yaml(bad, {"seed": 1}) == {"seed": 1}


def test_settings_from_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VARIATES_SEED", raising=False)
    monkeypatch.delenv("VARIATES_LOG_LEVEL", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("seed: 31\ndefault_count: 4\nlog_level: debug\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings.seed == 31
    assert settings.default_count == 4
    assert settings.log_level == "DEBUG"


def test_environment_seed_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("seed: 31\n", encoding="utf-8")
    monkeypatch.setenv("VARIATES_SEED", "none")
    assert load_settings(path).seed is None
    monkeypatch.setenv("VARIATES_SEED", "808")
    assert load_settings(path).seed == 808


def test_invalid_seed_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VARIATES_SEED", "abc")
    with pytest.raises(ValueError, match="Seed"):
        get_default_seed()
