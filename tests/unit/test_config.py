"""Unit tests for config.py"""

import pytest

from postdoc.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is read."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults():
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.required_keys == []
    assert settings.block_directives == ["highlight", "raw", "comment"]
    assert ".html" in settings.extensions
    assert set(settings.model_fields) == {"required_keys", "block_directives", "extensions"}


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("required_keys: [layout, title]\n")
    settings = load_config()
    assert settings.required_keys == ["layout", "title"]


def test_load_config_env_splits_csv(monkeypatch):
    """POSTDOC_REQUIRED_KEYS is split on commas."""
    monkeypatch.setenv("POSTDOC_REQUIRED_KEYS", "layout, title,,tag")
    settings = load_config()
    assert settings.required_keys == ["layout", "title", "tag"]


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """POSTDOC_BLOCK_DIRECTIVES takes precedence over config.yaml."""
    (tmp_path / "config.yaml").write_text("block_directives: [raw]\n")
    monkeypatch.setenv("POSTDOC_BLOCK_DIRECTIVES", "highlight,capture")
    settings = load_config()
    assert settings.block_directives == ["highlight", "capture"]


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("POSTDOC_REQUIRED_KEYS", "layout")
    settings = load_config(overrides={"required_keys": ["title"]})
    assert settings.required_keys == ["title"]


def test_load_config_none_override_ignored(monkeypatch):
    monkeypatch.setenv("POSTDOC_REQUIRED_KEYS", "layout")
    settings = load_config(overrides={"required_keys": None})
    assert settings.required_keys == ["layout"]


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_empty_block_directives(tmp_path):
    (tmp_path / "config.yaml").write_text("block_directives: []\n")
    with pytest.raises(ValueError):
        load_config()
