"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tasktracker.config import DATA_DIR, Config, load_config


@pytest.fixture(autouse=True)
def no_env_storage(monkeypatch):
    monkeypatch.delenv("TASKTRACKER_STORAGE", raising=False)


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "tasktracker.conf"


class TestLoadConfig:
    def test_defaults_when_missing(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()
        assert config.storage_path == DATA_DIR / "tasks.json"
        assert config.debug is False
        assert config.default_priority == 2

    def test_reads_values(self, config_file, tmp_path):
        config_file.write_text(
            "# tasktracker settings\n"
            f"STORAGE_PATH = {tmp_path / 'mine.json'}\n"
            "DEBUG = yes\n"
            "DEFAULT_PRIORITY = 3\n"
        )
        config = load_config(config_file)
        assert config.storage_path == tmp_path / "mine.json"
        assert config.debug is True
        assert config.default_priority == 3

    def test_quoted_value_with_comment(self, config_file):
        config_file.write_text('storage_path = "/tmp/my tasks.json" # where tasks live\n')
        assert load_config(config_file).storage_path == Path("/tmp/my tasks.json")

    def test_unquoted_inline_comment(self, config_file):
        config_file.write_text("default_priority = 1  # low by default\n")
        assert load_config(config_file).default_priority == 1

    def test_expands_user(self, config_file):
        config_file.write_text("storage_path = ~/tasks.json\n")
        assert load_config(config_file).storage_path == Path.home() / "tasks.json"

    def test_invalid_values_keep_defaults(self, config_file, caplog):
        config_file.write_text("debug = maybe\ndefault_priority = high\n")
        config = load_config(config_file)
        assert config.debug is False
        assert config.default_priority == 2
        assert "DEBUG" in caplog.text
        assert "DEFAULT_PRIORITY" in caplog.text

    def test_ignores_unknown_keys_and_junk(self, config_file):
        config_file.write_text("colour = blue\nthis line has no equals\n\n")
        assert load_config(config_file) == Config()

    def test_env_overrides_file(self, config_file, tmp_path, monkeypatch):
        config_file.write_text(f"storage_path = {tmp_path / 'file.json'}\n")
        monkeypatch.setenv("TASKTRACKER_STORAGE", str(tmp_path / "env.json"))
        assert load_config(config_file).storage_path == tmp_path / "env.json"
