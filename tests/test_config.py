"""Tests for the config module."""
import json

from pushup_league.config import (
    get_auto_lock,
    get_db_path,
    load_config,
    save_config,
    set_auto_lock,
    set_db_path,
)


class TestLoadConfig:
    def test_missing_file_returns_empty(self, tmp_path):
        assert load_config(tmp_path / "nonexistent.json") == {}

    def test_invalid_json_returns_empty(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not json", encoding="utf-8")
        assert load_config(path) == {}

    def test_loads_valid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"key": "value"}', encoding="utf-8")
        assert load_config(path) == {"key": "value"}


class TestSaveConfig:
    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "sub" / "dir" / "config.json"
        save_config({"nested": True}, path)
        assert json.loads(path.read_text()) == {"nested": True}

    def test_overwrites_existing(self, tmp_path):
        path = tmp_path / "config.json"
        save_config({"v": 1}, path)
        save_config({"v": 2}, path)
        assert json.loads(path.read_text()) == {"v": 2}


class TestDbPath:
    def test_not_set_returns_none(self, tmp_path):
        assert get_db_path(tmp_path / "config.json") is None

    def test_set_and_get(self, tmp_path):
        config_path = tmp_path / "config.json"
        target = tmp_path / "data" / "league.db"
        set_db_path(target, config_path)
        assert get_db_path(config_path) == target

    def test_preserves_other_keys(self, tmp_path):
        config_path = tmp_path / "config.json"
        save_config({"auto_lock": True}, config_path)
        set_db_path(tmp_path / "x.db", config_path)
        assert load_config(config_path)["auto_lock"] is True


class TestAutoLock:
    def test_defaults_to_false(self, tmp_path):
        assert get_auto_lock(tmp_path / "config.json") is False

    def test_enable_and_disable(self, tmp_path):
        config_path = tmp_path / "config.json"
        set_auto_lock(True, config_path)
        assert get_auto_lock(config_path) is True
        set_auto_lock(False, config_path)
        assert get_auto_lock(config_path) is False
