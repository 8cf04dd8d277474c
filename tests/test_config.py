"""Tests for configuration loading."""

import json

import pytest

from chat_mcp.config import Config, load_config


class TestLoadConfig:
    """Test load_config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8000
        assert config.chat.model == "gpt-4o-mini"
        assert config.chat.backend_url is None
        assert config.strict_schemas is False

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "server": {"host": "0.0.0.0", "port": 9000, "log_level": "DEBUG"},
            "chat": {"backend_url": "http://llm.internal", "temperature": 0.2},
            "strict_schemas": True,
            "log_file": None,
        }))

        config = load_config(str(path))

        assert config.server.port == 9000
        assert config.chat.backend_url == "http://llm.internal"
        assert config.chat.temperature == 0.2
        assert config.strict_schemas is True
        assert config.log_file is None

    def test_found_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "config.json").write_text(json.dumps({"server": {"port": 8123}}))
        monkeypatch.chdir(tmp_path)
        assert load_config().server.port == 8123

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Failed to load config"):
            load_config(str(path))

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"server": {"hostname": "x"}}))
        with pytest.raises(ValueError, match="Failed to load config"):
            load_config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(str(tmp_path / "absent.json"))

    def test_to_dict(self):
        config = Config()
        assert config.to_dict()["log_level"] == "INFO"
        assert config.to_dict()["log_file"] == "logs/chat_mcp_server.log"
