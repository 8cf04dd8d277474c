"""Tests for main entry point."""

import json
import os
import sys
from unittest.mock import MagicMock, patch

import pytest

from chat_mcp.main import main
from chat_mcp.server import CONFIG_ENV


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory with no config in the environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    return tmp_path


class TestMain:
    """Test main function and CLI argument parsing."""

    @patch('chat_mcp.main.uvicorn.run')
    @patch('chat_mcp.main.create_app')
    def test_main_default_args(self, mock_create_app, mock_uvicorn_run):
        mock_app = MagicMock()
        mock_create_app.return_value = mock_app

        with patch.object(sys, 'argv', ['chat-mcp-server']):
            main()

        mock_create_app.assert_called_once_with(None)
        mock_uvicorn_run.assert_called_once_with(
            mock_app,
            host="127.0.0.1",
            port=8000,
            reload=False
        )

    @patch('chat_mcp.main.uvicorn.run')
    @patch('chat_mcp.main.create_app')
    def test_main_host_port_from_config(self, mock_create_app, mock_uvicorn_run, isolated_cwd):
        config_file = isolated_cwd / "server.json"
        config_file.write_text(json.dumps({"server": {"host": "0.0.0.0", "port": 8765}}))
        mock_app = MagicMock()
        mock_create_app.return_value = mock_app

        with patch.object(sys, 'argv', ['chat-mcp-server', '--config', str(config_file)]):
            main()

        mock_create_app.assert_called_once_with(str(config_file))
        mock_uvicorn_run.assert_called_once_with(
            mock_app,
            host="0.0.0.0",
            port=8765,
            reload=False
        )

    @patch('chat_mcp.main.uvicorn.run')
    @patch('chat_mcp.main.create_app')
    def test_main_custom_args_override_config(self, mock_create_app, mock_uvicorn_run, isolated_cwd):
        config_file = isolated_cwd / "server.json"
        config_file.write_text(json.dumps({"server": {"host": "0.0.0.0", "port": 8765}}))
        mock_app = MagicMock()
        mock_create_app.return_value = mock_app

        with patch.object(sys, 'argv', [
            'chat-mcp-server',
            '--host', '192.168.1.100',
            '--port', '9000',
            '--config', str(config_file)
        ]):
            main()

        mock_uvicorn_run.assert_called_once_with(
            mock_app,
            host="192.168.1.100",
            port=9000,
            reload=False
        )

    @patch('chat_mcp.main.uvicorn.run')
    @patch('chat_mcp.main.create_app')
    def test_main_reload_uses_import_string(self, mock_create_app, mock_uvicorn_run):
        with patch.object(sys, 'argv', [
            'chat-mcp-server', '--reload', '--host', '0.0.0.0', '--port', '9000',
            '--config', 'custom.json'
        ]):
            main()

        mock_create_app.assert_not_called()
        mock_uvicorn_run.assert_called_once_with(
            "chat_mcp.server:create_app",
            factory=True,
            host="0.0.0.0",
            port=9000,
            reload=True
        )
        assert os.environ[CONFIG_ENV] == "custom.json"


class TestCreateAppFromEnvironment:

    def test_config_path_from_environment(self, isolated_cwd, monkeypatch):
        config_file = isolated_cwd / "env.json"
        config_file.write_text(json.dumps({"log_file": None, "strict_schemas": True}))
        monkeypatch.setenv(CONFIG_ENV, str(config_file))

        with patch('chat_mcp.server.MCPServer') as mock_server:
            from chat_mcp.server import create_app
            create_app()

        mock_server.assert_called_once_with(str(config_file))
