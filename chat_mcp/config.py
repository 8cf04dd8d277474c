"""Configuration management for the chat MCP server."""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


@dataclass
class ChatConfig:
    """Chat completion configuration."""
    api_url: str = "http://127.0.0.1:8000/api/chat"
    backend_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout: int = 30


@dataclass
class Config:
    """Main configuration."""
    server: ServerConfig = field(default_factory=ServerConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    strict_schemas: bool = False
    log_file: Optional[str] = "logs/chat_mcp_server.log"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging setup."""
        return {
            "log_level": self.server.log_level,
            "host": self.server.host,
            "port": self.server.port,
            "log_file": self.log_file,
        }


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from file.

    Without an explicit path, ``config.json`` is looked up in the current and
    parent directory; when none exists the defaults are used.
    """
    if config_path is None:
        for path in ["config.json", "../config.json"]:
            if os.path.exists(path):
                config_path = path
                break
        else:
            return Config()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return Config(
            server=ServerConfig(**data.get("server", {})),
            chat=ChatConfig(**data.get("chat", {})),
            strict_schemas=bool(data.get("strict_schemas", False)),
            log_file=data.get("log_file", "logs/chat_mcp_server.log"),
        )

    except (FileNotFoundError, json.JSONDecodeError, TypeError, AttributeError) as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")
