"""Command-line entry point for the chat MCP server."""

import argparse
import os

import uvicorn

from .config import load_config
from .server import CONFIG_ENV, create_app


def main():
    """Parse arguments and run the server.

    ``--host`` and ``--port`` override the ``server`` section of the config
    file. With ``--reload`` uvicorn imports the app factory itself, so the
    config path is handed over through the environment.
    """
    parser = argparse.ArgumentParser(description="Chat MCP Server")
    parser.add_argument("--host", default=None, help="Host to bind to (default: from config)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (default: from config)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--config", default=None, help="Path to config.json")
    args = parser.parse_args()

    host, port = args.host, args.port
    if host is None or port is None:
        server_config = load_config(args.config).server
        host = host if host is not None else server_config.host
        port = port if port is not None else server_config.port

    if args.reload:
        if args.config:
            os.environ[CONFIG_ENV] = args.config
        uvicorn.run(
            "chat_mcp.server:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True
        )
        return

    app = create_app(args.config)
    uvicorn.run(
        app,
        host=host,
        port=port,
        reload=False
    )


if __name__ == "__main__":
    main()
