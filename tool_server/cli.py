"""Process entry point: validate configuration, then serve MCP over stdio.

Exit codes: 0 on graceful shutdown, 1 on missing configuration or any
startup/transport failure. Everything human-readable goes to stderr.
"""

import logging
import os
import sys
from typing import Optional

import anyio

from tool_server.builtin_tools import default_tools
from tool_server.config import (
    Configuration,
    format_config_ok,
    format_missing_config,
    load_config,
    load_env_file,
)
from tool_server.dispatcher import Dispatcher
from tool_server.exceptions import ConfigurationError
from tool_server.hooks import LoggingMiddleware
from tool_server.server import ToolServer

logger = logging.getLogger("tool_server")


def configure_logging(level: Optional[str] = None) -> None:
    """Send all logging to stderr; stdout carries the protocol."""
    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def validate_environment() -> Configuration:
    """Load configuration or exit the process with remediation text."""
    try:
        config = load_config()
    except ConfigurationError as e:
        print(format_missing_config(e.missing), file=sys.stderr)
        sys.exit(1)
    print(format_config_ok(config), file=sys.stderr)
    return config


def build_tool_server(config: Configuration) -> ToolServer:
    dispatcher = Dispatcher(
        tools=default_tools(),
        config=config,
        middlewares=[LoggingMiddleware()],
    )
    return ToolServer(dispatcher)


def main() -> None:
    load_env_file()
    configure_logging()
    config = validate_environment()

    try:
        tool_server = build_tool_server(config)
        anyio.run(tool_server.serve_stdio)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        logger.exception(f"服务器错误: {e}")
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
