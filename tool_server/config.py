"""Startup configuration for the tool server.

Configuration is read once from the process environment (optionally seeded
from a ``.env`` file) and frozen. Tools receive it by reference and never
touch ``os.environ`` themselves.
"""

import json
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from tool_server.exceptions import ConfigurationError

REQUIRED_ENV_VARS = ("API_KEY", "SERVER_NAME")

DEFAULT_NODE_ENV = "development"

# Characters of API_KEY shown in the startup confirmation.
MASK_PREFIX_LENGTH = 5


class Configuration(BaseModel):
    """Immutable snapshot of the server's environment."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    server_name: str = Field(min_length=1)
    node_env: Optional[str] = None
    port: Optional[str] = None
    custom_setting: Optional[str] = None
    environ: dict[str, str] = Field(default_factory=dict)

    @property
    def environment(self) -> str:
        return self.node_env or DEFAULT_NODE_ENV

    def masked_api_key(self) -> str:
        return mask_secret(self.api_key)


def mask_secret(value: str) -> str:
    """Keep a short prefix of a secret and hide the rest."""
    return f"{value[:MASK_PREFIX_LENGTH]}***"


def load_env_file(path: Optional[str] = None) -> bool:
    """Load a .env file into os.environ without overriding existing values."""
    return load_dotenv(dotenv_path=path)


def find_missing(environ: Mapping[str, str]) -> list[str]:
    """Return required keys that are absent or empty, in declaration order."""
    return [name for name in REQUIRED_ENV_VARS if not environ.get(name)]


def load_config(environ: Optional[Mapping[str, str]] = None) -> Configuration:
    """Build a Configuration from an environment mapping.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        ConfigurationError: If any required key is missing or empty.
    """
    if environ is None:
        environ = os.environ

    missing = find_missing(environ)
    if missing:
        raise ConfigurationError(missing)

    return Configuration(
        api_key=environ["API_KEY"],
        server_name=environ["SERVER_NAME"],
        node_env=environ.get("NODE_ENV") or None,
        port=environ.get("PORT") or None,
        custom_setting=environ.get("CUSTOM_SETTING") or None,
        environ=dict(environ),
    )


def format_missing_config(missing: list[str], launcher_name: str = "mcp-server") -> str:
    """Render the remediation text shown when startup validation fails."""
    lines = [
        "❌ 错误：缺少必需的环境变量！",
        "",
        f"缺少的变量: {', '.join(missing)}",
        "",
        "请按以下步骤配置：",
        "1. 复制 .env.example 为 .env",
        "   cp .env.example .env",
        "2. 编辑 .env 文件，设置以下变量：",
    ]
    lines.extend(f"   {name}=your-value-here" for name in missing)
    lines.append("")
    lines.append("或者在 MCP 客户端配置中添加 env 字段：")

    launcher = {
        "mcpServers": {
            launcher_name: {
                "command": "tool-server",
                "args": [],
                "env": {name: "your-value-here" for name in missing},
            }
        }
    }
    lines.append(json.dumps(launcher, indent=2, ensure_ascii=False))
    return "\n".join(lines)


def format_config_ok(config: Configuration) -> str:
    return (
        "✅ 环境变量验证通过\n"
        f"   SERVER_NAME: {config.server_name}\n"
        f"   API_KEY: {config.masked_api_key()}"
    )
