"""The four tools served by default: echo, get_time, get_env, get_config."""

import json
from datetime import datetime, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from pydantic import Field

from tool_server.config import Configuration
from tool_server.execution import ToolCallResult
from tool_server.tools import Tool, ToolInput

NOT_SET = "未设置"
API_KEY_PRESENT = "已设置 (***隐藏)"

DISPLAY_TIMEZONE = ZoneInfo("Asia/Shanghai")


def format_local_time(moment: datetime) -> str:
    """Format like a zh-CN locale string, e.g. ``2024/1/5 08:03:05``."""
    return f"{moment.year}/{moment.month}/{moment.day} {moment:%H:%M:%S}"


class EchoInput(ToolInput):
    message: str = Field(description="要返回的消息")


class EchoTool(Tool):
    name = "echo"
    description = "返回输入的文本"
    input_model = EchoInput

    async def execute(self, arguments: EchoInput, config: Configuration) -> ToolCallResult:
        return ToolCallResult.text(f"回显: {arguments.message}")


class GetTimeInput(ToolInput):
    pass


class GetTimeTool(Tool):
    name = "get_time"
    description = "获取当前时间"
    input_model = GetTimeInput

    def __init__(
        self,
        clock: Optional[Callable[[tzinfo], datetime]] = None,
        timezone: tzinfo = DISPLAY_TIMEZONE,
    ):
        self._clock = clock or datetime.now
        self._timezone = timezone

    async def execute(self, arguments: GetTimeInput, config: Configuration) -> ToolCallResult:
        now = self._clock(self._timezone)
        return ToolCallResult.text(f"当前时间: {format_local_time(now)}")


class GetEnvInput(ToolInput):
    key: str = Field(description="环境变量的键名")


class GetEnvTool(Tool):
    name = "get_env"
    description = "获取环境变量的值"
    input_model = GetEnvInput

    async def execute(self, arguments: GetEnvInput, config: Configuration) -> ToolCallResult:
        key = arguments.key
        value = config.environ.get(key)
        if value is None:
            return ToolCallResult.text(f"环境变量 {key} 未设置")
        # Values are returned verbatim, secrets included.
        return ToolCallResult.text(f"{key} = {value}")


class GetConfigInput(ToolInput):
    pass


class GetConfigTool(Tool):
    name = "get_config"
    description = "获取服务器配置信息（从环境变量读取）"
    input_model = GetConfigInput

    async def execute(self, arguments: GetConfigInput, config: Configuration) -> ToolCallResult:
        summary = {
            "serverName": config.server_name or NOT_SET,
            "environment": config.environment,
            "port": config.port or NOT_SET,
            "apiKey": API_KEY_PRESENT if config.api_key else NOT_SET,
            "customSetting": config.custom_setting or NOT_SET,
        }
        body = json.dumps(summary, indent=2, ensure_ascii=False)
        return ToolCallResult.text(f"服务器配置:\n{body}")


def default_tools() -> list[Tool]:
    """Return the registry's tools in advertised order."""
    return [EchoTool(), GetTimeTool(), GetEnvTool(), GetConfigTool()]
