from datetime import datetime

import pytest

from tool_server.builtin_tools import (
    DISPLAY_TIMEZONE,
    EchoTool,
    GetConfigTool,
    GetEnvTool,
    GetTimeTool,
)
from tool_server.config import load_config
from tool_server.dispatcher import Dispatcher

FIXED_NOW = datetime(2024, 1, 5, 8, 3, 5, tzinfo=DISPLAY_TIMEZONE)


def fixed_clock(tz):
    return FIXED_NOW.astimezone(tz)


@pytest.fixture
def environ():
    return {
        "API_KEY": "sk-secret-123456",
        "SERVER_NAME": "demo",
        "PORT": "8080",
        "HOME": "/home/demo",
    }


@pytest.fixture
def config(environ):
    return load_config(environ)


@pytest.fixture
def tools():
    return [EchoTool(), GetTimeTool(clock=fixed_clock), GetEnvTool(), GetConfigTool()]


@pytest.fixture
def dispatcher(tools, config):
    return Dispatcher(tools=tools, config=config)
