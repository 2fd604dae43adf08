from tool_server.builtin_tools import (
    EchoTool,
    GetConfigTool,
    GetEnvTool,
    GetTimeTool,
    default_tools,
)
from tool_server.config import Configuration, load_config
from tool_server.dispatcher import Dispatcher
from tool_server.exceptions import (
    ConfigurationError,
    ToolExecutionError,
    ToolNotFound,
    ToolServerError,
    ToolValidationError,
)
from tool_server.execution import (
    ContentItem,
    Err,
    FailureReason,
    Ok,
    Outcome,
    ToolCallRequest,
    ToolCallResult,
    ToolDescriptor,
)
from tool_server.hooks import (
    AfterToolCallEventData,
    BeforeToolCallEventData,
    HookEvent,
    HookRegistry,
    LoggingMiddleware,
    Middleware,
    OnToolErrorEventData,
)
from tool_server.server import ToolServer
from tool_server.tools import Tool, ToolInput

__all__ = [
    # Core
    "Configuration",
    "Dispatcher",
    "Tool",
    "ToolInput",
    "ToolServer",
    "load_config",
    # Data model
    "ContentItem",
    "Err",
    "FailureReason",
    "Ok",
    "Outcome",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolDescriptor",
    # Tools
    "EchoTool",
    "GetConfigTool",
    "GetEnvTool",
    "GetTimeTool",
    "default_tools",
    # Hooks
    "HookRegistry",
    "HookEvent",
    "Middleware",
    "LoggingMiddleware",
    "BeforeToolCallEventData",
    "AfterToolCallEventData",
    "OnToolErrorEventData",
    # Exceptions
    "ToolServerError",
    "ConfigurationError",
    "ToolExecutionError",
    "ToolNotFound",
    "ToolValidationError",
]
