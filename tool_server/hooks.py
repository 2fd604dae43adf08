"""Hook system for the request dispatcher.

Lets callers observe tool calls without modifying Dispatcher code.
Follows Flask's before_request/after_request pattern.

Architecture:
- HookRegistry is the CORE implementation
- Decorator (@hooks.on) and Middleware are convenience wrappers
- Everything goes through HookRegistry
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class HookEvent(str, Enum):
    """Available hook points in a dispatch."""

    BEFORE_TOOL_CALL = "before_tool_call"
    AFTER_TOOL_CALL = "after_tool_call"
    ON_TOOL_ERROR = "on_tool_error"


# ============================================================================
# Hook Event Data Classes
# ============================================================================


@dataclass
class BeforeToolCallEventData:
    """Called before a tool is resolved and executed."""

    tool_name: str
    arguments: Dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class AfterToolCallEventData:
    """Called after a tool call produced a successful result."""

    tool_name: str
    result: Any  # ToolCallResult
    execution_time_ms: float


@dataclass
class OnToolErrorEventData:
    """Called when a dispatch ends in a failure."""

    tool_name: str
    arguments: Dict[str, Any]
    kind: str
    error_message: str
    execution_time_ms: float


# ============================================================================
# Hook Registry
# ============================================================================


class HookRegistry:
    """Central registry for all hooks.

    Supports both decorator-style and direct registration.

    Usage:
        hooks = HookRegistry()

        @hooks.on('after_tool_call')
        async def log_tool(event):
            logger.info("Tool: %s", event.tool_name)
    """

    def __init__(self):
        self._handlers: Dict[str, List[Callable]] = {
            event.value: [] for event in HookEvent
        }

    def on(self, hook_name: str):
        """Decorator for registering hook handlers."""

        def decorator(func: Callable) -> Callable:
            self.register_handler(hook_name, func)
            return func

        return decorator

    def register_handler(self, hook_name: str, handler: Callable) -> None:
        """Register a hook handler.

        Args:
            hook_name: Name of the hook
            handler: Async function to call

        Raises:
            ValueError: If hook_name is not valid
        """
        if hook_name not in self._handlers:
            valid_hooks = [e.value for e in HookEvent]
            raise ValueError(
                f"Invalid hook name '{hook_name}'. Valid hooks: {valid_hooks}"
            )
        self._handlers[hook_name].append(handler)

    def register_middleware(self, middleware: "Middleware") -> None:
        for event in HookEvent:
            self.register_handler(event.value, getattr(middleware, event.value))

    async def trigger(self, hook_name: str, event_data: Any) -> None:
        """Execute all handlers for a hook.

        Handler failures are logged and never reach the dispatcher.
        """
        for handler in self._handlers.get(hook_name, []):
            try:
                await handler(event_data)
            except Exception as e:
                logger.warning(f"Hook '{hook_name}' raised exception: {e}")

    def has_handlers(self, hook_name: str) -> bool:
        """Check if hook has any registered handlers."""
        return len(self._handlers.get(hook_name, [])) > 0

    def clear(self) -> None:
        """Clear all handlers (useful for testing)."""
        for hook_name in self._handlers:
            self._handlers[hook_name] = []


# ============================================================================
# Middleware
# ============================================================================


class Middleware:
    """Base class for middleware (stateful hook handlers).

    Override methods for hooks you want to handle.
    """

    async def before_tool_call(self, event: BeforeToolCallEventData) -> None:
        pass

    async def after_tool_call(self, event: AfterToolCallEventData) -> None:
        pass

    async def on_tool_error(self, event: OnToolErrorEventData) -> None:
        pass


class LoggingMiddleware(Middleware):
    """Logs every tool call. Output goes wherever logging is configured (stderr)."""

    def __init__(self, logger_name: str = "tool_server.calls"):
        self.logger = logging.getLogger(logger_name)

    async def before_tool_call(self, event: BeforeToolCallEventData) -> None:
        self.logger.debug(f"Calling tool '{event.tool_name}' with {event.arguments}")

    async def after_tool_call(self, event: AfterToolCallEventData) -> None:
        self.logger.info(
            f"Tool '{event.tool_name}' completed in {event.execution_time_ms:.1f}ms"
        )

    async def on_tool_error(self, event: OnToolErrorEventData) -> None:
        self.logger.warning(
            f"Tool '{event.tool_name}' failed ({event.kind}): {event.error_message}"
        )
