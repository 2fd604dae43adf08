import logging
import time
from typing import Optional, Sequence

from pydantic import ValidationError

from tool_server.config import Configuration
from tool_server.exceptions import ToolExecutionError, ToolNotFound, ToolValidationError
from tool_server.execution import (
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
    HookRegistry,
    Middleware,
    OnToolErrorEventData,
)
from tool_server.tools import Tool

logger = logging.getLogger(__name__)


def _format_validation_error(tool_name: str, error: ValidationError) -> str:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "arguments"
        problems.append(f"{location}: {detail['msg']}")
    return f"工具 {tool_name} 参数无效 ({'; '.join(problems)})"


class Dispatcher:
    """Routes tool calls to registered tools and wraps every outcome.

    ``dispatch`` never raises: unknown tools, invalid arguments and tool
    failures all come back as ``ToolCallResult(is_error=True)``.
    """

    def __init__(
        self,
        tools: Sequence[Tool],
        config: Configuration,
        hooks: Optional[HookRegistry] = None,
        middlewares: Optional[list[Middleware]] = None,
    ):
        self.config = config
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self._register(tool)
        self._descriptors = tuple(tool.descriptor() for tool in self._tools.values())

        if hooks is None:
            hooks = HookRegistry()
        self.hooks = hooks
        for middleware in middlewares or []:
            self.hooks.register_middleware(middleware)

    def _register(self, tool: Tool) -> None:
        name = getattr(tool, "name", "")
        if not name:
            raise ValueError(f"Tool {tool.__class__.__name__} has no name")
        if name in self._tools:
            raise ValueError(f"Duplicate tool name: '{name}'")
        self._tools[name] = tool
        logger.debug(f"Registered tool: {name}")

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def descriptors(self) -> tuple[ToolDescriptor, ...]:
        """Advertised tools, in registration order."""
        return self._descriptors

    def find_tool(self, name: str) -> Tool:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFound(f"未知工具: {name}") from None

    async def resolve(self, request: ToolCallRequest) -> Outcome:
        """Validate and run one request, returning Ok or Err."""
        try:
            tool = self.find_tool(request.name)
        except ToolNotFound as e:
            return Err(FailureReason("unknown_tool", str(e)))

        try:
            arguments = self._validate(tool, request.arguments)
        except ToolValidationError as e:
            return Err(FailureReason("invalid_arguments", str(e)))

        try:
            result = await tool.execute(arguments, self.config)
        except ToolExecutionError as e:
            return Err(FailureReason("execution_failed", str(e)))
        except Exception as e:
            logger.exception(f"Tool '{tool.name}' raised an unexpected error")
            return Err(FailureReason("execution_failed", str(e) or e.__class__.__name__))

        return Ok(result)

    def _validate(self, tool: Tool, arguments: object):
        try:
            return tool.input_model.model_validate(arguments)
        except ValidationError as e:
            raise ToolValidationError(_format_validation_error(tool.name, e)) from e

    async def dispatch(self, request: ToolCallRequest) -> ToolCallResult:
        """Run a request and convert its outcome into a response envelope."""
        start = time.time()
        await self.hooks.trigger(
            "before_tool_call",
            BeforeToolCallEventData(tool_name=request.name, arguments=request.arguments),
        )

        outcome = await self.resolve(request)
        elapsed_ms = (time.time() - start) * 1000

        if isinstance(outcome, Ok):
            await self.hooks.trigger(
                "after_tool_call",
                AfterToolCallEventData(
                    tool_name=request.name,
                    result=outcome.result,
                    execution_time_ms=elapsed_ms,
                ),
            )
            return outcome.result

        await self.hooks.trigger(
            "on_tool_error",
            OnToolErrorEventData(
                tool_name=request.name,
                arguments=request.arguments,
                kind=outcome.reason.kind,
                error_message=outcome.reason.message,
                execution_time_ms=elapsed_ms,
            ),
        )
        return ToolCallResult.error(outcome.reason.message)
