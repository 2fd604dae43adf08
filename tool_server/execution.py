from dataclasses import dataclass, field
from typing import Any, Literal, Union

import mcp.types as types

ERROR_PREFIX = "错误: "


@dataclass(frozen=True)
class ContentItem:
    text: str
    type: Literal["text"] = "text"

    def to_mcp(self) -> types.TextContent:
        return types.TextContent(type=self.type, text=self.text)


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: dict

    def to_mcp(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


@dataclass
class ToolCallRequest:
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolCallResult:
    content: list[ContentItem] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolCallResult":
        return cls(content=[ContentItem(text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolCallResult":
        return cls(content=[ContentItem(text=f"{ERROR_PREFIX}{message}")], is_error=True)

    @property
    def texts(self) -> list[str]:
        return [item.text for item in self.content]

    def to_mcp(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[item.to_mcp() for item in self.content],
            isError=self.is_error,
        )


# ---------------------------------------------------------------------------
# Dispatch outcomes
# ---------------------------------------------------------------------------

FailureKind = Literal["unknown_tool", "invalid_arguments", "execution_failed"]


@dataclass(frozen=True)
class FailureReason:
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class Ok:
    result: ToolCallResult

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    reason: FailureReason

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Ok, Err]
