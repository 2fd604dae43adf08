import mcp.types as types

from tool_server.execution import (
    ContentItem,
    Err,
    FailureReason,
    Ok,
    ToolCallRequest,
    ToolCallResult,
    ToolDescriptor,
)


class TestToolCallRequest:
    def test_arguments_default_to_empty(self):
        request = ToolCallRequest(name="get_time")
        assert request.arguments == {}

    def test_mutable_defaults_are_independent(self):
        a = ToolCallRequest(name="a")
        b = ToolCallRequest(name="b")
        a.arguments["x"] = 1
        assert b.arguments == {}


class TestToolCallResult:
    def test_text_result(self):
        result = ToolCallResult.text("hello")
        assert result.is_error is False
        assert result.content == [ContentItem(text="hello")]
        assert result.content[0].type == "text"

    def test_error_result_is_prefixed(self):
        result = ToolCallResult.error("boom")
        assert result.is_error is True
        assert result.texts == ["错误: boom"]

    def test_to_mcp(self):
        converted = ToolCallResult.error("boom").to_mcp()
        assert isinstance(converted, types.CallToolResult)
        assert converted.isError is True
        assert converted.content[0].type == "text"
        assert converted.content[0].text == "错误: boom"


class TestToolDescriptor:
    def test_to_mcp_keeps_schema(self):
        schema = {"type": "object", "properties": {"key": {"type": "string"}}}
        descriptor = ToolDescriptor(name="get_env", description="d", input_schema=schema)
        tool = descriptor.to_mcp()
        assert tool.name == "get_env"
        assert tool.inputSchema == schema


class TestOutcome:
    def test_ok_and_err_are_discriminated(self):
        ok = Ok(ToolCallResult.text("x"))
        err = Err(FailureReason("unknown_tool", "nope"))
        assert ok.ok and not err.ok
        assert err.reason.kind == "unknown_tool"
