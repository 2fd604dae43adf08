class ToolServerError(Exception):
    """Base exception for tool-server errors."""


class ConfigurationError(ToolServerError):
    """Raised when required environment variables are missing or empty."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


class ToolNotFound(ToolServerError):
    """Raised when a request names a tool that isn't registered."""


class ToolValidationError(ToolServerError):
    """Raised when tool arguments fail Pydantic validation."""


class ToolExecutionError(ToolServerError):
    """Raised by a tool when execution fails."""
