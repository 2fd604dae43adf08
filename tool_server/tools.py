from typing import TYPE_CHECKING

from pydantic import BaseModel

from tool_server.execution import ToolCallResult, ToolDescriptor

if TYPE_CHECKING:
    from tool_server.config import Configuration


class ToolInput(BaseModel):
    """Subclass this for tool-specific input validation."""


class Tool:
    name: str
    description: str
    input_model: type[BaseModel] = ToolInput

    def schema(self) -> dict:
        """Return JSON schema from Pydantic model."""
        return self.input_model.model_json_schema()

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.schema(),
        )

    async def execute(self, arguments: BaseModel, config: "Configuration") -> ToolCallResult:
        """Execute tool. Always async; sync tools wrap sync code.

        Pydantic validates inputs before this is called.
        """
        raise NotImplementedError
