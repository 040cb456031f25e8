from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """Static metadata advertised by tools/list for one tool."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(alias="inputSchema")

    @property
    def required_fields(self) -> List[str]:
        return list(self.input_schema.get("required", []))


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolInvocationResult(BaseModel):
    """The {content, isError} envelope returned for every tools/call."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextBlock]
    is_error: bool = Field(default=False, alias="isError")

    @property
    def text(self) -> str:
        return self.content[0].text

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
