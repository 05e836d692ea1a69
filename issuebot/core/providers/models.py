from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(BaseModel):
    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Dict[str, Any] = Field(default_factory=dict)


class ToolResultBlock(BaseModel):
    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: str
    is_error: Optional[bool] = None


ContentBlock = Annotated[
    Union[TextBlock, ToolUseBlock, ToolResultBlock],
    Field(discriminator="type"),
]

content_block_adapter = TypeAdapter(ContentBlock)


class Message(BaseModel):
    role: Literal["user", "assistant"]
    content: Union[str, List[ContentBlock]]

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class UsageInfo(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class ChatCompletionResult(BaseModel):
    content: List[ContentBlock]
    stop_reason: Optional[str] = None
    model: str
    usage: UsageInfo = Field(default_factory=UsageInfo)

    def text(self) -> str:
        """Concatenate the text blocks in order."""
        parts = []
        for block in self.content:
            if isinstance(block, TextBlock):
                parts.append(block.text)
        return "".join(parts)

    def first_tool_use(self) -> Optional[ToolUseBlock]:
        for block in self.content:
            if isinstance(block, ToolUseBlock):
                return block
        return None
