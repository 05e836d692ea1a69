from typing import List, Dict, Any, Optional
import logging
import anthropic
from pydantic import ValidationError
from issuebot.errors import ConfigurationError, ProviderError
from issuebot.core.providers.models import (
    ChatCompletionResult,
    Message,
    UsageInfo,
    content_block_adapter,
)
from issuebot.core.providers.base import BaseAIProvider

logger = logging.getLogger(__name__)

SUPPORTED_BLOCK_TYPES = ("text", "tool_use")


class AnthropicProvider(BaseAIProvider):

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        max_tokens: int = 1024,
        client: Optional[anthropic.AsyncAnthropic] = None
    ):
        super().__init__()
        if client is None:
            if not api_key:
                raise ConfigurationError("ANTHROPIC_API_KEY is not set")
            client = anthropic.AsyncAnthropic(api_key=api_key)
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def chat_completion(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        max_tokens: Optional[int] = None
    ) -> ChatCompletionResult:
        request_data = {
            "model": self.model,
            "max_tokens": max_tokens or self.max_tokens,
            "messages": [message.to_api() for message in messages],
        }

        if system:
            request_data["system"] = system

        if tools:
            request_data["tools"] = tools

        try:
            response = await self.client.messages.create(**request_data)
        except anthropic.APIError as e:
            logger.error(f"Anthropic API error: {str(e)}")
            raise ProviderError(f"Anthropic API error: {str(e)}") from e

        try:
            return self._to_result(response)
        except ValidationError as e:
            raise ProviderError(f"Unexpected Anthropic response: {str(e)}") from e

    def _to_result(self, response: Any) -> ChatCompletionResult:
        blocks = []
        for block in response.content:
            data = block.model_dump() if hasattr(block, "model_dump") else dict(block)
            if data.get("type") not in SUPPORTED_BLOCK_TYPES:
                logger.warning(f"Dropping unsupported content block: {data.get('type')}")
                continue
            blocks.append(content_block_adapter.validate_python(data))

        usage = UsageInfo()
        if getattr(response, "usage", None) is not None:
            usage = UsageInfo(
                input_tokens=response.usage.input_tokens or 0,
                output_tokens=response.usage.output_tokens or 0
            )

        return ChatCompletionResult(
            content=blocks,
            stop_reason=response.stop_reason,
            model=response.model or self.model,
            usage=usage
        )
