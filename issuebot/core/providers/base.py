from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from issuebot.core.providers.models import ChatCompletionResult, Message


class BaseAIProvider(ABC):

    def __init__(self):
        self.model = None

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        max_tokens: Optional[int] = None
    ) -> ChatCompletionResult:
        pass

    def get_model(self) -> str:
        return self.model or "unknown"
