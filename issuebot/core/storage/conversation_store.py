import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any
from issuebot.core.providers.models import Message

logger = logging.getLogger(__name__)

DEFAULT_MAX_MESSAGES = 20
DEFAULT_TTL_SECONDS = 30 * 60


@dataclass
class ConversationEntry:
    messages: List[Message] = field(default_factory=list)
    updated_at: float = 0.0


class ConversationStore(ABC):
    """Per-user message history keyed by Slack user id."""

    @abstractmethod
    def get_history(self, user_id: str) -> List[Message]:
        pass

    @abstractmethod
    def append_message(self, user_id: str, message: Message) -> None:
        pass

    @abstractmethod
    def clear(self, user_id: str) -> None:
        pass


class InMemoryConversationStore(ConversationStore):
    """Process-local store with idle expiry and a FIFO size cap.

    Access is not synchronized; concurrent turns for the same user may
    interleave.
    """

    def __init__(
        self,
        max_messages: int = DEFAULT_MAX_MESSAGES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        self.max_messages = max_messages
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._conversations: Dict[str, ConversationEntry] = {}

    def _is_expired(self, entry: ConversationEntry) -> bool:
        return self._clock() - entry.updated_at > self.ttl_seconds

    def get_history(self, user_id: str) -> List[Message]:
        entry = self._conversations.get(user_id)
        if entry is None:
            return []
        if self._is_expired(entry):
            del self._conversations[user_id]
            logger.info(f"Conversation for {user_id} expired")
            return []
        return list(entry.messages)

    def append_message(self, user_id: str, message: Message) -> None:
        entry = self._conversations.get(user_id)
        if entry is None or self._is_expired(entry):
            entry = ConversationEntry()
            self._conversations[user_id] = entry

        entry.messages.append(message)
        entry.updated_at = self._clock()

        if len(entry.messages) > self.max_messages:
            entry.messages = entry.messages[-self.max_messages:]

    def clear(self, user_id: str) -> None:
        if self._conversations.pop(user_id, None) is not None:
            logger.info(f"Cleared conversation for {user_id}")

    def get_stats(self) -> Dict[str, Any]:
        now = self._clock()
        active = [
            entry for entry in self._conversations.values()
            if now - entry.updated_at <= self.ttl_seconds
        ]
        return {
            "active_conversations": len(active),
            "total_messages": sum(len(entry.messages) for entry in active),
            "max_messages_per_conversation": self.max_messages,
            "ttl_seconds": self.ttl_seconds,
            "storage_type": "in-memory"
        }
