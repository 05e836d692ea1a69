from typing import List
import logging
from issuebot.core.prompt import (
    SYSTEM_PROMPT,
    NO_RESPONSE_TEXT,
    ISSUE_CREATED_TEXT,
    ISSUE_FAILED_TEXT,
    APOLOGY_TEXT,
)
from issuebot.core.providers.base import BaseAIProvider
from issuebot.core.providers.models import (
    ChatCompletionResult,
    ContentBlock,
    Message,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from issuebot.core.storage.conversation_store import ConversationStore
from issuebot.core.tools.base import BaseTool
from issuebot.errors import ProviderError

logger = logging.getLogger(__name__)

TOOL_USE_STOP_REASON = "tool_use"


class ChatProcessor:
    """Turns one user utterance into a reply, filing an issue if the model asks to.

    At most one tool round trip happens per turn.
    """

    def __init__(
        self,
        provider: BaseAIProvider,
        store: ConversationStore,
        issue_tool: BaseTool,
        system_prompt: str = SYSTEM_PROMPT
    ):
        self.provider = provider
        self.store = store
        self.issue_tool = issue_tool
        self.system_prompt = system_prompt

    async def process_message(self, user_id: str, message: str) -> str:
        self.store.append_message(user_id, Message(role="user", content=message))

        try:
            response = await self._complete(user_id)
        except ProviderError as e:
            logger.error(f"Model call failed for {user_id}: {e.message}")
            return APOLOGY_TEXT

        tool_use = None
        if response.stop_reason == TOOL_USE_STOP_REASON:
            tool_use = response.first_tool_use()

        self._append_assistant(user_id, response.content, NO_RESPONSE_TEXT)

        if tool_use is None:
            return response.text() or NO_RESPONSE_TEXT

        return await self._run_tool(user_id, tool_use)

    async def _run_tool(self, user_id: str, tool_use: ToolUseBlock) -> str:
        logger.info(f"Model requested {tool_use.name} for {user_id}")

        result = await self.issue_tool.execute(
            title=tool_use.input.get("title"),
            body=tool_use.input.get("body"),
            labels=tool_use.input.get("labels")
        )

        if not result.success:
            self._append_tool_result(
                user_id, tool_use, f"Error: {result.error}", is_error=True
            )
            return ISSUE_FAILED_TEXT.format(error=result.error)

        tool_result_text = ISSUE_CREATED_TEXT.format(
            number=result.data["number"], url=result.data["url"]
        )
        self._append_tool_result(user_id, tool_use, tool_result_text)

        try:
            final_response = await self._complete(user_id)
        except ProviderError as e:
            logger.error(f"Follow-up model call failed for {user_id}: {e.message}")
            return tool_result_text

        self._append_assistant(user_id, final_response.content, tool_result_text)
        return final_response.text() or tool_result_text

    def _append_assistant(
        self,
        user_id: str,
        content: List[ContentBlock],
        placeholder: str
    ) -> None:
        # The API rejects assistant turns with empty content
        if not content:
            content = [TextBlock(text=placeholder)]
        self.store.append_message(user_id, Message(role="assistant", content=content))

    def _append_tool_result(
        self,
        user_id: str,
        tool_use: ToolUseBlock,
        content: str,
        is_error: bool = False
    ) -> None:
        block = ToolResultBlock(
            tool_use_id=tool_use.id,
            content=content,
            is_error=True if is_error else None
        )
        self.store.append_message(user_id, Message(role="user", content=[block]))

    async def _complete(self, user_id: str) -> ChatCompletionResult:
        history: List[Message] = self.store.get_history(user_id)
        return await self.provider.chat_completion(
            messages=history,
            system=self.system_prompt,
            tools=[self.issue_tool.get_schema()]
        )
