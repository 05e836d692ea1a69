import logging
from typing import Dict, Any, Optional
from slack_sdk.web.client import WebClient
import asyncio
from concurrent.futures import ThreadPoolExecutor
from issuebot.errors import ConfigurationError

logger = logging.getLogger(__name__)


class SlackBot:

    def __init__(self, token: Optional[str] = None, client: Optional[WebClient] = None):
        if client is None:
            if not token:
                raise ConfigurationError("SLACK_BOT_TOKEN is not set")
            client = WebClient(token=token)
        self.client = client
        self.executor = ThreadPoolExecutor(max_workers=4)

    async def send_message(
        self,
        channel: str,
        text: str,
        thread_ts: Optional[str] = None,
        **kwargs
    ) -> Dict[str, Any]:
        if thread_ts:
            kwargs["thread_ts"] = thread_ts

        try:
            # Run the synchronous call in a thread pool to avoid blocking
            response = await asyncio.get_event_loop().run_in_executor(
                self.executor,
                lambda: self.client.chat_postMessage(
                    channel=channel,
                    text=text,
                    **kwargs
                )
            )

            if not response["ok"]:
                logger.error(f"Failed to send message: {response.get('error')}")

            return response

        except Exception as e:
            logger.error(f"Error sending message: {str(e)}")
            raise

    def close(self) -> None:
        self.executor.shutdown(wait=False)
