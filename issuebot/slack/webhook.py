"""
Slack webhook endpoint for receiving and processing Slack events.
"""

import asyncio
import json
import logging
from typing import Any, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.requests import ClientDisconnect
from slack_sdk.signature import Clock
from issuebot.core.chat_processor import ChatProcessor
from issuebot.core.prompt import APOLOGY_TEXT
from issuebot.errors import (
    AuthenticationError,
    ConfigurationError,
    MalformedRequestError,
)
from issuebot.slack.bot import SlackBot
from issuebot.slack.events import (
    SlackEnvelope,
    SlackMessageEvent,
    parse_message_event,
    should_reply,
)
from issuebot.slack.signature import verify_slack_request

logger = logging.getLogger(__name__)

RETRY_HEADER = "x-slack-retry-num"
TIMESTAMP_HEADER = "x-slack-request-timestamp"
SIGNATURE_HEADER = "x-slack-signature"


def coerce_parsed_body(body: Any) -> Optional[str]:
    """Turn a body already parsed upstream back into text."""
    if body is None:
        return None
    if isinstance(body, str):
        return body
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8")
    # Re-serialising may not match the signed bytes exactly
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


async def read_raw_body(request: Request, timeout: float) -> bytes:
    """Read the request stream, keeping whatever arrived before ``timeout``."""
    chunks = []

    async def _collect():
        async for chunk in request.stream():
            chunks.append(chunk)

    try:
        await asyncio.wait_for(_collect(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Body read timed out after {timeout}s, using {len(chunks)} chunks")
    except ClientDisconnect:
        logger.warning("Client disconnected while reading body")

    return b"".join(chunks)


class SlackWebhook:
    """Handles Slack Events API requests."""

    def __init__(
        self,
        signing_secret: Optional[str],
        processor: ChatProcessor,
        bot: SlackBot,
        body_timeout: float = 2.0,
        clock: Optional[Clock] = None
    ):
        self.signing_secret = signing_secret
        self.processor = processor
        self.bot = bot
        self.body_timeout = body_timeout
        self.clock = clock

    async def handle_webhook(self, request: Request) -> JSONResponse:
        """Handle one webhook delivery.

        Raises:
            ConfigurationError: The signing secret is not configured.
            MalformedRequestError: The body is absent or not JSON.
            AuthenticationError: The signature or timestamp is invalid.
        """
        if request.method != "POST":
            return JSONResponse(
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                content={"error": "Method not allowed"}
            )

        retry_num = request.headers.get(RETRY_HEADER)
        if retry_num:
            logger.info(f"Ignoring Slack retry: {retry_num}")
            return JSONResponse(content={"ok": True})

        if not self.signing_secret:
            raise ConfigurationError("SLACK_SIGNING_SECRET is not set")

        raw_body = await self._read_body(request)

        timestamp = request.headers.get(TIMESTAMP_HEADER)
        signature = request.headers.get(SIGNATURE_HEADER)
        is_valid = verify_slack_request(
            self.signing_secret, timestamp, raw_body, signature, clock=self.clock
        )
        logger.info(
            f"Signature verification: has_timestamp={bool(timestamp)} "
            f"has_signature={bool(signature)} valid={is_valid}"
        )
        if not is_valid:
            raise AuthenticationError("Invalid signature")

        envelope = self._parse_envelope(raw_body)

        if envelope.type == "url_verification":
            logger.info("Handling URL verification challenge")
            return JSONResponse(content={"challenge": envelope.challenge})

        if envelope.type == "event_callback" and envelope.event:
            event = parse_message_event(envelope.event)
            if event is not None:
                await self._process_event(event)

        return JSONResponse(content={"ok": True})

    async def _read_body(self, request: Request) -> str:
        raw = await read_raw_body(request, self.body_timeout)
        body_source = "stream"

        try:
            body = raw.decode("utf-8") if raw else None
            if not body:
                body = coerce_parsed_body(getattr(request.state, "body", None))
                body_source = "request.state"
        except UnicodeDecodeError as e:
            raise MalformedRequestError("Body is not valid UTF-8") from e

        if not body:
            logger.warning("No request body available")
            raise MalformedRequestError("No body")

        logger.info(f"Body source: {body_source}, length: {len(body)}")
        return body

    def _parse_envelope(self, raw_body: str) -> SlackEnvelope:
        try:
            return SlackEnvelope.model_validate_json(raw_body)
        except ValidationError as e:
            logger.warning(f"Malformed Slack payload: {e.error_count()} errors")
            raise MalformedRequestError("Malformed JSON body") from e

    async def _process_event(self, event: SlackMessageEvent) -> None:
        if not should_reply(event):
            return

        logger.info(f"Processing DM from user {event.user}")
        try:
            reply = await self.processor.process_message(event.user, event.text)
            await self.bot.send_message(channel=event.channel, text=reply)
            logger.info(f"Sent reply to {event.channel} ({len(reply)} chars)")
        except Exception as e:
            logger.error(f"Error processing message: {str(e)}", exc_info=True)
            try:
                await self.bot.send_message(channel=event.channel, text=APOLOGY_TEXT)
            except Exception as send_error:
                logger.error(f"Failed to send error reply: {str(send_error)}")
