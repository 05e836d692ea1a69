import logging
from typing import Any, Dict, Optional
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

DIRECT_MESSAGE_CHANNEL_TYPE = "im"


class SlackMessageEvent(BaseModel):
    type: str
    subtype: Optional[str] = None
    user: Optional[str] = None
    text: Optional[str] = None
    channel: Optional[str] = None
    channel_type: Optional[str] = None
    bot_id: Optional[str] = None
    ts: Optional[str] = None
    thread_ts: Optional[str] = None


class SlackEnvelope(BaseModel):
    type: str
    challenge: Optional[str] = None
    event: Optional[Dict[str, Any]] = None


def parse_message_event(data: Dict[str, Any]) -> Optional[SlackMessageEvent]:
    """Parse a nested event; events that are not plain messages yield None."""
    if data.get("type") != "message":
        logger.info(f"Ignoring event type: {data.get('type')}")
        return None
    try:
        return SlackMessageEvent.model_validate(data)
    except ValidationError:
        logger.warning(f"Ignoring message event with unexpected shape: {data.get('subtype')}")
        return None


def is_bot_message(event: SlackMessageEvent) -> bool:
    return bool(event.bot_id or event.subtype == "bot_message")


def should_reply(event: SlackMessageEvent) -> bool:
    """Only user-authored direct messages with text get a reply."""
    if event.type != "message":
        logger.info(f"Ignoring event type: {event.type}")
        return False
    if event.channel_type != DIRECT_MESSAGE_CHANNEL_TYPE:
        logger.info(f"Ignoring message in channel type: {event.channel_type}")
        return False
    if is_bot_message(event):
        return False
    return bool(event.text and event.user and event.channel)
