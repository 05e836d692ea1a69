"""Slack request signature verification (``v0`` HMAC-SHA256 scheme)."""

import hmac
import logging
from typing import Optional, Union
from slack_sdk.signature import Clock, SignatureVerifier

logger = logging.getLogger(__name__)

REPLAY_WINDOW_SECONDS = 60 * 5


def verify_slack_request(
    signing_secret: str,
    timestamp: Optional[str],
    raw_body: Union[str, bytes],
    signature: Optional[str],
    clock: Optional[Clock] = None
) -> bool:
    """Return True if ``signature`` matches ``raw_body`` and the timestamp is fresh.

    Timestamps more than five minutes away from now, in either direction, are
    rejected regardless of the signature. The comparison is constant-time.
    """
    if not timestamp or not signature:
        return False

    try:
        request_time = int(timestamp)
    except ValueError:
        logger.warning(f"Non-numeric Slack request timestamp: {timestamp!r}")
        return False

    clock = clock or Clock()
    if abs(int(clock.now()) - request_time) > REPLAY_WINDOW_SECONDS:
        logger.warning("Slack request timestamp outside the replay window")
        return False

    verifier = SignatureVerifier(signing_secret, clock=clock)
    expected = verifier.generate_signature(timestamp=timestamp, body=raw_body)
    if expected is None:
        return False

    return hmac.compare_digest(
        expected.encode("utf-8"),
        signature.encode("utf-8", errors="surrogateescape")
    )
