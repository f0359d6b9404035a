"""Slack request signature verification.

Slack signs every request with HMAC-SHA256 over ``v0:<timestamp>:<body>``
using the app's signing secret and sends the result as ``v0=<hexdigest>`` in
``X-Slack-Signature``. ``verify_signature`` is a pure predicate over those
inputs; ``verify_slack_request`` wraps it as a FastAPI dependency.
"""

import hashlib
import hmac
import logging
import math

from fastapi import HTTPException, Request
from slack_sdk.signature import Clock

from expense_bot.config import get_settings

logger = logging.getLogger(__name__)

SIGNATURE_VERSION = "v0"
MAX_REQUEST_AGE_SECONDS = 60 * 5
# Longer timestamps are rejected before int conversion
MAX_TIMESTAMP_DIGITS = 15

TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
SIGNATURE_HEADER = "X-Slack-Signature"

_default_clock = Clock()


def verify_signature(
    raw_body: bytes,
    timestamp: str | None,
    signature: str | None,
    signing_secret: str,
    clock: Clock | None = None,
) -> bool:
    """Return True if the request was signed by Slack within the freshness window.

    Requests whose timestamp is more than five minutes away from now, in
    either direction, are rejected. The signature is computed over the raw
    body bytes and the timestamp exactly as received, and compared in
    constant time. Never raises.

    Args:
        raw_body: Request body exactly as received.
        timestamp: Value of the X-Slack-Request-Timestamp header.
        signature: Value of the X-Slack-Signature header.
        signing_secret: The Slack app's signing secret.
        clock: Time source, defaults to the system clock.
    """
    if not timestamp or not signing_secret:
        return False
    if len(timestamp) > MAX_TIMESTAMP_DIGITS:
        return False
    if not (timestamp.isascii() and timestamp.isdigit()):
        return False

    now = math.floor((clock or _default_clock).now())
    if abs(now - int(timestamp)) > MAX_REQUEST_AGE_SECONDS:
        return False

    base = b":".join(
        [SIGNATURE_VERSION.encode("ascii"), timestamp.encode("ascii"), raw_body]
    )
    key = signing_secret.encode("utf-8", "surrogatepass")
    digest = hmac.new(key, base, hashlib.sha256).hexdigest()
    expected = f"{SIGNATURE_VERSION}={digest}".encode("ascii")
    supplied = (signature or "").encode("utf-8", "surrogatepass")

    if len(expected) != len(supplied):
        return False
    return hmac.compare_digest(expected, supplied)


async def verify_slack_request(request: Request) -> bytes:
    """Verify the Slack signature and return the raw request body.

    Reads the raw body FIRST (before any form parsing) to ensure the
    signature verification uses the exact bytes Slack signed.

    Raises HTTPException(401) if the signature is missing, stale, or invalid.
    """
    settings = get_settings()
    body = await request.body()

    timestamp = request.headers.get(TIMESTAMP_HEADER, "")
    signature = request.headers.get(SIGNATURE_HEADER, "")

    if not verify_signature(body, timestamp, signature, settings.slack_signing_secret):
        logger.warning(
            "Rejected Slack request with invalid signature",
            extra={"slack_timestamp": timestamp, "path": request.url.path},
        )
        raise HTTPException(status_code=401, detail="Ugyldig signatur")

    return body
