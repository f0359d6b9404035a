"""Slack slash-command router with signature verification."""

import logging
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from expense_bot.commands import parse_command
from expense_bot.config import get_settings
from expense_bot.slack.handlers import handle_command
from expense_bot.slack.verification import verify_slack_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["slack"])


def _form_value(form: dict[str, list[str]], key: str, default: str) -> str:
    values = form.get(key)
    return values[0] if values and values[0] else default


@router.post("/slack/commands", response_class=PlainTextResponse)
async def slack_commands(body: bytes = Depends(verify_slack_request)) -> PlainTextResponse:
    """Receive /expense slash-command invocations.

    The body is Slack's url-encoded form; only ``text`` and ``user_id`` are used.
    Store access is synchronous and runs in the threadpool.
    """
    form = parse_qs(body.decode("utf-8", errors="replace"))
    text = _form_value(form, "text", "").strip()
    user_id = _form_value(form, "user_id", "unknown")

    command = parse_command(text)
    logger.info("Slash command received: %s", command.type.value, extra={"user_id": user_id})

    reply = await run_in_threadpool(handle_command, command, user_id, get_settings())
    return PlainTextResponse(reply)
