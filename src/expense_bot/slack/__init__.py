"""Slack ingress: slash-command routing, signature verification, and replies."""

from expense_bot.slack.router import router
from expense_bot.slack.verification import verify_signature, verify_slack_request

__all__ = [
    "router",
    "verify_signature",
    "verify_slack_request",
]
