"""Slash-command text parsing."""

from expense_bot.commands.parser import parse_command

__all__ = ["parse_command"]
