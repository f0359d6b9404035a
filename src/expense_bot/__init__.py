"""Slack /expense slash-command webhook for personal expense tracking."""
