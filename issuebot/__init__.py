"""
Slack Issue Bot

A small FastAPI application that provides:
- Slack Events API webhook for direct messages
- Conversation relay to an Anthropic model
- GitHub issue filing through a model tool call
"""

__version__ = "1.0.0"
__description__ = "Slack DM bot that drafts and files GitHub issues"
