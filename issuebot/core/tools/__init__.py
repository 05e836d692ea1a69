"""
Tools the model may invoke during a conversation.
"""

from .base import BaseTool, ToolResult
from .github_issue import CreateGitHubIssueTool

__all__ = ["BaseTool", "ToolResult", "CreateGitHubIssueTool"]
