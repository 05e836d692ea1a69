import logging
from typing import Optional
from issuebot.core.tools.base import BaseTool, ToolResult
from issuebot.core.github.client import IssueGateway
from issuebot.errors import ProviderError

logger = logging.getLogger(__name__)


class CreateGitHubIssueTool(BaseTool):

    name = "create_github_issue"
    description = (
        "Create an issue in the GitHub repository. "
        "Use only after the user has approved filing the issue."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": "Issue title"
            },
            "body": {
                "type": "string",
                "description": "Issue body (Markdown)"
            },
            "labels": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Labels to apply (optional)"
            }
        },
        "required": ["title", "body"]
    }

    def __init__(self, gateway: IssueGateway):
        self.gateway = gateway

    async def execute(self, **kwargs) -> ToolResult:
        title = kwargs.get("title")
        body = kwargs.get("body")
        labels: Optional[list] = kwargs.get("labels")

        try:
            issue = await self.gateway.create_issue(title, body, labels)
        except ProviderError as e:
            logger.error(f"Issue creation failed: {e.message}")
            return ToolResult(success=False, error=e.message)

        return ToolResult(
            success=True,
            data=issue.model_dump(),
            metadata={"tool": self.name}
        )
