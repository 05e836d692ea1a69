"""GitHub issue-filing gateway.

Thin async wrapper around the GitHub REST ``POST /repos/{owner}/{repo}/issues``
endpoint. Failures of any kind surface as ``ProviderError`` with a message
suitable for showing to the user; nothing is retried here.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from issuebot.errors import ConfigurationError, ProviderError


logger = logging.getLogger(__name__)


class IssueRequest(BaseModel):
    title: str = Field(min_length=1)
    body: str = Field(min_length=1)
    labels: Optional[List[str]] = None


class IssueResult(BaseModel):
    number: int
    url: str


class IssueGateway(ABC):
    """Interface consumed by the orchestrator."""

    @abstractmethod
    async def create_issue(
        self,
        title: str,
        body: str,
        labels: Optional[List[str]] = None,
    ) -> IssueResult:
        pass


class GitHubIssueGateway(IssueGateway):
    """Creates issues in a single configured repository.

    Attributes:
        token: GitHub API token (PAT or GitHub App token).
        owner: Repository owner (user or organisation).
        repo: Repository name.
        base_url: Base URL for GitHub API (default: https://api.github.com).
        timeout: Request timeout in seconds.

    Example:
        >>> gateway = GitHubIssueGateway(token="ghp_xxx", owner="acme", repo="ideas")
        >>> async with gateway:
        ...     await gateway.create_issue("Title", "Body", labels=["idea"])
    """

    def __init__(
        self,
        token: Optional[str],
        owner: Optional[str],
        repo: Optional[str],
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not owner or not repo:
            raise ConfigurationError("GITHUB_OWNER and GITHUB_REPO must be set")
        if not token:
            raise ConfigurationError("GITHUB_TOKEN is not set")

        self.token = token
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._default_headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "slack-issue-bot/1.0",
        }

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubIssueGateway":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def create_issue(
        self,
        title: str,
        body: str,
        labels: Optional[List[str]] = None,
    ) -> IssueResult:
        """Create an issue and return its number and HTML URL.

        Raises:
            ProviderError: On invalid input, transport failure, a non-2xx
                response, or a 2xx response without an issue number and URL.
        """
        try:
            request = IssueRequest(title=title, body=body, labels=labels)
        except ValidationError as e:
            raise ProviderError(f"Invalid issue request: {e.errors()[0]['msg']}") from e

        payload: Dict[str, Any] = {"title": request.title, "body": request.body}
        if request.labels:
            payload["labels"] = request.labels

        path = f"/repos/{self.owner}/{self.repo}/issues"
        try:
            response = await self.client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"GitHub request failed: {str(e)}")
            raise ProviderError(f"GitHub request failed: {str(e)}") from e

        if response.is_error:
            message = self._error_message(response)
            logger.error(
                f"GitHub API error {response.status_code} creating issue in "
                f"{self.owner}/{self.repo}: {message}"
            )
            raise ProviderError(message)

        try:
            data = response.json()
            result = IssueResult(number=data["number"], url=data["html_url"])
        except (ValueError, KeyError, TypeError) as e:
            logger.error(
                f"Unexpected GitHub response {response.status_code} creating issue in "
                f"{self.owner}/{self.repo}: {str(e)}"
            )
            raise ProviderError(
                f"GitHub API returned an unexpected response (HTTP {response.status_code})"
            ) from e
        logger.info(f"Created issue #{result.number} in {self.owner}/{self.repo}")
        return result

    def _error_message(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return f"GitHub API returned HTTP {response.status_code}"
