"""Error taxonomy shared by the webhook, the orchestrator and its collaborators."""

from fastapi import status


class IssueBotError(Exception):
    """Base error carrying the HTTP status it maps to at the webhook boundary."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(IssueBotError):
    """A required secret, token or identifier is missing."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AuthenticationError(IssueBotError):
    """Bad or missing request signature, or a stale timestamp."""

    status_code = status.HTTP_401_UNAUTHORIZED


class MalformedRequestError(IssueBotError):
    """Absent or unparseable request body."""

    status_code = status.HTTP_400_BAD_REQUEST


class ProviderError(IssueBotError):
    """A model or issue-tracker call failed.

    Normally recovered by the orchestrator into a user-facing notice.
    """

    status_code = status.HTTP_502_BAD_GATEWAY
