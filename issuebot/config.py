"""
Configuration management for the Slack Issue Bot application.
Uses Pydantic settings for type-safe environment variable handling.
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Slack Configuration
    slack_bot_token: Optional[str] = None
    slack_signing_secret: Optional[str] = None

    # Anthropic Configuration
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = "claude-haiku-4-5-20251001"
    anthropic_max_tokens: int = Field(default=1024, gt=0)

    # GitHub Configuration
    github_token: Optional[str] = None
    github_owner: Optional[str] = None
    github_repo: Optional[str] = None
    github_api_url: str = "https://api.github.com"

    # Conversation History Configuration
    max_messages_per_conversation: int = Field(default=20, gt=0)
    conversation_ttl_minutes: int = Field(default=30, gt=0)

    # Webhook
    body_read_timeout_seconds: float = Field(default=2.0, gt=0)

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
