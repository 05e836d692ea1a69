import logging
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from issuebot import __version__
from issuebot.config import Settings, get_settings
from issuebot.errors import IssueBotError
from issuebot.api.slack_routes import router as slack_router
from issuebot.core.chat_processor import ChatProcessor
from issuebot.core.github.client import GitHubIssueGateway
from issuebot.core.providers.anthropic import AnthropicProvider
from issuebot.core.storage.conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
)
from issuebot.core.tools.github_issue import CreateGitHubIssueTool
from issuebot.slack.bot import SlackBot
from issuebot.slack.webhook import SlackWebhook

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    processor: Optional[ChatProcessor] = None,
    bot: Optional[SlackBot] = None,
    store: Optional[ConversationStore] = None
) -> FastAPI:
    """Build the application and its collaborators.

    Collaborators not passed in are constructed from ``settings``; a missing
    token or identifier raises ``ConfigurationError`` here, at startup.
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    gateway = None
    if store is None and processor is not None:
        store = processor.store
    if store is None:
        store = InMemoryConversationStore(
            max_messages=settings.max_messages_per_conversation,
            ttl_seconds=settings.conversation_ttl_minutes * 60
        )
    if processor is None:
        gateway = GitHubIssueGateway(
            token=settings.github_token,
            owner=settings.github_owner,
            repo=settings.github_repo,
            base_url=settings.github_api_url
        )
        provider = AnthropicProvider(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            max_tokens=settings.anthropic_max_tokens
        )
        processor = ChatProcessor(
            provider=provider,
            store=store,
            issue_tool=CreateGitHubIssueTool(gateway)
        )
    if bot is None:
        bot = SlackBot(token=settings.slack_bot_token)

    webhook = SlackWebhook(
        signing_secret=settings.slack_signing_secret,
        processor=processor,
        bot=bot,
        body_timeout=settings.body_read_timeout_seconds
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Slack Issue Bot application...")
        logger.info(f"Configuration loaded: model={processor.provider.get_model()}")
        yield
        logger.info("Shutting down Slack Issue Bot application...")
        if gateway is not None:
            await gateway.close()
        bot.close()

    app = FastAPI(
        title="Slack Issue Bot",
        description="A Slack DM bot that drafts GitHub issues with an AI model",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store
    app.state.webhook = webhook

    app.include_router(slack_router)

    @app.get("/")
    async def root():
        return {
            "message": "Slack Issue Bot API",
            "version": __version__,
            "endpoints": {
                "slack_webhook": "/slack/events",
                "health": "/health"
            }
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": "slack-issue-bot",
            "version": __version__,
            "conversations": store.get_stats() if hasattr(store, "get_stats") else {}
        }

    @app.exception_handler(IssueBotError)
    async def issue_bot_exception_handler(request: Request, exc: IssueBotError):
        logger.warning(f"{exc.__class__.__name__}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"}
        )

    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "issuebot.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
