#!/usr/bin/env python3
"""
Startup script for the Slack Issue Bot application.
"""

import uvicorn
from issuebot.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    print(f"Starting Slack Issue Bot application...")
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Debug: {settings.debug}")
    print(f"Model: {settings.anthropic_model}")
    print(f"GitHub repository: {settings.github_owner}/{settings.github_repo}")
    print(f"Log Level: {settings.log_level}")
    print("-" * 50)

    uvicorn.run(
        "issuebot.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
