"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from jira_gitlab_webhook import __version__
from jira_gitlab_webhook.api import webhooks
from jira_gitlab_webhook.config import Settings
from jira_gitlab_webhook.middleware.logging import RequestLoggingMiddleware
from jira_gitlab_webhook.services.decision_engine import TicketPolicyEngine
from jira_gitlab_webhook.services.gitlab_client import GitLabClient
from jira_gitlab_webhook.services.jira_client import JiraClient
from jira_gitlab_webhook.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[TicketPolicyEngine] = None,
) -> FastAPI:
    """
    Build the application.

    Settings are read from the environment once, here; missing configuration
    raises a ValidationError and aborts startup.

    Args:
        settings: Preloaded settings, read from the environment when omitted
        engine: Policy engine to use instead of one built from settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings()
    setup_logging(settings.log_level)

    if engine is None:
        engine = TicketPolicyEngine(
            jira_client=JiraClient(settings),
            gitlab_client=GitLabClient(settings),
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting JIRA GitLab validating webhook on {settings.host}:{settings.port}",
            extra={"gitlab_host": settings.gitlab_host, "jira_host": settings.jira_host},
        )
        yield
        logger.info("Shutting down JIRA GitLab validating webhook")
        await engine.jira_client.aclose()
        await engine.gitlab_client.aclose()

    app = FastAPI(
        title="JIRA GitLab Validating Webhook",
        description="Closes GitLab merge requests that do not reference a JIRA ticket",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.policy_engine = engine

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/healthz", response_class=PlainTextResponse)
    async def health_check():
        """Health check endpoint for container orchestration."""
        return "OK"

    app.include_router(webhooks.router)

    return app


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
