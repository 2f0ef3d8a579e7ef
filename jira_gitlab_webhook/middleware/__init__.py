"""HTTP middleware."""

from jira_gitlab_webhook.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
