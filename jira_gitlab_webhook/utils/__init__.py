"""
Utility modules for the JIRA/GitLab webhook service.
"""

from jira_gitlab_webhook.utils.logging import (
    get_logger,
    setup_logging,
    JSONFormatter,
    ContextLoggerAdapter,
    log_mr_event,
    log_api_call,
    log_error_with_context,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "JSONFormatter",
    "ContextLoggerAdapter",
    "log_mr_event",
    "log_api_call",
    "log_error_with_context",
]
