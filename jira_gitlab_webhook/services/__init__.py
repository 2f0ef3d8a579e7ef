"""Business logic services package."""

from jira_gitlab_webhook.services.decision_engine import TicketPolicyEngine
from jira_gitlab_webhook.services.gitlab_client import CLOSE_COMMENT, GitLabClient
from jira_gitlab_webhook.services.jira_client import JiraClient
from jira_gitlab_webhook.services.ticket_extractor import extract_ticket_reference

__all__ = [
    'TicketPolicyEngine',
    'GitLabClient',
    'CLOSE_COMMENT',
    'JiraClient',
    'extract_ticket_reference',
]
