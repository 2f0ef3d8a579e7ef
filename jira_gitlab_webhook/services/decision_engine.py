"""
Ticket policy engine.

Decides what to do with one merge request event:

1. Events whose merge request is not ``opened`` are ignored.
2. A ticket reference in the source branch name is validated against JIRA.
3. Otherwise a reference in the description is validated against JIRA.
4. With no reference at all the merge request is closed, then a note
   explaining why is posted on it.

The engine holds no per-event state, so concurrent events can share one
instance.
"""

from jira_gitlab_webhook.exceptions import MissingProjectIdError
from jira_gitlab_webhook.models.merge_request_event import MergeRequestEvent
from jira_gitlab_webhook.models.outcome import ActionOutcome, OutcomeKind, TicketSource
from jira_gitlab_webhook.services.gitlab_client import CLOSE_COMMENT, GitLabClient
from jira_gitlab_webhook.services.jira_client import JiraClient
from jira_gitlab_webhook.services.ticket_extractor import extract_ticket_reference
from jira_gitlab_webhook.utils.logging import ContextLoggerAdapter, get_logger, log_mr_event

logger = get_logger(__name__)

OPENED_STATE = "opened"


class TicketPolicyEngine:
    """Enforces that every opened merge request references a JIRA ticket."""

    def __init__(self, jira_client: JiraClient, gitlab_client: GitLabClient):
        self.jira_client = jira_client
        self.gitlab_client = gitlab_client

    async def process_event(self, event: MergeRequestEvent) -> ActionOutcome:
        """
        Process a merge request event.

        Args:
            event: Decoded merge request webhook event

        Returns:
            ActionOutcome describing what was done

        Raises:
            MissingProjectIdError: If the merge request must be closed but the
                event carries no project id
        """
        mr_iid = event.merge_request_iid
        event_logger = logger.with_context(project_id=event.project_id, mr_iid=mr_iid)
        log_mr_event(event_logger, project_id=event.project_id, mr_iid=mr_iid, state=event.state)

        if event.state != OPENED_STATE:
            event_logger.info(f"Merge request {mr_iid} is not open")
            return ActionOutcome(kind=OutcomeKind.IGNORED, merge_request_iid=mr_iid)

        ticket = extract_ticket_reference(event.source_branch)
        if ticket is not None:
            return await self._validate_ticket(event, ticket, TicketSource.BRANCH, event_logger)

        ticket = extract_ticket_reference(event.description)
        if ticket is not None:
            return await self._validate_ticket(event, ticket, TicketSource.DESCRIPTION, event_logger)

        event_logger.info("No JIRA ticket found in the branch name or description")
        return await self._close_without_ticket(event)

    async def _validate_ticket(
        self,
        event: MergeRequestEvent,
        ticket: str,
        source: TicketSource,
        event_logger: ContextLoggerAdapter,
    ) -> ActionOutcome:
        """Look the ticket up in JIRA and report whether it is valid."""
        result = await self.jira_client.lookup_issue(ticket)
        kind = OutcomeKind.for_lookup(source, result.found)
        outcome = ActionOutcome(
            kind=kind,
            merge_request_iid=event.merge_request_iid,
            ticket=result.key if result.found else ticket,
        )
        event_logger.info(outcome.message, extra={"ticket": ticket})
        return outcome

    async def _close_without_ticket(self, event: MergeRequestEvent) -> ActionOutcome:
        """Close the merge request, then comment on it best-effort."""
        mr_iid = event.merge_request_iid
        project_id = event.project_id
        if project_id is None:
            raise MissingProjectIdError(mr_iid)

        close_result = await self.gitlab_client.close_merge_request(project_id, mr_iid)
        if not close_result.success:
            return ActionOutcome(kind=OutcomeKind.CLOSE_FAILED, merge_request_iid=mr_iid)

        comment_result = await self.gitlab_client.post_comment(project_id, mr_iid, CLOSE_COMMENT)
        if not comment_result.success:
            error = comment_result.error or f"HTTP {comment_result.status_code}"
            return ActionOutcome(
                kind=OutcomeKind.CLOSED_COMMENT_FAILED,
                merge_request_iid=mr_iid,
                ignored_errors=[f"comment failed: {error}"],
            )

        return ActionOutcome(kind=OutcomeKind.CLOSED_COMMENTED, merge_request_iid=mr_iid)
