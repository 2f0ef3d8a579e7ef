"""Result models produced while processing a merge request event."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class TicketSource(str, Enum):
    """Where a ticket reference was found."""

    BRANCH = "branch"
    DESCRIPTION = "description"


class OutcomeKind(str, Enum):
    """Terminal state reached for one webhook event."""

    IGNORED = "ignored (not opened)"
    VALID_IN_BRANCH = "valid ticket in branch"
    INVALID_IN_BRANCH = "invalid ticket in branch"
    VALID_IN_DESCRIPTION = "valid ticket in description"
    INVALID_IN_DESCRIPTION = "invalid ticket in description"
    CLOSED_COMMENTED = "closed, commented"
    CLOSED_COMMENT_FAILED = "closed, comment failed"
    CLOSE_FAILED = "close failed"

    @classmethod
    def for_lookup(cls, source: TicketSource, found: bool) -> "OutcomeKind":
        if source == TicketSource.BRANCH:
            return cls.VALID_IN_BRANCH if found else cls.INVALID_IN_BRANCH
        return cls.VALID_IN_DESCRIPTION if found else cls.INVALID_IN_DESCRIPTION


class TicketLookupResult(BaseModel):
    """Outcome of asking JIRA whether a ticket exists."""

    found: bool
    key: Optional[str] = None

    @classmethod
    def resolved(cls, key: str) -> "TicketLookupResult":
        return cls(found=True, key=key)

    @classmethod
    def not_found(cls) -> "TicketLookupResult":
        return cls(found=False)


class GitLabActionResult(BaseModel):
    """Result of a single GitLab API call."""

    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class ActionOutcome(BaseModel):
    """Human-readable result of processing one merge request event.

    ``ignored_errors`` lists failures that were logged and swallowed without
    changing the response status, such as a failed close comment.
    """

    kind: OutcomeKind
    merge_request_iid: int
    ticket: Optional[str] = None
    ignored_errors: List[str] = []

    @property
    def message(self) -> str:
        kind = self.kind
        if kind == OutcomeKind.IGNORED:
            return "Merge request is not being opened, ignoring."
        if kind == OutcomeKind.VALID_IN_BRANCH:
            return f"Valid JIRA ticket in branch name: {self.ticket}"
        if kind == OutcomeKind.INVALID_IN_BRANCH:
            return f"Invalid JIRA ticket in branch name: {self.ticket}"
        if kind == OutcomeKind.VALID_IN_DESCRIPTION:
            return f"Valid JIRA ticket in description: {self.ticket}"
        if kind == OutcomeKind.INVALID_IN_DESCRIPTION:
            return f"Invalid JIRA ticket in description: {self.ticket}"
        if kind == OutcomeKind.CLOSED_COMMENTED:
            return f"Merge request {self.merge_request_iid} closed"
        if kind == OutcomeKind.CLOSED_COMMENT_FAILED:
            return f"Merge request {self.merge_request_iid} closed, comment failed"
        return f"Failed to close merge request {self.merge_request_iid}"
