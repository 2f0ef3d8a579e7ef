"""Data models for the JIRA/GitLab webhook service."""

from .merge_request_event import (
    Author,
    Changes,
    CurrentPrevious,
    Label,
    LastCommit,
    MergeRequestEvent,
    ObjectAttributes,
    Project,
    Repository,
    User,
)
from .outcome import (
    ActionOutcome,
    GitLabActionResult,
    OutcomeKind,
    TicketLookupResult,
    TicketSource,
)

__all__ = [
    # Event models
    "MergeRequestEvent",
    "ObjectAttributes",
    "Project",
    "Repository",
    "User",
    "Label",
    "LastCommit",
    "Author",
    "Changes",
    "CurrentPrevious",
    # Outcome models
    "ActionOutcome",
    "OutcomeKind",
    "TicketSource",
    "TicketLookupResult",
    "GitLabActionResult",
]
