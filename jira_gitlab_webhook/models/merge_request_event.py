"""GitLab merge request webhook event models."""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class User(BaseModel):
    """GitLab user as embedded in webhook payloads."""

    id: Optional[int] = None
    name: Optional[str] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    email: Optional[str] = None


class Project(BaseModel):
    """Project the merge request belongs to."""

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    web_url: Optional[str] = None
    namespace: Optional[str] = None
    path_with_namespace: Optional[str] = None
    default_branch: Optional[str] = None


class Repository(BaseModel):
    """Repository summary."""

    name: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None


class Label(BaseModel):
    """Merge request label."""

    id: Optional[int] = None
    title: Optional[str] = None
    color: Optional[str] = None
    project_id: Optional[int] = None
    description: Optional[str] = None
    type: Optional[str] = None


class Author(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class LastCommit(BaseModel):
    id: Optional[str] = None
    message: Optional[str] = None
    title: Optional[str] = None
    timestamp: Optional[str] = None
    url: Optional[str] = None
    author: Optional[Author] = None


class CurrentPrevious(BaseModel, Generic[T]):
    """A changed attribute with its previous and current value."""

    previous: Optional[T] = None
    current: Optional[T] = None


class Changes(BaseModel):
    """Attributes changed by the event; absent keys did not change."""

    updated_by_id: Optional[CurrentPrevious[int]] = None
    updated_at: Optional[CurrentPrevious[str]] = None
    labels: Optional[CurrentPrevious[List[Label]]] = None
    last_edited_at: Optional[CurrentPrevious[str]] = None
    last_edited_by_id: Optional[CurrentPrevious[int]] = None


class ObjectAttributes(BaseModel):
    """Merge request attributes of the event.

    Only ``iid``, ``state``, ``source_branch`` and ``description`` drive the
    ticket policy; the remaining fields are accepted for completeness.
    """

    iid: int
    state: str  # 'opened', 'closed', 'merged', 'locked'
    source_branch: str
    description: Optional[str]
    id: Optional[int] = None
    target_branch: Optional[str] = None
    source_project_id: Optional[int] = None
    target_project_id: Optional[int] = None
    author_id: Optional[int] = None
    title: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    merge_status: Optional[str] = None
    detailed_merge_status: Optional[str] = None
    work_in_progress: Optional[bool] = None
    url: Optional[str] = None
    action: Optional[str] = None
    last_commit: Optional[LastCommit] = None
    labels: List[Label] = []


class MergeRequestEvent(BaseModel):
    """Merge request hook payload sent by GitLab."""

    object_kind: Optional[str] = None
    event_type: Optional[str] = None
    user: Optional[User] = None
    project: Project
    repository: Optional[Repository] = None
    object_attributes: ObjectAttributes
    labels: List[Label] = []
    changes: Optional[Changes] = None
    assignees: Optional[List[User]] = None
    reviewers: Optional[List[User]] = None

    @property
    def state(self) -> str:
        return self.object_attributes.state

    @property
    def source_branch(self) -> str:
        return self.object_attributes.source_branch

    @property
    def description(self) -> str:
        return self.object_attributes.description or ""

    @property
    def project_id(self) -> Optional[int]:
        return self.project.id

    @property
    def merge_request_iid(self) -> int:
        return self.object_attributes.iid

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "MergeRequestEvent":
        """Validate a decoded JSON payload into an event."""
        return cls.model_validate(payload)
