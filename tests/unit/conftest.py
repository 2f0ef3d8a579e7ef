"""
Shared fixtures for unit tests.
"""

import copy
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest

from jira_gitlab_webhook.config import Settings


SAMPLE_EVENT: Dict[str, Any] = {
    "object_kind": "merge_request",
    "event_type": "merge_request",
    "user": {
        "id": 1,
        "name": "Administrator",
        "username": "root",
        "avatar_url": "http://www.gravatar.com/avatar/e64c7d89f26bd1972efa854d13d7dd61?s=40&d=identicon",
        "email": "admin@example.com",
    },
    "project": {
        "id": 42,
        "name": "Gitlab Test",
        "description": "Aut reprehenderit ut est.",
        "web_url": "https://gitlab.example.com/gitlabhq/gitlab-test",
        "avatar_url": None,
        "git_ssh_url": "git@gitlab.example.com:gitlabhq/gitlab-test.git",
        "git_http_url": "https://gitlab.example.com/gitlabhq/gitlab-test.git",
        "namespace": "GitlabHQ",
        "visibility_level": 20,
        "path_with_namespace": "gitlabhq/gitlab-test",
        "default_branch": "master",
    },
    "repository": {
        "name": "Gitlab Test",
        "url": "https://gitlab.example.com/gitlabhq/gitlab-test.git",
        "description": "Aut reprehenderit ut est.",
        "homepage": "https://gitlab.example.com/gitlabhq/gitlab-test",
    },
    "object_attributes": {
        "id": 99,
        "iid": 7,
        "target_branch": "master",
        "source_branch": "feature/ABC-123-fix",
        "source_project_id": 42,
        "author_id": 1,
        "assignee_ids": [],
        "reviewer_ids": [],
        "title": "Fix login redirect",
        "created_at": "2023-05-10 09:00:00 UTC",
        "updated_at": "2023-05-10 09:00:00 UTC",
        "state_id": 1,
        "state": "opened",
        "blocking_discussions_resolved": True,
        "work_in_progress": False,
        "merge_status": "unchecked",
        "target_project_id": 42,
        "description": "Redirects users back after login.",
        "url": "https://gitlab.example.com/gitlabhq/gitlab-test/-/merge_requests/7",
        "last_commit": {
            "id": "da1560886d4f094c3e6c9ef40349f7d38b5d27d7",
            "message": "fixed readme",
            "title": "Update file README.md",
            "timestamp": "2023-05-10T09:00:00+00:00",
            "url": "https://gitlab.example.com/gitlabhq/gitlab-test/-/commit/da1560886d4f094c3e6c9ef40349f7d38b5d27d7",
            "author": {"name": "GitLab dev user", "email": "gitlabdev@dv6700.(none)"},
        },
        "labels": [],
        "action": "open",
        "detailed_merge_status": "not_open",
    },
    "labels": [],
    "changes": {
        "updated_by_id": {"previous": None, "current": 1},
        "updated_at": {"previous": "2023-05-10 08:59:00 UTC", "current": "2023-05-10 09:00:00 UTC"},
    },
}


def make_event_payload(
    state: str = "opened",
    source_branch: str = "feature/ABC-123-fix",
    description: Optional[str] = "Redirects users back after login.",
    project_id: Optional[int] = 42,
    iid: int = 7,
) -> Dict[str, Any]:
    """Build a merge request hook payload with the given core fields."""
    payload = copy.deepcopy(SAMPLE_EVENT)
    attributes = payload["object_attributes"]
    attributes["state"] = state
    attributes["source_branch"] = source_branch
    attributes["description"] = description
    attributes["iid"] = iid
    payload["project"]["id"] = project_id
    return payload


ResponseSpec = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class RecordingTransport(httpx.MockTransport):
    """
    Mock transport that records requests and answers from a route table.

    Routes map (method, path) to a response, an exception to raise, or a
    callable producing a response. Unrouted requests get a 404.
    """

    def __init__(self, routes: Optional[Dict[Tuple[str, str], ResponseSpec]] = None):
        self.routes: Dict[Tuple[str, str], ResponseSpec] = dict(routes or {})
        self.requests: List[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        spec = self.routes.get((request.method, request.url.path))
        if spec is None:
            return httpx.Response(404, json={"message": "404 Not found"})
        if isinstance(spec, Exception):
            raise spec
        if isinstance(spec, httpx.Response):
            return httpx.Response(spec.status_code, headers=spec.headers, content=spec.content)
        return spec(request)

    def calls(self, method: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method]


@pytest.fixture
def settings() -> Settings:
    """Settings with API key authentication against JIRA."""
    return Settings(
        _env_file=None,
        gitlab_host="gitlab.example.com",
        gitlab_token="glpat-test",
        jira_host="https://jira.example.com",
        jira_token="jira-test-token",
        http_timeout_seconds=5,
    )


@pytest.fixture
def event_payload() -> Dict[str, Any]:
    return make_event_payload()


@pytest.fixture
def make_payload() -> Callable[..., Dict[str, Any]]:
    return make_event_payload
