"""
GitLab merge request client.

Closes merge requests and posts notes on them through the GitLab REST API v4,
authenticated with a private token. Each call is attempted once and reports
its outcome as a GitLabActionResult instead of raising.
"""

import time
from typing import Optional

import httpx

from jira_gitlab_webhook.config import Settings
from jira_gitlab_webhook.models.outcome import GitLabActionResult
from jira_gitlab_webhook.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)

CLOSE_COMMENT = (
    "This merge request has been closed automatically because it does not "
    "contain a valid JIRA ticket in the branch name or description."
)

# Response bodies are truncated to this many characters in logs and results
MAX_BODY_LENGTH = 500


class GitLabClient:
    """Performs merge request actions against a GitLab instance."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the GitLab client.

        Args:
            settings: Application settings holding host and token
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = settings.gitlab_api_url
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"PRIVATE-TOKEN": settings.gitlab_token},
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

        logger.info(f"GitLabClient initialized for {self.base_url}")

    async def close_merge_request(self, project_id: int, mr_iid: int) -> GitLabActionResult:
        """
        Close a merge request.

        Args:
            project_id: GitLab project id
            mr_iid: Project-scoped merge request iid

        Returns:
            GitLabActionResult describing the outcome
        """
        result = await self._send(
            "PUT",
            f"/projects/{project_id}/merge_requests/{mr_iid}",
            params={"state_event": "close"},
            project_id=project_id,
            mr_iid=mr_iid,
        )
        if result.success:
            logger.info(f"Merge request {mr_iid} closed", extra={"project_id": project_id, "mr_iid": mr_iid})
        else:
            logger.error(
                f"Failed to close merge request {mr_iid}: {result.status_code}",
                extra={"project_id": project_id, "mr_iid": mr_iid},
            )
        return result

    async def post_comment(
        self,
        project_id: int,
        mr_iid: int,
        body: str = CLOSE_COMMENT,
    ) -> GitLabActionResult:
        """
        Post a note on a merge request.

        Args:
            project_id: GitLab project id
            mr_iid: Project-scoped merge request iid
            body: Note text

        Returns:
            GitLabActionResult describing the outcome
        """
        result = await self._send(
            "POST",
            f"/projects/{project_id}/merge_requests/{mr_iid}/notes",
            params={"body": body},
            project_id=project_id,
            mr_iid=mr_iid,
        )
        if result.success:
            logger.info(f"Comment on MR {mr_iid} done.", extra={"project_id": project_id, "mr_iid": mr_iid})
        else:
            logger.error(
                f"Failed to comment on MR {mr_iid}: {result.status_code}",
                extra={"project_id": project_id, "mr_iid": mr_iid},
            )
        return result

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: dict,
        project_id: int,
        mr_iid: int,
    ) -> GitLabActionResult:
        """Send one request and convert the response or error to a result."""
        start_time = time.time()

        try:
            response = await self._client.request(method, endpoint, params=params)
        except httpx.HTTPError as e:
            error = f"{type(e).__name__}: {e}"
            log_api_call(
                logger,
                service="gitlab",
                endpoint=endpoint,
                method=method,
                duration_ms=(time.time() - start_time) * 1000,
                error=error,
            )
            return GitLabActionResult(success=False, error=error)

        duration_ms = (time.time() - start_time) * 1000

        if response.is_success:
            log_api_call(
                logger,
                service="gitlab",
                endpoint=endpoint,
                method=method,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            return GitLabActionResult(success=True, status_code=response.status_code)

        body = response.text[:MAX_BODY_LENGTH]
        log_api_call(
            logger,
            service="gitlab",
            endpoint=endpoint,
            method=method,
            status_code=response.status_code,
            duration_ms=duration_ms,
            error=f"HTTP {response.status_code}",
        )
        logger.debug(f"Response: {body}", extra={"project_id": project_id, "mr_iid": mr_iid})
        return GitLabActionResult(success=False, status_code=response.status_code, error=body)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
