"""
JIRA client.

Validates that a ticket reference exists in JIRA using the REST API v2.
Every failure mode (unknown issue, authentication error, network error,
unexpected body) resolves to a negative lookup result; the caller never sees
an exception.
"""

import time
from typing import Optional

import httpx

from jira_gitlab_webhook.config import Settings
from jira_gitlab_webhook.models.outcome import TicketLookupResult
from jira_gitlab_webhook.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)


class JiraClient:
    """Looks up JIRA issues with the configured credentials."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the JIRA client.

        Args:
            settings: Application settings holding host and credentials
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = settings.jira_host
        self.auth_scheme = settings.jira_auth_scheme

        headers = {"Accept": "application/json"}
        auth = None
        if self.auth_scheme == "api_key":
            headers["Authorization"] = f"Bearer {settings.jira_token}"
        else:
            auth = httpx.BasicAuth(settings.jira_username, settings.jira_password)

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            auth=auth,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

        logger.info(f"JiraClient initialized for {self.base_url} using {self.auth_scheme} auth")

    async def lookup_issue(self, key: str) -> TicketLookupResult:
        """
        Check whether a JIRA issue exists.

        Args:
            key: Ticket reference, e.g. 'ABC-123'

        Returns:
            Resolved result carrying the issue key reported by JIRA, or
            a not-found result on any failure
        """
        endpoint = f"/rest/api/2/issue/{key}"
        start_time = time.time()

        try:
            response = await self._client.get(endpoint)
        except httpx.HTTPError as e:
            log_api_call(
                logger,
                service="jira",
                endpoint=endpoint,
                method="GET",
                duration_ms=(time.time() - start_time) * 1000,
                error=f"{type(e).__name__}: {e}",
            )
            return TicketLookupResult.not_found()

        duration_ms = (time.time() - start_time) * 1000

        if not response.is_success:
            log_api_call(
                logger,
                service="jira",
                endpoint=endpoint,
                method="GET",
                status_code=response.status_code,
                duration_ms=duration_ms,
                error=f"HTTP {response.status_code}",
            )
            return TicketLookupResult.not_found()

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"JIRA returned a non-JSON body for {key}", extra={"ticket": key})
            return TicketLookupResult.not_found()

        issue_key = data.get("key") if isinstance(data, dict) else None
        if not isinstance(issue_key, str) or not issue_key:
            logger.warning(f"JIRA response for {key} has no issue key", extra={"ticket": key})
            return TicketLookupResult.not_found()

        log_api_call(
            logger,
            service="jira",
            endpoint=endpoint,
            method="GET",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return TicketLookupResult.resolved(issue_key)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
