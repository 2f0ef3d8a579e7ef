"""Unit tests for JiraClient."""

import base64

import httpx
import pytest

from conftest import RecordingTransport
from jira_gitlab_webhook.config import Settings
from jira_gitlab_webhook.services.jira_client import JiraClient

ISSUE_PATH = "/rest/api/2/issue/ABC-123"


def make_client(settings, routes):
    transport = RecordingTransport(routes)
    return JiraClient(settings, transport=transport), transport


class TestJiraClient:
    """Test suite for JiraClient."""

    @pytest.mark.asyncio
    async def test_lookup_resolves_existing_issue(self, settings):
        client, transport = make_client(settings, {
            ("GET", ISSUE_PATH): httpx.Response(200, json={"id": "10001", "key": "ABC-123", "fields": {}}),
        })

        result = await client.lookup_issue("ABC-123")

        assert result.found is True
        assert result.key == "ABC-123"
        assert len(transport.requests) == 1
        request = transport.requests[0]
        assert str(request.url) == "https://jira.example.com/rest/api/2/issue/ABC-123"
        assert request.headers["Authorization"] == "Bearer jira-test-token"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_lookup_uses_key_reported_by_jira(self, settings):
        """A moved issue resolves to its new key."""
        client, _ = make_client(settings, {
            ("GET", ISSUE_PATH): httpx.Response(200, json={"key": "NEW-5"}),
        })

        result = await client.lookup_issue("ABC-123")

        assert result.found is True
        assert result.key == "NEW-5"

    @pytest.mark.asyncio
    async def test_basic_auth(self):
        settings = Settings(
            _env_file=None,
            gitlab_host="gitlab.example.com",
            gitlab_token="glpat-test",
            jira_host="https://jira.example.com",
            jira_username="bot",
            jira_password="secret",
        )
        client, transport = make_client(settings, {
            ("GET", ISSUE_PATH): httpx.Response(200, json={"key": "ABC-123"}),
        })

        result = await client.lookup_issue("ABC-123")

        assert result.found is True
        expected = "Basic " + base64.b64encode(b"bot:secret").decode()
        assert transport.requests[0].headers["Authorization"] == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403, 404, 500])
    async def test_error_status_is_not_found(self, settings, status_code):
        client, _ = make_client(settings, {
            ("GET", ISSUE_PATH): httpx.Response(status_code, json={"errorMessages": ["nope"]}),
        })

        result = await client.lookup_issue("ABC-123")

        assert result.found is False
        assert result.key is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ])
    async def test_transport_error_is_not_found(self, settings, error):
        client, transport = make_client(settings, {("GET", ISSUE_PATH): error})

        result = await client.lookup_issue("ABC-123")

        assert result.found is False
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="<html>login</html>"),
        httpx.Response(200, json=["ABC-123"]),
        httpx.Response(200, json={"id": "10001"}),
        httpx.Response(200, json={"key": None}),
    ])
    async def test_malformed_body_is_not_found(self, settings, response):
        client, _ = make_client(settings, {("GET", ISSUE_PATH): response})

        result = await client.lookup_issue("ABC-123")

        assert result.found is False

    @pytest.mark.asyncio
    async def test_jira_host_with_context_path(self):
        settings = Settings(
            _env_file=None,
            gitlab_host="gitlab.example.com",
            gitlab_token="glpat-test",
            jira_host="https://example.com/jira/",
            jira_token="t",
        )
        client, transport = make_client(settings, {
            ("GET", "/jira/rest/api/2/issue/ABC-123"): httpx.Response(200, json={"key": "ABC-123"}),
        })

        result = await client.lookup_issue("ABC-123")

        assert result.found is True
        assert str(transport.requests[0].url) == "https://example.com/jira/rest/api/2/issue/ABC-123"


@pytest.mark.asyncio
async def test_bare_jira_host_is_reached_over_https():
    settings = Settings(
        _env_file=None,
        gitlab_host="gitlab.example.com",
        gitlab_token="glpat-test",
        jira_host="jira.example.com",
        jira_token="t",
    )
    client, transport = make_client(settings, {
        ("GET", ISSUE_PATH): httpx.Response(200, json={"key": "ABC-123"}),
    })

    result = await client.lookup_issue("ABC-123")

    assert result.found is True
    assert str(transport.requests[0].url) == "https://jira.example.com/rest/api/2/issue/ABC-123"
