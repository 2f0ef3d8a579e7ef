"""
Webhook endpoint for GitLab merge request events.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from jira_gitlab_webhook.exceptions import WebhookProcessingError
from jira_gitlab_webhook.models.merge_request_event import MergeRequestEvent
from jira_gitlab_webhook.services.decision_engine import TicketPolicyEngine
from jira_gitlab_webhook.utils.logging import get_logger, log_error_with_context

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])


def get_policy_engine(request: Request) -> TicketPolicyEngine:
    """Return the policy engine built at application start."""
    return request.app.state.policy_engine


@router.post("/webhook", response_class=PlainTextResponse)
async def handle_merge_request_webhook(
    request: Request,
    engine: TicketPolicyEngine = Depends(get_policy_engine),
) -> Response:
    """
    Receive a GitLab merge request event and enforce the ticket policy.

    This endpoint:
    1. Parses the merge request event payload (400 if malformed)
    2. Runs the ticket policy engine on it
    3. Returns 200 OK with the outcome message as plain text

    Webhook signatures (X-Gitlab-Token) are not verified.

    Raises:
        HTTPException: If the payload is not a valid merge request event
    """
    request_id = getattr(request.state, "request_id", None)

    try:
        payload: Dict[str, Any] = await request.json()
        event = MergeRequestEvent.from_payload(payload)
    except (ValueError, ValidationError) as e:
        logger.warning(
            f"Invalid merge request event payload: {e}",
            extra={"request_id": request_id},
        )
        raise HTTPException(status_code=400, detail="Invalid merge request event payload")

    logger.debug("Webhook token verification is not enabled", extra={"request_id": request_id})

    try:
        outcome = await engine.process_event(event)
    except WebhookProcessingError as e:
        log_error_with_context(
            logger,
            "Error processing merge request event",
            e,
            request_id=request_id,
            mr_iid=event.merge_request_iid,
        )
        return Response(status_code=500)
    except Exception as e:
        log_error_with_context(
            logger,
            "Unexpected error handling webhook",
            e,
            request_id=request_id,
            mr_iid=event.merge_request_iid,
        )
        return Response(status_code=500)

    for error in outcome.ignored_errors:
        logger.warning(
            f"Ignored failure: {error}",
            extra={"request_id": request_id, "mr_iid": outcome.merge_request_iid},
        )

    return PlainTextResponse(outcome.message)
