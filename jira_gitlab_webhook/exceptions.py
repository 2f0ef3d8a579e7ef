"""Exceptions raised while processing merge request events."""


class WebhookProcessingError(Exception):
    """Base exception for errors that abort processing of a webhook event."""
    pass


class MissingProjectIdError(WebhookProcessingError):
    """The event carries no project id but an action on the MR is required."""

    def __init__(self, mr_iid: int):
        self.mr_iid = mr_iid
        super().__init__(f"Merge request {mr_iid} event has no project id")
