"""GitLab webhook that closes merge requests without a JIRA ticket reference."""

__version__ = "0.1.0"
