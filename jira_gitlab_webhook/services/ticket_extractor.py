"""JIRA ticket reference extraction."""

import re
from typing import Optional

# Project key in upper case, a dash and the issue number, e.g. ABC-123
TICKET_PATTERN = re.compile(r"[A-Z]+-[0-9]+")


def extract_ticket_reference(text: Optional[str]) -> Optional[str]:
    """
    Find the first ticket reference in a text.

    Args:
        text: Branch name or merge request description

    Returns:
        The leftmost match, or None when the text holds no reference
    """
    if not text:
        return None
    match = TICKET_PATTERN.search(text)
    return match.group(0) if match else None
