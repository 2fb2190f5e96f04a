"""Domain value types."""

from enum import Enum


class ItemType(str, Enum):
    """Kind of item returned by the item source."""

    STORY = "story"
    COMMENT = "comment"
    JOB = "job"
    POLL = "poll"
    POLLOPT = "pollopt"


class ViewMode(str, Enum):
    """Presentation order of the materialized tree."""

    NESTED = "nested"
    RECENCY = "recency"
