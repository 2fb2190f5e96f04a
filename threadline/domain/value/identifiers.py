"""Strongly typed identifiers.

Items are assigned integer ids by the source; ids are globally unique across
stories, comments, jobs and polls.
"""

from typing import NewType
from uuid import UUID

ItemId = NewType("ItemId", int)
SessionId = NewType("SessionId", UUID)
