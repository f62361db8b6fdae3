"""
Enums used across the application.
"""

from enum import Enum


class Era(str, Enum):
    """When a media item is from. Links only join opposite eras."""

    PAST = "past"
    PRESENT = "present"


class Locket(str, Enum):
    """How a media item is kept in the user's locket."""

    TEMP = "temp"
    PERM = "perm"
    NONE = "none"


class Ownership(str, Enum):
    """
    How records of a resource type relate to users.

    OWNED: every record carries an owner column pointing at a user.
    SELF: the record is the user, so its own id is the owner.
    UNOWNED: global records visible to every authenticated caller.
    """

    OWNED = "owned"
    SELF = "self"
    UNOWNED = "unowned"


class LinkOutcome(str, Enum):
    """Result of a link request. Every value is reported as success over HTTP."""

    CREATED = "created"
    EXISTS = "exists"
    REJECTED_MISSING = "rejected_missing"
    REJECTED_SAME_ERA = "rejected_same_era"
