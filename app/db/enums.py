"""Database enums."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Lifecycle stage of a course project.

    Any value may follow any other; no transition order is enforced.
    """

    PREPARATION = "PREPARATION"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"
