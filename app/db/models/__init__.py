"""Database models."""

from app.db.enums import ProjectStatus
from app.db.models.project import Project, ProjectParticipant, ProjectWaitingUser

__all__ = ["Project", "ProjectParticipant", "ProjectStatus", "ProjectWaitingUser"]
