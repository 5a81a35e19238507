"""Database repositories."""

from app.db.repositories.project import ProjectPage, ProjectRepository

__all__ = ["ProjectPage", "ProjectRepository"]
