"""FastAPI dependencies for dependency injection."""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import async_session_factory
from app.db.repositories.project import ProjectRepository
from app.services.project import ProjectService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for request with auto-commit/rollback."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    """Dependency for project service."""
    return ProjectService(ProjectRepository(db))
