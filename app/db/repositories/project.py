"""Project repository for database operations."""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.enums import ProjectStatus
from app.db.models.project import Project


@dataclass
class ProjectPage:
    """One page of projects from a 0-based paged scan."""

    items: Sequence[Project]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size < 1:
            return 0
        return math.ceil(self.total_elements / self.size)


class ProjectRepository:
    """Repository for Project persistence operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, project_id: int) -> Project | None:
        """Get project by ID."""
        result = await self.session.execute(
            select(Project).where(Project.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def save(self, project: Project) -> Project | None:
        """Insert or update a project and return the persisted state."""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def delete_by_id(self, project_id: int) -> int:
        """Delete a project, returning the number of rows removed."""
        result = await self.session.execute(
            delete(Project)
            .where(Project.project_id == project_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Project))
        return result.scalar_one()

    async def exists_by_id(self, project_id: int) -> bool:
        result = await self.session.execute(
            select(exists().where(Project.project_id == project_id))
        )
        return bool(result.scalar())

    async def find_all(self) -> Sequence[Project]:
        """Get all projects ordered by ID."""
        result = await self.session.execute(
            select(Project).order_by(Project.project_id)
        )
        return result.scalars().all()

    async def find_all_by_id_in(self, project_ids: Iterable[int]) -> Sequence[Project]:
        """Get the projects whose IDs are in the given collection."""
        result = await self.session.execute(
            select(Project)
            .where(Project.project_id.in_(list(project_ids)))
            .order_by(Project.project_id)
        )
        return result.scalars().all()

    async def find_page(self, page: int, size: int) -> ProjectPage:
        """Get one page of projects at a 0-based page index."""
        total = await self.count()
        result = await self.session.execute(
            select(Project)
            .order_by(Project.project_id)
            .offset(page * size)
            .limit(size)
        )
        return ProjectPage(
            items=result.scalars().all(),
            page=page,
            size=size,
            total_elements=total,
        )

    async def update_fields(
        self,
        project_url: str,
        description: str,
        project_name: str,
        status: ProjectStatus,
        author: str,
        project_id: int,
    ) -> int:
        """Overwrite the descriptive fields and status of one project.

        Returns the number of rows affected.
        """
        result = await self.session.execute(
            update(Project)
            .where(Project.project_id == project_id)
            .values(
                project_url=project_url,
                description=description,
                project_name=project_name,
                status=status,
                author=author,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
