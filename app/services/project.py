"""Project service for lifecycle and membership logic."""

from typing import Sequence

from loguru import logger

from app.core.exceptions import (
    MemberConflictError,
    MemberNotFoundException,
    ProjectCreationError,
    ProjectNotFoundException,
    ProjectPersistenceError,
)
from app.core.validation import (
    validate_email,
    validate_page_request,
    validate_project_fields,
    validate_project_id,
    validate_project_ids,
    validate_project_update,
    validate_status,
)
from app.db.enums import ProjectStatus
from app.db.models.project import Project
from app.db.repositories.project import ProjectPage, ProjectRepository

PARTICIPATING = "participating"
WAITING = "waiting"


class ProjectService:
    """Service layer for Project operations.

    Status and membership changes load the project, edit it in memory and
    save the whole record back. Two concurrent edits of the same project
    can race; the later save wins.
    """

    def __init__(self, repository: ProjectRepository):
        self.repository = repository

    async def _load(self, project_id: int) -> Project:
        project = await self.repository.find_by_id(project_id)
        if project is None:
            logger.error(f"Project not found: {project_id}")
            raise ProjectNotFoundException(project_id)
        return project

    async def create_project(
        self,
        project_name: str | None,
        description: str | None,
        author: str | None,
        project_url: str | None,
        status: ProjectStatus | None = None,
    ) -> Project:
        """Create a new project.

        Any supplied ``status`` is ignored; new projects always start in
        PREPARATION.
        """
        validate_project_fields(project_name, description, author, project_url)
        if status is not None and status != ProjectStatus.PREPARATION:
            logger.debug(f"Ignoring requested status {status.value} on create")

        project = Project(
            project_name=project_name,
            description=description,
            author=author,
            project_url=project_url,
            status=ProjectStatus.PREPARATION,
        )
        saved = await self.repository.save(project)
        if saved is None:
            raise ProjectCreationError()
        return saved

    async def get_project(self, project_id: int) -> Project:
        """Get project by ID."""
        validate_project_id(project_id)
        project = await self._load(project_id)
        logger.debug(f"Found project: {project!r}")
        return project

    async def update_project(
        self,
        project_id: int | None,
        project_name: str | None,
        description: str | None,
        author: str | None,
        project_url: str | None,
        status: ProjectStatus | None,
    ) -> None:
        """Overwrite all five updatable fields with a single targeted update."""
        validate_project_update(
            project_id, project_name, description, author, project_url, status
        )
        affected = await self.repository.update_fields(
            project_url,
            description,
            project_name,
            status,
            author,
            project_id,
        )
        if affected != 1:
            logger.error(f"Project not found for update: {project_id}")
            raise ProjectNotFoundException(project_id)

    async def delete_project(self, project_id: int) -> None:
        validate_project_id(project_id)
        if await self.repository.delete_by_id(project_id) != 1:
            logger.error(f"Project not found for delete: {project_id}")
            raise ProjectNotFoundException(project_id)

    async def update_status(self, project_id: int, status: ProjectStatus | None) -> Project:
        """Set the status of a project; any status may follow any other."""
        validate_project_id(project_id)
        validate_status(status)
        project = await self._load(project_id)
        project.status = status
        saved = await self.repository.save(project)
        if saved is None:
            raise ProjectPersistenceError()
        return saved

    async def count_projects(self) -> int:
        return await self.repository.count()

    async def get_page(self, page: int, size: int) -> ProjectPage:
        validate_page_request(page, size)
        result = await self.repository.find_page(page, size)
        if result is None:
            raise ProjectNotFoundException()
        return result

    async def project_exists(self, project_id: int) -> bool:
        validate_project_id(project_id)
        return await self.repository.exists_by_id(project_id)

    async def get_projects_by_ids(self, project_ids: Sequence[int] | None) -> Sequence[Project]:
        """Get the projects matching the given IDs; unknown IDs are skipped."""
        validate_project_ids(project_ids)
        result = await self.repository.find_all_by_id_in(project_ids)
        if result is None:
            raise ProjectNotFoundException()
        return result

    async def get_all_projects(self) -> Sequence[Project]:
        result = await self.repository.find_all()
        if result is None:
            raise ProjectNotFoundException()
        return result

    async def add_participating_user(self, project_id: int, email: str) -> Project:
        """Add a participant and drop the same email from the waiting users."""
        validate_project_id(project_id)
        validate_email(email)
        project = await self._load(project_id)

        project.participating_users.add(email)
        project.waiting_users.discard(email)
        await self.repository.save(project)
        return project

    async def get_participating_users(self, project_id: int) -> set[str]:
        validate_project_id(project_id)
        project = await self._load(project_id)
        return set(project.participating_users)

    async def remove_participating_user(self, project_id: int, email: str) -> Project:
        validate_project_id(project_id)
        validate_email(email)
        project = await self._load(project_id)

        if email not in project.participating_users:
            logger.error(f"User {email} is not participating in project {project_id}")
            raise MemberNotFoundException(email, project_id, PARTICIPATING)
        project.participating_users.remove(email)
        await self.repository.save(project)
        return project

    async def add_waiting_user(self, project_id: int, email: str) -> Project:
        """Queue a user; users already participating are rejected."""
        validate_project_id(project_id)
        validate_email(email)
        project = await self._load(project_id)

        if email in project.participating_users:
            logger.error(f"User {email} already participates in project {project_id}")
            raise MemberConflictError(email, project_id)
        project.waiting_users.add(email)
        await self.repository.save(project)
        return project

    async def get_waiting_users(self, project_id: int) -> set[str]:
        validate_project_id(project_id)
        project = await self._load(project_id)
        return set(project.waiting_users)

    async def remove_waiting_user(self, project_id: int, email: str) -> Project:
        validate_project_id(project_id)
        validate_email(email)
        project = await self._load(project_id)

        if email not in project.waiting_users:
            logger.error(f"User {email} is not waiting for project {project_id}")
            raise MemberNotFoundException(email, project_id, WAITING)
        project.waiting_users.remove(email)
        await self.repository.save(project)
        return project
