"""Project API routes."""

from fastapi import APIRouter, Body, Depends, status
from loguru import logger

from app.api.dependencies import get_project_service
from app.api.schemas.common import APIResponse, MessageResponse
from app.api.schemas.project import (
    ProjectCreate,
    ProjectPageResponse,
    ProjectResponse,
    ProjectUpdate,
)
from app.db.enums import ProjectStatus
from app.services.project import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])

PARTICIPATING_USERS = "/{project_id}/participating-users"
WAITING_USERS = "/{project_id}/waiting-users"


@router.post("/create", response_model=APIResponse[ProjectResponse], status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[ProjectResponse]:
    """Create a new project in PREPARATION status."""
    logger.info(f"Creating project: {data.project_name}")
    project = await service.create_project(
        project_name=data.project_name,
        description=data.description,
        author=data.author,
        project_url=data.project_url,
        status=data.status,
    )
    logger.info(f"Project created successfully: {project.project_id}")
    return APIResponse.ok(ProjectResponse.model_validate(project))


@router.get("/get/{project_id}", response_model=APIResponse[ProjectResponse])
async def get_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[ProjectResponse]:
    """Get project by ID."""
    logger.info(f"Fetching project: {project_id}")
    project = await service.get_project(project_id)
    return APIResponse.ok(ProjectResponse.model_validate(project))


@router.get("/count", response_model=APIResponse[int])
async def count_projects(
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[int]:
    result = await service.count_projects()
    logger.info(f"Project count: {result}")
    return APIResponse.ok(result)


@router.delete("/delete/{project_id}", response_model=APIResponse[MessageResponse])
async def delete_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[MessageResponse]:
    """Delete a project."""
    logger.info(f"Deleting project: {project_id}")
    await service.delete_project(project_id)
    logger.info(f"Project deleted successfully: {project_id}")
    return APIResponse.ok(MessageResponse())


@router.get("/page/{page}/{size}", response_model=APIResponse[ProjectPageResponse])
async def get_page(
    page: int,
    size: int,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[ProjectPageResponse]:
    """Get one page of projects; ``page`` is 0-based."""
    logger.debug(f"Fetching project page {page} of size {size}")
    result = await service.get_page(page, size)
    return APIResponse.ok(ProjectPageResponse.from_page(result))


@router.patch("/update", response_model=APIResponse[MessageResponse])
async def update_project(
    data: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[MessageResponse]:
    """Overwrite name, description, author, URL and status of a project."""
    logger.info(f"Updating project: {data.project_id}")
    await service.update_project(
        project_id=data.project_id,
        project_name=data.project_name,
        description=data.description,
        author=data.author,
        project_url=data.project_url,
        status=data.status,
    )
    logger.info(f"Project updated successfully: {data.project_id}")
    return APIResponse.ok(MessageResponse())


@router.patch("/update/status/{project_id}", response_model=APIResponse[MessageResponse])
async def update_status(
    project_id: int,
    new_status: ProjectStatus | None = Body(default=None),
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[MessageResponse]:
    """Set the status of a project. The body is a bare status string."""
    logger.info(f"Updating status of project {project_id} to {new_status}")
    await service.update_status(project_id, new_status)
    return APIResponse.ok(MessageResponse())


@router.post("/for-ids", response_model=APIResponse[list[ProjectResponse]])
async def get_projects_for_ids(
    project_ids: list[int] | None = Body(default=None),
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[list[ProjectResponse]]:
    """Get the projects with the given IDs; unknown IDs are left out."""
    logger.debug(f"Fetching projects for ids: {project_ids}")
    projects = await service.get_projects_by_ids(project_ids)
    return APIResponse.ok([ProjectResponse.model_validate(p) for p in projects])


@router.get("/all", response_model=APIResponse[list[ProjectResponse]])
async def list_projects(
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[list[ProjectResponse]]:
    """List all projects."""
    logger.debug("Fetching all projects")
    projects = await service.get_all_projects()
    logger.debug(f"Found {len(projects)} projects")
    return APIResponse.ok([ProjectResponse.model_validate(p) for p in projects])


@router.get("/if-exists/{project_id}", response_model=APIResponse[bool])
async def project_exists(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[bool]:
    return APIResponse.ok(await service.project_exists(project_id))


@router.get(PARTICIPATING_USERS + "/create/{email}", response_model=APIResponse[MessageResponse])
async def add_participating_user(
    project_id: int,
    email: str,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[MessageResponse]:
    """Add a participating user, moving them out of the waiting users."""
    logger.info(f"Adding participating user {email} to project {project_id}")
    await service.add_participating_user(project_id, email)
    return APIResponse.ok(MessageResponse())


@router.get(PARTICIPATING_USERS + "/all", response_model=APIResponse[list[str]])
async def list_participating_users(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[list[str]]:
    logger.info(f"Listing participating users of project {project_id}")
    users = await service.get_participating_users(project_id)
    return APIResponse.ok(sorted(users))


@router.delete(PARTICIPATING_USERS + "/delete/{email}", response_model=APIResponse[MessageResponse])
async def remove_participating_user(
    project_id: int,
    email: str,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[MessageResponse]:
    logger.info(f"Removing participating user {email} from project {project_id}")
    await service.remove_participating_user(project_id, email)
    return APIResponse.ok(MessageResponse())


@router.get(WAITING_USERS + "/create/{email}", response_model=APIResponse[MessageResponse])
async def add_waiting_user(
    project_id: int,
    email: str,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[MessageResponse]:
    """Add a waiting user; rejected if the user already participates."""
    logger.info(f"Adding waiting user {email} to project {project_id}")
    await service.add_waiting_user(project_id, email)
    return APIResponse.ok(MessageResponse())


@router.get(WAITING_USERS + "/all", response_model=APIResponse[list[str]])
async def list_waiting_users(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[list[str]]:
    logger.info(f"Listing waiting users of project {project_id}")
    users = await service.get_waiting_users(project_id)
    return APIResponse.ok(sorted(users))


@router.delete(WAITING_USERS + "/delete/{email}", response_model=APIResponse[MessageResponse])
async def remove_waiting_user(
    project_id: int,
    email: str,
    service: ProjectService = Depends(get_project_service),
) -> APIResponse[MessageResponse]:
    logger.info(f"Removing waiting user {email} from project {project_id}")
    await service.remove_waiting_user(project_id, email)
    return APIResponse.ok(MessageResponse())
