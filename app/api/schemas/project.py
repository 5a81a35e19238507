"""Project API schemas.

Field names are snake_case in Python and camelCase on the wire.
Request schemas accept missing or empty values so that the service's
own validation decides what is a bad request.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.db.enums import ProjectStatus
from app.db.repositories.project import ProjectPage


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ProjectCreate(_CamelModel):
    """Schema for creating a project. ``status`` is accepted but ignored."""

    project_name: str | None = Field(default=None, description="Project name")
    description: str | None = Field(default=None, description="Project description")
    author: str | None = Field(default=None, description="Project author")
    project_url: str | None = Field(default=None, description="Project URL")
    status: ProjectStatus | None = Field(default=None)


class ProjectUpdate(_CamelModel):
    """Schema for a full update; every field is overwritten."""

    project_id: int = Field(default=0, description="ID of the project to update")
    project_name: str | None = Field(default=None)
    description: str | None = Field(default=None)
    author: str | None = Field(default=None)
    project_url: str | None = Field(default=None)
    status: ProjectStatus | None = Field(default=None)


class ProjectResponse(_CamelModel):
    """Schema for project response. Email sets are sorted."""

    project_id: int
    project_name: str
    description: str
    author: str
    project_url: str
    status: ProjectStatus
    participating_users: list[str] = Field(default_factory=list)
    waiting_users: list[str] = Field(default_factory=list)

    @field_validator("participating_users", "waiting_users", mode="before")
    @classmethod
    def _sorted_emails(cls, value: Any) -> list[str]:
        if value is None:
            return []
        return sorted(value)


class ProjectPageResponse(_CamelModel):
    """One page of projects."""

    content: list[ProjectResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: ProjectPage) -> "ProjectPageResponse":
        return cls(
            content=[ProjectResponse.model_validate(p) for p in page.items],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )
