from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Iterable

import pytest

# Keep test log files out of the working tree; settings read env at import.
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "projects-service-test-logs"))
os.environ.setdefault("ENV", "test")

from fastapi.testclient import TestClient

from app.api.dependencies import get_project_service
from app.db.enums import ProjectStatus
from app.db.models.project import Project
from app.db.repositories.project import ProjectPage
from app.main import app
from app.services.project import ProjectService


class InMemoryProjectRepository:
    """Dict-backed stand-in for ProjectRepository."""

    def __init__(self) -> None:
        self.projects: dict[int, Project] = {}
        self.calls: list[str] = []
        self.fail_saves = False
        self._next_id = 1

    async def find_by_id(self, project_id: int) -> Project | None:
        self.calls.append("find_by_id")
        return self.projects.get(project_id)

    async def save(self, project: Project) -> Project | None:
        self.calls.append("save")
        if self.fail_saves:
            return None
        if project.project_id is None:
            project.project_id = self._next_id
            self._next_id += 1
        self.projects[project.project_id] = project
        return project

    async def delete_by_id(self, project_id: int) -> int:
        self.calls.append("delete_by_id")
        return 1 if self.projects.pop(project_id, None) is not None else 0

    async def count(self) -> int:
        self.calls.append("count")
        return len(self.projects)

    async def exists_by_id(self, project_id: int) -> bool:
        self.calls.append("exists_by_id")
        return project_id in self.projects

    async def find_all(self) -> list[Project]:
        self.calls.append("find_all")
        return [self.projects[key] for key in sorted(self.projects)]

    async def find_all_by_id_in(self, project_ids: Iterable[int]) -> list[Project]:
        self.calls.append("find_all_by_id_in")
        wanted = set(project_ids)
        return [self.projects[key] for key in sorted(self.projects) if key in wanted]

    async def find_page(self, page: int, size: int) -> ProjectPage:
        self.calls.append("find_page")
        ordered = [self.projects[key] for key in sorted(self.projects)]
        return ProjectPage(
            items=ordered[page * size:(page + 1) * size],
            page=page,
            size=size,
            total_elements=len(ordered),
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
        self.calls.append("update_fields")
        project = self.projects.get(project_id)
        if project is None:
            return 0
        project.project_url = project_url
        project.description = description
        project.project_name = project_name
        project.status = status
        project.author = author
        return 1


def run(coro):
    """Drive a service coroutine to completion."""
    return asyncio.run(coro)


@pytest.fixture()
def repository() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture()
def service(repository: InMemoryProjectRepository) -> ProjectService:
    return ProjectService(repository)


@pytest.fixture()
def make_project(service: ProjectService):
    def _make(name: str = "P1", **overrides) -> Project:
        fields = {
            "project_name": name,
            "description": "d",
            "author": "a@x.com",
            "project_url": "http://x",
        }
        fields.update(overrides)
        return run(service.create_project(**fields))

    return _make


@pytest.fixture()
def client(service: ProjectService):
    app.dependency_overrides[get_project_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
