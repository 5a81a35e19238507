"""Service and repository against a real SQLite store.

Each ``_call`` opens its own session and commits or rolls back the way
``get_db`` does for a request, so every step starts from stored state.
"""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.exceptions import (
    MemberConflictError,
    MemberNotFoundException,
    ProjectNotFoundException,
)
from app.db.base import Base
from app.db.enums import ProjectStatus
from app.db.models import ProjectParticipant, ProjectWaitingUser
from app.db.repositories import ProjectRepository
from app.services.project import ProjectService


@pytest.fixture()
def session_factory(tmp_path):
    # NullPool: every asyncio.run gets a connection opened on its own loop
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'projects.db'}",
        poolclass=NullPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async def _create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create_schema())
    try:
        yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        asyncio.run(engine.dispose())


@pytest.fixture()
def call(session_factory):
    def _call(operation):
        async def _in_session():
            async with session_factory() as session:
                service = ProjectService(ProjectRepository(session))
                try:
                    result = await operation(service)
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
                return result

        return asyncio.run(_in_session())

    return _call


@pytest.fixture()
def count_rows(session_factory):
    def _count(model) -> int:
        async def _query():
            async with session_factory() as session:
                result = await session.execute(select(func.count()).select_from(model))
                return result.scalar_one()

        return asyncio.run(_query())

    return _count


@pytest.fixture()
def create(call):
    def _create(name: str = "P1", status: ProjectStatus | None = None):
        return call(
            lambda s: s.create_project(
                project_name=name,
                description="d",
                author="a@x.com",
                project_url="http://x",
                status=status,
            )
        )

    return _create


def test_create_assigns_id_and_preparation_status(create, call) -> None:
    project = create(status=ProjectStatus.ARCHIVED)

    assert project.project_id == 1
    assert project.status is ProjectStatus.PREPARATION
    assert set(project.participating_users) == set()

    stored = call(lambda s: s.get_project(1))
    assert stored.project_name == "P1"
    assert stored.status is ProjectStatus.PREPARATION


def test_membership_walkthrough(create, call) -> None:
    pid = create().project_id

    call(lambda s: s.add_participating_user(pid, "u@test.com"))
    assert call(lambda s: s.get_participating_users(pid)) == {"u@test.com"}

    with pytest.raises(MemberConflictError):
        call(lambda s: s.add_waiting_user(pid, "u@test.com"))

    call(lambda s: s.remove_participating_user(pid, "u@test.com"))
    assert call(lambda s: s.get_participating_users(pid)) == set()

    call(lambda s: s.add_waiting_user(pid, "u@test.com"))
    assert call(lambda s: s.get_waiting_users(pid)) == {"u@test.com"}


def test_adding_participant_deletes_waiting_row(create, call, count_rows) -> None:
    pid = create().project_id
    call(lambda s: s.add_waiting_user(pid, "w@school.local"))
    assert count_rows(ProjectWaitingUser) == 1

    call(lambda s: s.add_participating_user(pid, "w@school.local"))
    call(lambda s: s.add_participating_user(pid, "w@school.local"))

    assert count_rows(ProjectWaitingUser) == 0
    assert count_rows(ProjectParticipant) == 1
    project = call(lambda s: s.get_project(pid))
    assert set(project.participating_users) == {"w@school.local"}
    assert set(project.waiting_users) == set()


def test_remove_unknown_member(create, call) -> None:
    pid = create().project_id

    with pytest.raises(MemberNotFoundException):
        call(lambda s: s.remove_waiting_user(pid, "nobody@test.com"))
    with pytest.raises(MemberNotFoundException):
        call(lambda s: s.remove_participating_user(pid, "nobody@test.com"))


def test_full_update_and_missing_id(create, call) -> None:
    pid = create().project_id

    call(
        lambda s: s.update_project(
            project_id=pid,
            project_name="P2",
            description="d2",
            author="b@x.com",
            project_url="http://y",
            status=ProjectStatus.IN_PROGRESS,
        )
    )
    project = call(lambda s: s.get_project(pid))
    assert (project.project_name, project.description, project.author, project.project_url) == (
        "P2",
        "d2",
        "b@x.com",
        "http://y",
    )
    assert project.status is ProjectStatus.IN_PROGRESS

    with pytest.raises(ProjectNotFoundException):
        call(
            lambda s: s.update_project(
                project_id=99,
                project_name="P2",
                description="d2",
                author="b@x.com",
                project_url="http://y",
                status=ProjectStatus.IN_PROGRESS,
            )
        )


def test_update_status_is_stored(create, call) -> None:
    pid = create().project_id

    call(lambda s: s.update_status(pid, ProjectStatus.COMPLETED))

    assert call(lambda s: s.get_project(pid)).status is ProjectStatus.COMPLETED


def test_delete_twice(create, call) -> None:
    pid = create().project_id

    call(lambda s: s.delete_project(pid))

    with pytest.raises(ProjectNotFoundException):
        call(lambda s: s.delete_project(pid))
    assert call(lambda s: s.project_exists(pid)) is False
    assert call(lambda s: s.count_projects()) == 0


def test_delete_cascades_to_membership_rows(create, call, count_rows) -> None:
    pid = create().project_id
    other = create("P2").project_id
    call(lambda s: s.add_participating_user(pid, "p@test.com"))
    call(lambda s: s.add_waiting_user(pid, "w@test.com"))
    call(lambda s: s.add_waiting_user(other, "w@test.com"))

    call(lambda s: s.delete_project(pid))

    assert count_rows(ProjectParticipant) == 0
    assert count_rows(ProjectWaitingUser) == 1
    assert call(lambda s: s.get_waiting_users(other)) == {"w@test.com"}


def test_pages_are_offset_by_index(create, call) -> None:
    for name in ("P1", "P2", "P3"):
        create(name)

    first = call(lambda s: s.get_page(0, 1))
    second = call(lambda s: s.get_page(1, 1))
    tail = call(lambda s: s.get_page(1, 2))

    assert [p.project_name for p in first.items] == ["P1"]
    assert [p.project_name for p in second.items] == ["P2"]
    assert [p.project_name for p in tail.items] == ["P3"]
    assert first.total_elements == 3
    assert first.total_pages == 3
    assert tail.total_pages == 2


def test_bulk_by_ids_skips_missing(create, call) -> None:
    create("P1")
    create("P2")

    found = call(lambda s: s.get_projects_by_ids([2, 7, 1]))

    assert [p.project_id for p in found] == [1, 2]
    assert [p.project_id for p in call(lambda s: s.get_all_projects())] == [1, 2]
    assert call(lambda s: s.count_projects()) == 2
