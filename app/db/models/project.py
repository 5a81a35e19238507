"""Project model and its membership tables."""

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.enums import ProjectStatus


class ProjectParticipant(Base):
    """Email of a user taking part in a project."""

    __tablename__ = "project_participating_users"

    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.project_id", ondelete="CASCADE"),
        primary_key=True,
    )
    email: Mapped[str] = mapped_column(String(320), primary_key=True)


class ProjectWaitingUser(Base):
    """Email of a user queued for a project."""

    __tablename__ = "project_waiting_users"

    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.project_id", ondelete="CASCADE"),
        primary_key=True,
    )
    email: Mapped[str] = mapped_column(String(320), primary_key=True)


class Project(Base):
    """Course project with descriptive fields, a status and two user sets."""

    __tablename__ = "projects"

    project_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    project_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    project_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, name="project_status", native_enum=False, length=20),
        nullable=False,
        default=ProjectStatus.PREPARATION,
    )

    participant_rows: Mapped[set[ProjectParticipant]] = relationship(
        collection_class=set,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    waiting_rows: Mapped[set[ProjectWaitingUser]] = relationship(
        collection_class=set,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    # Both proxies behave as mutable sets of email strings
    participating_users: AssociationProxy[set[str]] = association_proxy(
        "participant_rows",
        "email",
        creator=lambda email: ProjectParticipant(email=email),
    )
    waiting_users: AssociationProxy[set[str]] = association_proxy(
        "waiting_rows",
        "email",
        creator=lambda email: ProjectWaitingUser(email=email),
    )

    def __repr__(self) -> str:
        return (
            f"Project(project_id={self.project_id!r}, "
            f"project_name={self.project_name!r}, status={self.status!r})"
        )
