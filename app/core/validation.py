"""Request validation rules for project operations.

Every check here runs before the store is touched. A failing check raises
``ProjectValidationError`` with the generic bad-request message; the rule
that failed is only written to the log.
"""

from typing import Sequence

from email_validator import EmailNotValidError, validate_email as _check_email_syntax
from loguru import logger

from app.core.exceptions import ProjectValidationError
from app.db.enums import ProjectStatus


def _reject(reason: str) -> None:
    logger.warning(f"Request rejected: {reason}")
    raise ProjectValidationError()


def _is_blank(value: str | None) -> bool:
    return value is None or value == ""


def validate_project_id(project_id: int | None) -> int:
    """Require a positive project identifier."""
    if project_id is None or project_id < 1:
        _reject(f"invalid project id {project_id!r}")
    return project_id


def validate_project_fields(
    project_name: str | None,
    description: str | None,
    author: str | None,
    project_url: str | None,
) -> None:
    """Require all four descriptive fields to be non-empty."""
    for name, value in (
        ("projectName", project_name),
        ("description", description),
        ("author", author),
        ("projectUrl", project_url),
    ):
        if _is_blank(value):
            _reject(f"empty {name}")


def validate_project_update(
    project_id: int | None,
    project_name: str | None,
    description: str | None,
    author: str | None,
    project_url: str | None,
    status: ProjectStatus | None,
) -> None:
    """Rules for a full update: identifier, all fields and a status."""
    validate_project_id(project_id)
    validate_project_fields(project_name, description, author, project_url)
    if status is None:
        _reject("missing status")


def validate_status(status: ProjectStatus | None) -> ProjectStatus:
    if status is None:
        _reject("missing status")
    return status


def validate_page_request(page: int, size: int) -> None:
    """Require a 0-based page index and a page size of at least one."""
    if page < 0 or size < 1:
        _reject(f"invalid page request page={page} size={size}")


def validate_project_ids(project_ids: Sequence[int] | None) -> Sequence[int]:
    if not project_ids:
        _reject("empty project id list")
    return project_ids


def is_valid_email(email: str | None) -> bool:
    """Check email syntax without any deliverability lookup.

    Special-use domains such as ``.local`` or ``.test`` are accepted; the
    domain only has to contain a dot.
    """
    if _is_blank(email):
        return False
    try:
        result = _check_email_syntax(
            email,
            check_deliverability=False,
            globally_deliverable=False,
        )
    except EmailNotValidError:
        return False
    return "." in result.ascii_domain


def validate_email(email: str | None) -> str:
    if not is_valid_email(email):
        _reject(f"invalid email {email!r}")
    return email
