"""Project-specific exceptions."""

GENERIC_BAD_REQUEST = "Bad request"


class ProjectException(Exception):
    """Base exception for project-related errors."""

    def __init__(self, message: str = "A project error occurred"):
        self.message = message
        super().__init__(self.message)


class ProjectNotFoundException(ProjectException):
    """Raised when a project is not found."""

    def __init__(self, project_id: int | str | None = None):
        message = f"Project not found: {project_id}" if project_id is not None else "Project not found"
        super().__init__(message)


class MemberNotFoundException(ProjectException):
    """Raised when an email is not in the membership set it is removed from."""

    def __init__(self, email: str, project_id: int, membership: str):
        self.email = email
        self.project_id = project_id
        self.membership = membership
        super().__init__(f"User {email} is not in {membership} users of project {project_id}")


class ProjectValidationError(ProjectException):
    """Raised when request input is rejected before reaching the store.

    The message is always the generic one; the failing rule is only logged.
    """

    def __init__(self, message: str = GENERIC_BAD_REQUEST):
        super().__init__(message)


class MemberConflictError(ProjectException):
    """Raised when a participating user is added to the waiting users."""

    def __init__(self, email: str, project_id: int):
        self.email = email
        self.project_id = project_id
        super().__init__(f"User {email} already participates in project {project_id}")


class ProjectPersistenceError(ProjectException):
    """Raised when the store returns no result for a write."""

    def __init__(self, message: str = "Failed to save project"):
        super().__init__(message)


class ProjectCreationError(ProjectPersistenceError):
    """Raised when project creation fails."""

    def __init__(self, message: str = "Failed to create project"):
        super().__init__(message)
