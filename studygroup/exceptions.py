"""Custom exception hierarchy for the study groups application."""


class StudyGroupError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(StudyGroupError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class GroupNotFoundError(NotFoundError):
    """Group not found error."""

    def __init__(self, group_id: object | None = None, *, message: str | None = None) -> None:
        """Initialize with group ID or custom message."""
        self.group_id = group_id
        if message:
            super().__init__(message)
        elif group_id is not None:
            super().__init__(f"Group with id {group_id} not found")
        else:
            super().__init__("Group not found")


class ValidationError(StudyGroupError):
    """Validation error."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code=status_code)


class ConflictError(StudyGroupError):
    """Request conflicts with the current state of a resource."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)


class PersistenceConflictError(ConflictError):
    """A concurrent transaction already wrote a conflicting row."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} {entity_id} was modified concurrently, please retry the request"
        )
