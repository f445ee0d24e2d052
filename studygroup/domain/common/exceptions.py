"""
Domain layer exceptions.

These exceptions represent domain-level errors that occur when
input is malformed, a referenced entity is missing, or a requested
transition would break an aggregate invariant. They are raised
synchronously and never leave an aggregate partially mutated.
The infrastructure layer translates them into HTTP responses.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when domain validation fails.

    Example: blank group name, session that ends before it begins.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    """
    Raised when an entity cannot be found.

    Example: rescheduling a session the group does not own.
    """

    def __init__(self, entity_type: str, entity_id: object) -> None:
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, {"entity_type": entity_type, "entity_id": str(entity_id)})
        self.entity_type = entity_type
        self.entity_id = entity_id


class StateConflictError(DomainError):
    """
    Raised when a requested transition violates a domain invariant.

    The call is terminal: nothing was mutated and the caller has to
    issue a corrected request.

    Example: redeeming a pass for a student who already attended.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"State conflict: {rule}"
        super().__init__(msg, {"rule": rule})
        self.rule = rule
