"""
Validation predicates shared by the domain model.

Each check is a pure function that returns the ValidationError describing
the failure, or None when the input is acceptable. Callers decide whether
to raise (usually through ``require``) so checks can be combined before
any state is touched.
"""

from datetime import datetime

from .exceptions import ValidationError


def check_not_blank(value: str | None, field: str) -> ValidationError | None:
    """Fail when a text value is missing or whitespace only."""
    if value is None or not value.strip():
        return ValidationError(f"{field.capitalize()} cannot be blank", field=field, value=value)
    return None


def check_time_window(begins: datetime, ends: datetime) -> ValidationError | None:
    """Fail unless ``ends`` is strictly after ``begins``."""
    if (begins.tzinfo is None) != (ends.tzinfo is None):
        # Not comparable; left to check_timezone_aware
        return None
    if not ends > begins:
        return ValidationError(
            "Session 'ends' datetime must be after 'begins' datetime",
            field="ends",
            value=ends.isoformat(),
        )
    return None


def check_timezone_aware(value: datetime, field: str) -> ValidationError | None:
    """Fail for naive datetimes, which cannot be compared with the clock."""
    if value.tzinfo is None or value.utcoffset() is None:
        return ValidationError(
            f"{field.capitalize()} must be timezone-aware", field=field, value=value.isoformat()
        )
    return None


def require(*failures: ValidationError | None) -> None:
    """Raise the first failure, if any."""
    for failure in failures:
        if failure is not None:
            raise failure
