"""
Base class for Value Objects.

Value Objects are immutable objects that are defined by their attributes
rather than by identity. Two value objects are equal if all their
compared attributes are equal.

Example:
    @dataclass(frozen=True)
    class GroupCode(ValueObject):
        value: str

        def __post_init__(self) -> None:
            require(check_not_blank(self.value, "code"))
"""

from dataclasses import asdict, fields, is_dataclass


class ValueObject:
    """
    Base class for Value Objects in the domain model.

    Value Objects are:
    - Immutable (use frozen=True in dataclass)
    - Compared by value (dataclass-generated __eq__ and __hash__)
    - Self-validating (validation in __post_init__)

    Subclasses should be decorated with @dataclass(frozen=True)
    and implement validation in __post_init__.
    """

    def to_primitive(self) -> object:
        """
        Convert to primitive Python type for serialization.

        Override in subclasses if needed. Default returns
        the only field value for single-value VOs.
        """
        if not is_dataclass(self):
            return self
        values = [getattr(self, f.name) for f in fields(self)]
        if len(values) == 1:
            return values[0]
        return asdict(self)
