"""
GroupCode value object.

A short code students type in to find a group without knowing its id.
"""

import base64
import hashlib
import re
from dataclasses import dataclass
from typing import Self

from studygroup.domain.common.exceptions import ValidationError
from studygroup.domain.common.validation import check_not_blank, require
from studygroup.domain.common.value_object import ValueObject

GROUP_CODE_LENGTH = 6

_GROUP_CODE_PATTERN = re.compile(rf"^[A-Z2-7]{{{GROUP_CODE_LENGTH}}}$")


@dataclass(frozen=True)
class GroupCode(ValueObject):
    """
    Six character code derived from a group name.

    The derivation is deterministic: the same name always yields the same
    code, so two groups with equal names collide. Uniqueness is left to the
    storage layer.
    """

    value: str

    def __post_init__(self) -> None:
        if not _GROUP_CODE_PATTERN.match(self.value):
            raise ValidationError(
                f"Group code must be {GROUP_CODE_LENGTH} characters of A-Z and 2-7",
                field="code",
                value=self.value,
            )

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> Self:
        """Accept user input in any case and with surrounding whitespace."""
        return cls(raw.strip().upper())

    @classmethod
    def from_group_name(cls, name: str) -> Self:
        """
        Derive the code for a group name.

        Whitespace runs are collapsed and case is folded before hashing, so
        "Algorithms  A" and "algorithms a" share a code.

        Args:
            name: Display name of the group

        Returns:
            GroupCode for the name

        Raises:
            ValidationError: If the name is blank
        """
        require(check_not_blank(name, "name"))

        normalized = " ".join(name.split()).casefold()
        digest = hashlib.sha256(normalized.encode("utf-8")).digest()
        encoded = base64.b32encode(digest).decode("ascii")
        return cls(encoded[:GROUP_CODE_LENGTH])
