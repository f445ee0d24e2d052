from enum import StrEnum
from typing import Self

from studygroup.domain.common.exceptions import ValidationError


class SessionType(StrEnum):
    """Kind of meeting a session is scheduled for."""

    TUTORIAL = "tutorial"
    LECTURE = "lecture"
    EXERCISE = "exercise"
    EXAM = "exam"
    CONSULTATION = "consultation"

    @classmethod
    def parse(cls, raw: str) -> Self:
        try:
            return cls(raw.lower() if isinstance(raw, str) else raw)
        except ValueError as err:
            raise ValidationError("Unknown session type", field="session_type", value=raw) from err
