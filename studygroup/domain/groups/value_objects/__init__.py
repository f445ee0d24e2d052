from .attendance import Attendance
from .attendance_pass import (
    DEFAULT_PASS_CODE_LENGTH,
    DEFAULT_PASS_VALIDITY,
    PASS_CODE_ALPHABET,
    Pass,
    generate_pass_code,
)
from .group_code import GroupCode
from .session_type import SessionType

__all__ = [
    "DEFAULT_PASS_CODE_LENGTH",
    "DEFAULT_PASS_VALIDITY",
    "PASS_CODE_ALPHABET",
    "Attendance",
    "GroupCode",
    "Pass",
    "SessionType",
    "generate_pass_code",
]
