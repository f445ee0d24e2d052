"""Domain events recorded by the Group aggregate."""

from dataclasses import dataclass

from studygroup.domain.common.domain_event import DomainEvent
from studygroup.domain.common.value_objects import GroupId, SessionId, UserId
from studygroup.domain.groups.value_objects.session_type import SessionType


@dataclass(frozen=True, kw_only=True)
class GroupCreated(DomainEvent):
    group_id: GroupId
    name: str
    code: str


@dataclass(frozen=True, kw_only=True)
class GroupRenamed(DomainEvent):
    group_id: GroupId
    name: str


@dataclass(frozen=True, kw_only=True)
class StudentRegistered(DomainEvent):
    group_id: GroupId
    student_id: UserId


@dataclass(frozen=True, kw_only=True)
class StudentDeregistered(DomainEvent):
    group_id: GroupId
    student_id: UserId


@dataclass(frozen=True, kw_only=True)
class SessionScheduled(DomainEvent):
    group_id: GroupId
    session_id: SessionId
    session_type: SessionType


@dataclass(frozen=True, kw_only=True)
class SessionRemoved(DomainEvent):
    group_id: GroupId
    session_id: SessionId


@dataclass(frozen=True, kw_only=True)
class PassIssued(DomainEvent):
    """Carries no redemption code."""

    group_id: GroupId
    session_id: SessionId
    requester_id: UserId
    requestee_id: UserId


@dataclass(frozen=True, kw_only=True)
class AttendanceRecorded(DomainEvent):
    group_id: GroupId
    session_id: SessionId
    student_id: UserId
