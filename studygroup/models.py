"""Database models."""

import uuid
from datetime import datetime, timedelta

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    Interval,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studygroup.database import Base


class Group(Base):
    """Study group with its roster and scheduled sessions."""

    __tablename__ = "groups"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    students: Mapped[list["GroupStudent"]] = relationship(
        back_populates="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sessions: Mapped[list["Session"]] = relationship(
        back_populates="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Session.position",
    )

    def __repr__(self) -> str:
        """String representation of Group."""
        return f"<Group(id={self.id}, code='{self.code}', name='{self.name}')>"


class GroupStudent(Base):
    """Roster entry: a student registered in a group."""

    __tablename__ = "group_students"

    group_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True
    )
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, index=True)
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    group: Mapped[Group] = relationship(back_populates="students")


class Session(Base):
    """Scheduled session owned by a group."""

    __tablename__ = "sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    group_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    session_type: Mapped[str] = mapped_column(String(32), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    begins: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ends: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    group: Mapped[Group] = relationship(back_populates="sessions")
    passes: Mapped[list["SessionPass"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SessionPass.issued_at",
    )
    attendances: Mapped[list["Attendance"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Attendance.recorded_at",
    )

    def __repr__(self) -> str:
        """String representation of Session."""
        return f"<Session(id={self.id}, type='{self.session_type}', begins={self.begins})>"


class SessionPass(Base):
    """Outstanding pass issued for a session."""

    __tablename__ = "session_passes"
    __table_args__ = (UniqueConstraint("session_id", "code", name="uq_session_passes_code"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    code: Mapped[str] = mapped_column(String(32), nullable=False)
    requester_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    requestee_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    validity: Mapped[timedelta] = mapped_column(Interval, nullable=False)

    session: Mapped[Session] = relationship(back_populates="passes")


class Attendance(Base):
    """Recorded attendance of a student at a session."""

    __tablename__ = "session_attendances"
    __table_args__ = (
        UniqueConstraint("session_id", "student_id", name="uq_session_attendances_student"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    session: Mapped[Session] = relationship(back_populates="attendances")
