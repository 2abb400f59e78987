from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

_last_stamp = datetime.min.replace(tzinfo=UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


def _creation_stamp() -> datetime:
    """Microsecond UTC timestamp, strictly increasing within this process."""
    global _last_stamp
    now = datetime.now(UTC)
    if now <= _last_stamp:
        now = _last_stamp + timedelta(microseconds=1)
    _last_stamp = now
    return now


class UserModel(Base):
    """SQLAlchemy model for users table.

    Email is the login key but is neither unique nor required.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    username: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_creation_stamp,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


class AssessmentModel(Base):
    """SQLAlchemy model for assessments table.

    ``title``, ``description`` and ``due_date`` keep whatever JSON value the
    client sent.
    """

    __tablename__ = "assessments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[Any] = mapped_column(JSON, nullable=True)
    description: Mapped[Any] = mapped_column(JSON, nullable=True)
    due_date: Mapped[Any] = mapped_column(JSON, nullable=True)
    owner_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_creation_stamp,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<AssessmentModel(id={self.id}, title={self.title!r})>"
