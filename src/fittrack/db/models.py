"""
fittrack.db.models

Persistence schema for the fitness tracker.

Responsibilities:
- Profile: application-owned attributes keyed by the auth identity id (plan drives the admin role)
- Exercise / Routine: shared, read-mostly catalogue
- WorkoutLog: one logged exercise (sets x reps @ weight) per row, owned by a user
- ProgressMetric: body metrics (weight, body fat, ...) over time, owned by a user
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Date, Float, ForeignKey, Index, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fittrack.db.base import Base
from fittrack.session.models import Plan


def _utcnow() -> datetime:
    # Naive UTC timestamps keep SQLite and Postgres behaviour identical.
    return datetime.utcnow()


class Profile(Base):
    __tablename__ = "profiles"

    # Same value as the auth provider's user id; rows are never created by the session core.
    id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), primary_key=True)
    username: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    plan: Mapped[str] = mapped_column(String(32), nullable=False, default=Plan.free.value)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Routine(Base):
    __tablename__ = "routines"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)


class WorkoutLog(Base):
    __tablename__ = "workout_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), nullable=False, index=True)
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )

    log_date: Mapped[date] = mapped_column(Date, nullable=False)
    num_sets: Mapped[int] = mapped_column(nullable=False)
    reps_per_set: Mapped[int] = mapped_column(nullable=False)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    exercise: Mapped[Exercise] = relationship(lazy="joined")

    __table_args__ = (Index("ix_workout_logs_user_date", "user_id", "log_date"),)


class ProgressMetric(Base):
    __tablename__ = "progress_metrics"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), nullable=False, index=True)
    metric_type: Mapped[str] = mapped_column(String(32), nullable=False)
    metric_value: Mapped[float] = mapped_column(Float, nullable=False)
    log_date: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (Index("ix_progress_metrics_user_date", "user_id", "log_date"),)


# --- Module Notes -----------------------------------------------------------
# `user_id` columns are not foreign keys: identities live in the auth provider, and a profile
# row may legitimately be missing for a signed-in user.
