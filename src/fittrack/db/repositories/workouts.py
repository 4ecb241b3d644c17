"""
fittrack.db.repositories.workouts

Repository for `WorkoutLog` entities.

Responsibilities:
- Append workout logs for a user.
- List a user's logs newest-first with the exercise eagerly loaded (name/category).
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.db.models import WorkoutLog


class WorkoutRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: uuid.UUID,
        exercise_id: uuid.UUID,
        log_date: date,
        num_sets: int,
        reps_per_set: int,
        weight_kg: float | None,
    ) -> WorkoutLog:
        log = WorkoutLog(
            user_id=user_id,
            exercise_id=exercise_id,
            log_date=log_date,
            num_sets=num_sets,
            reps_per_set=reps_per_set,
            weight_kg=weight_kg,
        )
        self._session.add(log)
        await self._session.flush()
        return log

    async def list_for_user(self, user_id: uuid.UUID, *, limit: int = 500) -> list[WorkoutLog]:
        stmt = (
            select(WorkoutLog)
            .where(WorkoutLog.user_id == user_id)
            .order_by(desc(WorkoutLog.log_date), desc(WorkoutLog.created_at))
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())
