from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.db.models import Exercise, Routine


class ExerciseRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Exercise]:
        stmt = select(Exercise).order_by(Exercise.name)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, exercise_id: uuid.UUID) -> Exercise | None:
        return await self._session.get(Exercise, exercise_id)

    async def create(self, *, name: str, category: str | None, description: str) -> Exercise:
        exercise = Exercise(name=name, category=category, description=description)
        self._session.add(exercise)
        await self._session.flush()
        return exercise

    async def delete(self, exercise_id: uuid.UUID) -> bool:
        exercise = await self._session.get(Exercise, exercise_id)
        if exercise is None:
            return False
        await self._session.delete(exercise)
        await self._session.flush()
        return True


class RoutineRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Routine]:
        stmt = select(Routine).order_by(Routine.name)
        return list((await self._session.execute(stmt)).scalars().all())
