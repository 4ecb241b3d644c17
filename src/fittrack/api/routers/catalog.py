from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.deps import db_session
from fittrack.db.models import Exercise
from fittrack.db.repositories.exercises import ExerciseRepo, RoutineRepo

# The catalogue is public data; no bearer required.
router = APIRouter(prefix="/v1", tags=["catalog"])


class ExerciseOut(BaseModel):
    id: uuid.UUID
    name: str
    category: str | None
    description: str

    @classmethod
    def from_row(cls, row: Exercise) -> ExerciseOut:
        return cls(id=row.id, name=row.name, category=row.category, description=row.description)


class RoutineOut(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    category: str | None


@router.get("/exercises", response_model=list[ExerciseOut])
async def list_exercises(session: AsyncSession = Depends(db_session)) -> list[ExerciseOut]:
    return [ExerciseOut.from_row(e) for e in await ExerciseRepo(session).list_all()]


@router.get("/routines", response_model=list[RoutineOut])
async def list_routines(session: AsyncSession = Depends(db_session)) -> list[RoutineOut]:
    return [
        RoutineOut(id=r.id, name=r.name, description=r.description, category=r.category)
        for r in await RoutineRepo(session).list_all()
    ]
