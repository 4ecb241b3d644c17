"""
fittrack.api.routers.workouts

Workout logging endpoints.

Responsibilities:
- Log one exercise (sets x reps, optional weight) for the caller.
- List the caller's workout history newest-first.
"""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from fittrack.api.deps import db_session
from fittrack.auth.deps import get_principal
from fittrack.auth.models import Principal
from fittrack.db.models import WorkoutLog
from fittrack.db.repositories.exercises import ExerciseRepo
from fittrack.db.repositories.workouts import WorkoutRepo
from fittrack.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/v1/workouts", tags=["workouts"])

UNKNOWN_EXERCISE = "Unknown Exercise"


class WorkoutLogRequest(BaseModel):
    exercise_id: uuid.UUID
    log_date: date = Field(default_factory=date.today)
    num_sets: int = Field(ge=1, le=100)
    reps_per_set: int = Field(ge=1, le=1000)
    weight_kg: float | None = Field(default=None, ge=0)


class WorkoutLogOut(BaseModel):
    id: uuid.UUID
    log_date: date
    exercise_name: str
    category: str | None
    num_sets: int
    reps_per_set: int
    weight_kg: float

    @classmethod
    def from_row(
        cls, row: WorkoutLog, *, exercise_name: str, category: str | None
    ) -> WorkoutLogOut:
        return cls(
            id=row.id,
            log_date=row.log_date,
            exercise_name=exercise_name,
            category=category,
            num_sets=row.num_sets,
            reps_per_set=row.reps_per_set,
            weight_kg=row.weight_kg or 0.0,
        )


@router.get("", response_model=list[WorkoutLogOut])
async def list_workouts(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[WorkoutLogOut]:
    logs = await WorkoutRepo(session).list_for_user(principal.user_id)
    return [
        WorkoutLogOut.from_row(
            w,
            exercise_name=w.exercise.name if w.exercise is not None else UNKNOWN_EXERCISE,
            category=w.exercise.category if w.exercise is not None else None,
        )
        for w in logs
    ]


@router.post("", response_model=WorkoutLogOut, status_code=HTTP_201_CREATED)
async def log_workout(
    body: WorkoutLogRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> WorkoutLogOut:
    exercise = await ExerciseRepo(session).get(body.exercise_id)
    if exercise is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Exercise not found")

    row = await WorkoutRepo(session).create(
        user_id=principal.user_id,
        exercise_id=exercise.id,
        log_date=body.log_date,
        num_sets=body.num_sets,
        reps_per_set=body.reps_per_set,
        weight_kg=body.weight_kg,
    )
    await session.commit()
    log.info("workout_logged", user_id=str(principal.user_id), exercise=exercise.name)
    return WorkoutLogOut.from_row(row, exercise_name=exercise.name, category=exercise.category)
