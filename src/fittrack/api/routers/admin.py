"""
fittrack.api.routers.admin

Administrator endpoints.

Responsibilities:
- List user profiles and change a user's plan.
- Manage the exercise catalogue.

Every route requires the derived administrator flag (profile plan == configured admin plan).
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
)

from fittrack.api.deps import db_session
from fittrack.api.routers.catalog import ExerciseOut
from fittrack.auth.deps import require_admin
from fittrack.auth.models import Principal
from fittrack.db.repositories.exercises import ExerciseRepo
from fittrack.db.repositories.profiles import ProfileRepo
from fittrack.observability.logging import get_logger
from fittrack.session.models import assignable_plans
from fittrack.settings import Settings, get_settings

log = get_logger(__name__)

router = APIRouter(prefix="/v1/admin", tags=["admin"], dependencies=[Depends(require_admin)])


class AdminUserOut(BaseModel):
    id: uuid.UUID
    username: str | None
    full_name: str | None
    plan: str
    joined_at: datetime


class PlanUpdate(BaseModel):
    plan: str = Field(min_length=1, max_length=32)


class ExerciseCreate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    category: str | None = Field(default=None, max_length=64)
    description: str = ""


@router.get("/users", response_model=list[AdminUserOut])
async def list_users(
    limit: int = 200,
    offset: int = 0,
    session: AsyncSession = Depends(db_session),
) -> list[AdminUserOut]:
    rows = await ProfileRepo(session).list_all(limit=min(limit, 500), offset=max(offset, 0))
    return [
        AdminUserOut(
            id=p.id,
            username=p.username,
            full_name=p.full_name,
            plan=p.plan,
            joined_at=p.created_at,
        )
        for p in rows
    ]


@router.patch("/users/{user_id}", response_model=AdminUserOut)
async def update_user_plan(
    user_id: uuid.UUID,
    body: PlanUpdate,
    principal: Principal = Depends(require_admin),
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(db_session),
) -> AdminUserOut:
    allowed = assignable_plans(admin_plan=settings.admin_plan)
    if body.plan not in allowed:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail=f"Unknown plan; expected one of {sorted(allowed)}",
        )

    profile = await ProfileRepo(session).set_plan(user_id, body.plan)
    if profile is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="User not found")
    await session.commit()
    log.info(
        "user_plan_changed",
        actor=str(principal.user_id),
        user_id=str(user_id),
        plan=body.plan,
    )
    return AdminUserOut(
        id=profile.id,
        username=profile.username,
        full_name=profile.full_name,
        plan=profile.plan,
        joined_at=profile.created_at,
    )


@router.post("/exercises", response_model=ExerciseOut, status_code=HTTP_201_CREATED)
async def create_exercise(
    body: ExerciseCreate,
    session: AsyncSession = Depends(db_session),
) -> ExerciseOut:
    exercise = await ExerciseRepo(session).create(
        name=body.name, category=body.category, description=body.description
    )
    await session.commit()
    return ExerciseOut.from_row(exercise)


@router.delete("/exercises/{exercise_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> None:
    if not await ExerciseRepo(session).delete(exercise_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Exercise not found")
    await session.commit()
