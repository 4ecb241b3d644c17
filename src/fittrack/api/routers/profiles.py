"""
fittrack.api.routers.profiles

The caller's own composite user view.

Responsibilities:
- Return identity + profile (or null profile) + derived administrator flag for the bearer.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.deps import db_session
from fittrack.auth.deps import get_principal
from fittrack.auth.models import Principal
from fittrack.db.models import Profile
from fittrack.db.repositories.profiles import ProfileRepo

router = APIRouter(prefix="/v1/profiles", tags=["profiles"])


class ProfileOut(BaseModel):
    id: uuid.UUID
    username: str | None
    full_name: str | None
    avatar_url: str | None
    plan: str

    @classmethod
    def from_row(cls, row: Profile) -> ProfileOut:
        return cls(
            id=row.id,
            username=row.username,
            full_name=row.full_name,
            avatar_url=row.avatar_url,
            plan=row.plan,
        )


class MeResponse(BaseModel):
    id: uuid.UUID
    email: str | None
    profile: ProfileOut | None
    is_admin: bool


@router.get("/me", response_model=MeResponse)
async def get_me(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> MeResponse:
    row = await ProfileRepo(session).get(principal.user_id)
    return MeResponse(
        id=principal.user_id,
        email=principal.email,
        profile=ProfileOut.from_row(row) if row is not None else None,
        is_admin=principal.is_admin,
    )
