from __future__ import annotations

import uuid
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from fittrack.api.deps import db_session
from fittrack.auth.jwt import JwtConfig, issue_token
from fittrack.db.repositories.profiles import ProfileRepo
from fittrack.session.models import assignable_plans
from fittrack.settings import Settings, get_settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    user_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    email: str | None = Field(default=None, max_length=256)
    # When set, a profile row with this plan is created if the user has none.
    plan: str | None = Field(default=None, min_length=1, max_length=32)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: uuid.UUID


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(db_session),
) -> DevTokenResponse:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    if body.plan is not None:
        if body.plan not in assignable_plans(admin_plan=settings.admin_plan):
            raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Unknown plan")
        profiles = ProfileRepo(session)
        if await profiles.get(body.user_id) is None:
            await profiles.create(user_id=body.user_id, plan=body.plan)
            await session.commit()

    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=str(body.user_id),
        email=body.email,
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token, user_id=body.user_id)
