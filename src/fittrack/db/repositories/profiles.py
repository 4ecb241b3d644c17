"""
fittrack.db.repositories.profiles

Repository for `Profile` entities.

Responsibilities:
- Point lookups by identity id (the profile store used to derive the admin role).
- Admin listing and plan changes.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.db.models import Profile


class ProfileRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: uuid.UUID) -> Profile | None:
        return await self._session.get(Profile, user_id)

    async def list_all(self, *, limit: int = 200, offset: int = 0) -> list[Profile]:
        stmt = select(Profile).order_by(Profile.created_at).limit(limit).offset(offset)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(
        self,
        *,
        user_id: uuid.UUID,
        plan: str,
        username: str | None = None,
        full_name: str | None = None,
    ) -> Profile:
        profile = Profile(id=user_id, plan=plan, username=username, full_name=full_name)
        self._session.add(profile)
        await self._session.flush()
        return profile

    async def set_plan(self, user_id: uuid.UUID, plan: str) -> Profile | None:
        profile = await self._session.get(Profile, user_id, with_for_update=True)
        if profile is None:
            return None
        profile.plan = plan
        await self._session.flush()
        return profile
