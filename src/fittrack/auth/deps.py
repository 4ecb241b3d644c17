"""
fittrack.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`, joining the caller's profile.
- Gate administrator-only endpoints on the derived role flag.
"""

from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from fittrack.api.deps import db_session
from fittrack.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from fittrack.auth.models import Principal
from fittrack.db.repositories.profiles import ProfileRepo
from fittrack.observability.logging import get_logger
from fittrack.session.models import Profile, is_admin_profile
from fittrack.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(db_session),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        cfg = JwtConfig.from_settings(settings)
        payload = decode_and_validate(cfg=cfg, token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    try:
        user_id = uuid.UUID(str(payload.get("sub", "")))
    except ValueError as e:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject"
        ) from e

    # Missing profile is not an error: the caller is authenticated, just without a role.
    row = await ProfileRepo(session).get(user_id)
    if row is None:
        log.info("principal_without_profile", user_id=str(user_id))
    profile = Profile(id=str(row.id), plan=row.plan) if row is not None else None

    return Principal(
        user_id=user_id,
        email=payload.get("email"),
        plan=profile.plan if profile is not None else None,
        is_admin=is_admin_profile(profile, admin_plan=settings.admin_plan),
    )


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Administrator role required")
    return principal
