"""
fittrack.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for DB sessions and the coach service.
- Encapsulate app.state access patterns (engine/sessionmaker/coach).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fittrack.services.coach import CoachService


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created on app startup in `fittrack.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session; routers commit explicitly after writes.
    async with session_factory() as session:
        yield session


def coach_service(request: Request) -> CoachService:
    return request.app.state.coach  # type: ignore[attr-defined]
