"""
fittrack.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Seed the exercise catalogue when it is empty so the workout screens have something to log.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from fittrack.db import models
from fittrack.db.base import Base

DEFAULT_EXERCISES: tuple[tuple[str, str, str], ...] = (
    ("Bench Press", "Chest", "Compound press for chest, front delts and triceps."),
    ("Squat", "Legs", "Compound movement for quads, hamstrings and glutes."),
    ("Deadlift", "Back/Legs", "Full-body hinge working back, legs and core."),
    ("Overhead Press", "Shoulders", "Standing press for delts and triceps."),
    ("Pull Up", "Back", "Bodyweight pull for lats and biceps."),
    ("Dumbbell Bicep Curl", "Arms", "Isolation curl for the biceps."),
    ("Plank", "Core", "Isometric hold for core stability."),
    ("Treadmill Run", "Cardio", "Steady-state running."),
    ("Yoga Flow", "Flexibility", "Mobility and stretching sequence."),
)


async def init_db(engine: AsyncEngine, *, seed: bool = True) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist, then seed the catalogue.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not seed:
        return
    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_factory() as session:
        count = (await session.execute(select(func.count(models.Exercise.id)))).scalar_one()
        if count:
            return
        session.add_all(
            models.Exercise(name=name, category=category, description=description)
            for name, category, description in DEFAULT_EXERCISES
        )
        await session.commit()


# --- Module Notes -----------------------------------------------------------
# Production schemas are owned by the hosted Postgres project (migrations + RLS policies);
# this helper only exists for local runs and tests.
