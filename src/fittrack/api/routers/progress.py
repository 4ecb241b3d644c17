"""
fittrack.api.routers.progress

Body metrics and progress statistics.

Responsibilities:
- Record and list the caller's body metrics.
- Summarize metrics + workout logs into dashboard statistics (no chart rendering).
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from fittrack.api.deps import db_session
from fittrack.auth.deps import get_principal
from fittrack.auth.models import Principal
from fittrack.db.models import ProgressMetric
from fittrack.db.repositories.progress import ProgressMetricRepo
from fittrack.db.repositories.workouts import WorkoutRepo
from fittrack.services.progress import MetricPoint, WorkoutEntry, summarize_progress

router = APIRouter(prefix="/v1/progress", tags=["progress"])

MetricType = Literal["weight", "body_fat", "waist", "chest", "arms"]


class MetricRequest(BaseModel):
    metric_type: MetricType = "weight"
    metric_value: float = Field(gt=0)
    log_date: date = Field(default_factory=date.today)


class MetricOut(BaseModel):
    id: uuid.UUID
    metric_type: str
    metric_value: float
    log_date: date

    @classmethod
    def from_row(cls, row: ProgressMetric) -> MetricOut:
        return cls(
            id=row.id,
            metric_type=row.metric_type,
            metric_value=row.metric_value,
            log_date=row.log_date,
        )


class SeriesPoint(BaseModel):
    date: date
    value: float


class ProgressSummaryOut(BaseModel):
    weight_series: list[SeriesPoint]
    average_weight: float
    workouts_this_week: int
    workout_types: dict[str, int]
    strength: int
    cardio: int
    flexibility: int
    overall: int


@router.get("/metrics", response_model=list[MetricOut])
async def list_metrics(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[MetricOut]:
    rows = await ProgressMetricRepo(session).list_for_user(principal.user_id)
    return [MetricOut.from_row(m) for m in rows]


@router.post("/metrics", response_model=MetricOut, status_code=HTTP_201_CREATED)
async def add_metric(
    body: MetricRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> MetricOut:
    row = await ProgressMetricRepo(session).add(
        user_id=principal.user_id,
        metric_type=body.metric_type,
        metric_value=body.metric_value,
        log_date=body.log_date,
    )
    await session.commit()
    return MetricOut.from_row(row)


@router.get("/summary", response_model=ProgressSummaryOut)
async def progress_summary(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ProgressSummaryOut:
    metrics = await ProgressMetricRepo(session).list_for_user(principal.user_id)
    workouts = await WorkoutRepo(session).list_for_user(principal.user_id)

    summary = summarize_progress(
        (
            MetricPoint(log_date=m.log_date, metric_type=m.metric_type, value=m.metric_value)
            for m in metrics
        ),
        (
            WorkoutEntry(
                log_date=w.log_date,
                category=w.exercise.category if w.exercise is not None else None,
            )
            for w in workouts
        ),
    )
    return ProgressSummaryOut(
        weight_series=[SeriesPoint(date=p.log_date, value=p.value) for p in summary.weight_series],
        average_weight=summary.average_weight,
        workouts_this_week=summary.workouts_this_week,
        workout_types=summary.workout_types,
        strength=summary.scores.strength,
        cardio=summary.scores.cardio,
        flexibility=summary.scores.flexibility,
        overall=summary.scores.overall,
    )
