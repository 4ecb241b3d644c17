from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.db.models import ProgressMetric


class ProgressMetricRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        user_id: uuid.UUID,
        metric_type: str,
        metric_value: float,
        log_date: date,
    ) -> ProgressMetric:
        metric = ProgressMetric(
            user_id=user_id,
            metric_type=metric_type,
            metric_value=metric_value,
            log_date=log_date,
        )
        self._session.add(metric)
        await self._session.flush()
        return metric

    async def list_for_user(self, user_id: uuid.UUID) -> list[ProgressMetric]:
        # Oldest first: the dashboard plots these as a time series.
        stmt = (
            select(ProgressMetric)
            .where(ProgressMetric.user_id == user_id)
            .order_by(ProgressMetric.log_date, ProgressMetric.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().all())
