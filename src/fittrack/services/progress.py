"""
fittrack.services.progress

Progress statistics behind the progress dashboard.

Responsibilities:
- Build the weight series and average weight from body metrics.
- Count recent workouts and workouts per exercise category.
- Score 30-day consistency per training type (strength/cardio/flexibility/overall).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from fittrack.services.formulas import round_half_up

WEIGHT_METRIC = "weight"
UNKNOWN_CATEGORY = "Unknown"

STRENGTH_CATEGORIES = ("Back", "Back/Legs", "Chest", "Arms", "Shoulders", "Legs", "Core")
CARDIO_CATEGORIES = ("Cardio", "Running", "Cycling", "Swimming")
FLEXIBILITY_CATEGORIES = ("Flexibility", "Yoga", "Stretching")

# Sessions in 30 days that count as 100% for each score.
STRENGTH_TARGET = 10
CARDIO_TARGET = 8
FLEXIBILITY_TARGET = 5
OVERALL_TARGET = 20


@dataclass(frozen=True, slots=True)
class MetricPoint:
    log_date: date
    metric_type: str
    value: float


@dataclass(frozen=True, slots=True)
class WorkoutEntry:
    log_date: date
    category: str | None


@dataclass(frozen=True, slots=True)
class ProgressScores:
    strength: int = 0
    cardio: int = 0
    flexibility: int = 0
    overall: int = 0


@dataclass(frozen=True, slots=True)
class ProgressSummary:
    weight_series: list[MetricPoint] = field(default_factory=list)
    average_weight: float = 0.0
    workouts_this_week: int = 0
    workout_types: dict[str, int] = field(default_factory=dict)
    scores: ProgressScores = field(default_factory=ProgressScores)


def summarize_progress(
    metrics: Iterable[MetricPoint],
    workouts: Iterable[WorkoutEntry],
    *,
    today: date | None = None,
) -> ProgressSummary:
    today = today or date.today()
    workouts = list(workouts)

    weight_series = sorted(
        (m for m in metrics if m.metric_type == WEIGHT_METRIC), key=lambda m: m.log_date
    )
    average_weight = 0.0
    if weight_series:
        mean = sum(m.value for m in weight_series) / len(weight_series)
        average_weight = round_half_up(mean * 10) / 10

    week_start = today - timedelta(days=7)
    workouts_this_week = sum(1 for w in workouts if week_start <= w.log_date <= today)

    return ProgressSummary(
        weight_series=weight_series,
        average_weight=average_weight,
        workouts_this_week=workouts_this_week,
        workout_types=dict(Counter(w.category or UNKNOWN_CATEGORY for w in workouts)),
        scores=score_progress(workouts, today=today),
    )


def score_progress(workouts: Iterable[WorkoutEntry], *, today: date) -> ProgressScores:
    since = today - timedelta(days=30)
    recent = [w for w in workouts if w.log_date >= since]

    def count(categories: tuple[str, ...]) -> int:
        return sum(1 for w in recent if _matches(w.category, categories))

    return ProgressScores(
        strength=_percent(count(STRENGTH_CATEGORIES), STRENGTH_TARGET),
        cardio=_percent(count(CARDIO_CATEGORIES), CARDIO_TARGET),
        flexibility=_percent(count(FLEXIBILITY_CATEGORIES), FLEXIBILITY_TARGET),
        overall=_percent(len(recent), OVERALL_TARGET),
    )


def _matches(category: str | None, candidates: tuple[str, ...]) -> bool:
    if not category:
        return False
    lowered = category.lower()
    return any(c.lower() in lowered for c in candidates)


def _percent(count: int, target: int) -> int:
    return round_half_up(min(count / target * 100, 100))
