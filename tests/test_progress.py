from __future__ import annotations

from datetime import date, timedelta

from fittrack.services.progress import (
    MetricPoint,
    ProgressScores,
    WorkoutEntry,
    score_progress,
    summarize_progress,
)

TODAY = date(2024, 5, 31)


def _days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def test_empty_history_gives_zeroed_summary() -> None:
    summary = summarize_progress([], [], today=TODAY)

    assert summary.weight_series == []
    assert summary.average_weight == 0
    assert summary.workouts_this_week == 0
    assert summary.workout_types == {}
    assert summary.scores == ProgressScores()


def test_weight_series_is_sorted_and_averaged() -> None:
    metrics = [
        MetricPoint(_days_ago(1), "weight", 80.0),
        MetricPoint(_days_ago(10), "weight", 81.5),
        MetricPoint(_days_ago(5), "body_fat", 18.0),
        MetricPoint(_days_ago(3), "weight", 80.4),
    ]

    summary = summarize_progress(metrics, [], today=TODAY)

    assert [m.value for m in summary.weight_series] == [81.5, 80.4, 80.0]
    # (81.5 + 80.4 + 80.0) / 3 = 80.633...
    assert summary.average_weight == 80.6


def test_workout_counts_per_week_and_category() -> None:
    workouts = [
        WorkoutEntry(_days_ago(0), "Chest"),
        WorkoutEntry(_days_ago(2), "Cardio"),
        WorkoutEntry(_days_ago(7), "Chest"),
        WorkoutEntry(_days_ago(8), None),
    ]

    summary = summarize_progress([], workouts, today=TODAY)

    assert summary.workouts_this_week == 3
    assert summary.workout_types == {"Chest": 2, "Cardio": 1, "Unknown": 1}


def test_scores_match_categories_and_cap_at_one_hundred() -> None:
    workouts = [WorkoutEntry(_days_ago(i), "Back/Legs") for i in range(12)]
    workouts += [WorkoutEntry(_days_ago(i), "Indoor Cycling") for i in range(2)]
    workouts += [WorkoutEntry(_days_ago(3), "yoga flow")]
    # Outside the 30-day window.
    workouts += [WorkoutEntry(_days_ago(45), "Cardio")]

    scores = score_progress(workouts, today=TODAY)

    assert scores.strength == 100
    assert scores.cardio == 25
    assert scores.flexibility == 20
    assert scores.overall == 75
