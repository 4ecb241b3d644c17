from __future__ import annotations

import pytest

from fittrack.services.formulas import (
    ACTIVITY_MULTIPLIERS,
    CalorieGoals,
    calculate_bmr,
    calculate_calorie_plan,
    calculate_tdee,
    feet_inches_to_cm,
    pounds_to_kg,
    round_half_up,
)


def test_bmr_uses_gender_offset() -> None:
    assert calculate_bmr("male", 80, 180, 30) == 1780
    assert calculate_bmr("female", 80, 180, 30) == 1614


def test_calorie_plan_for_sedentary_male() -> None:
    plan = calculate_calorie_plan(
        gender="male",
        age=30,
        weight_kg=80,
        height_cm=180,
        activity_multiplier=ACTIVITY_MULTIPLIERS["SEDENTARY"],
    )

    assert plan.bmr == 1780
    assert plan.goals == CalorieGoals(
        maintenance=2136,
        mild_loss=1886,
        weight_loss=1636,
        mild_gain=2386,
        weight_gain=2636,
    )


def test_calorie_plan_rounds_fractional_results() -> None:
    # 600 + 1031.25 - 125 - 161 = 1345.25; x1.55 = 2085.1375
    plan = calculate_calorie_plan(
        gender="female", age=25, weight_kg=60, height_cm=165, activity_multiplier=1.55
    )

    assert plan.bmr == 1345
    assert plan.goals.maintenance == 2085


@pytest.mark.parametrize(
    ("age", "weight", "height"),
    [(0, 70, 170), (30, -1, 170), (30, 70, 0)],
)
def test_calorie_plan_rejects_non_positive_inputs(age: float, weight: float, height: float) -> None:
    with pytest.raises(ValueError):
        calculate_calorie_plan(
            gender="male", age=age, weight_kg=weight, height_cm=height, activity_multiplier=1.2
        )


def test_calorie_plan_rejects_unknown_multiplier() -> None:
    with pytest.raises(ValueError, match="activity multiplier"):
        calculate_calorie_plan(
            gender="male", age=30, weight_kg=80, height_cm=180, activity_multiplier=1.3
        )


def test_tdee_rounds_half_up() -> None:
    assert calculate_tdee(1000.25, 1.2) == 1200
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4


def test_imperial_conversions() -> None:
    assert pounds_to_kg(100) == pytest.approx(45.3592)
    assert feet_inches_to_cm(5, 10) == pytest.approx(177.8)
    assert feet_inches_to_cm(6) == pytest.approx(182.88)
