"""
fittrack.services.formulas

Calorie calculator formulas.

Responsibilities:
- Basal metabolic rate (Mifflin-St Jeor) and total daily energy expenditure.
- Calorie goals around maintenance and imperial-to-metric conversions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

Gender = Literal["male", "female"]

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "SEDENTARY": 1.2,  # little or no exercise
    "LIGHTLY_ACTIVE": 1.375,  # light exercise 1-3 days/week
    "MODERATELY_ACTIVE": 1.55,  # moderate exercise 3-5 days/week
    "VERY_ACTIVE": 1.725,  # hard exercise 6-7 days/week
    "EXTRA_ACTIVE": 1.9,  # very hard exercise and a physical job
}

# Roughly 0.25 kg/week and 0.5 kg/week of change.
MILD_ADJUSTMENT_KCAL = 250
ADJUSTMENT_KCAL = 500

KG_PER_POUND = 0.453592
CM_PER_INCH = 2.54


@dataclass(frozen=True, slots=True)
class CalorieGoals:
    maintenance: int
    mild_loss: int
    weight_loss: int
    mild_gain: int
    weight_gain: int


@dataclass(frozen=True, slots=True)
class CaloriePlan:
    bmr: int
    goals: CalorieGoals


def calculate_bmr(gender: Gender, weight_kg: float, height_cm: float, age: float) -> float:
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender == "male" else base - 161


def calculate_tdee(bmr: float, activity_multiplier: float) -> int:
    return round_half_up(bmr * activity_multiplier)


def calculate_calorie_goals(tdee: int) -> CalorieGoals:
    return CalorieGoals(
        maintenance=tdee,
        mild_loss=tdee - MILD_ADJUSTMENT_KCAL,
        weight_loss=tdee - ADJUSTMENT_KCAL,
        mild_gain=tdee + MILD_ADJUSTMENT_KCAL,
        weight_gain=tdee + ADJUSTMENT_KCAL,
    )


def pounds_to_kg(pounds: float) -> float:
    return pounds * KG_PER_POUND


def feet_inches_to_cm(feet: float, inches: float = 0) -> float:
    return (feet * 12 + inches) * CM_PER_INCH


def calculate_calorie_plan(
    *,
    gender: Gender,
    age: float,
    weight_kg: float,
    height_cm: float,
    activity_multiplier: float,
) -> CaloriePlan:
    """
    Validate inputs and compute BMR plus goals.

    Raises ValueError for non-positive age/weight/height or an unknown activity multiplier.
    """

    if age <= 0 or weight_kg <= 0 or height_cm <= 0:
        raise ValueError("age, weight and height must be positive numbers")
    if activity_multiplier not in ACTIVITY_MULTIPLIERS.values():
        raise ValueError(f"unsupported activity multiplier: {activity_multiplier}")

    bmr = calculate_bmr(gender, weight_kg, height_cm, age)
    tdee = calculate_tdee(bmr, activity_multiplier)
    return CaloriePlan(bmr=round_half_up(bmr), goals=calculate_calorie_goals(tdee))


def round_half_up(value: float) -> int:
    # Calculator results round .5 upwards (round() would round half to even).
    return int(math.floor(value + 0.5))
