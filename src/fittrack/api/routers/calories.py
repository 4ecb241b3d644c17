from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_400_BAD_REQUEST

from fittrack.services.formulas import (
    ACTIVITY_MULTIPLIERS,
    Gender,
    calculate_calorie_plan,
    feet_inches_to_cm,
    pounds_to_kg,
)

router = APIRouter(prefix="/v1/calories", tags=["calories"])


class CalorieRequest(BaseModel):
    gender: Gender = "male"
    age: float
    weight: float
    height: float
    activity_multiplier: float = ACTIVITY_MULTIPLIERS["SEDENTARY"]
    # Imperial input: weight in pounds, height in inches (converted before calculating).
    imperial: bool = False
    height_feet: float | None = Field(default=None, ge=0)


class CalorieResponse(BaseModel):
    bmr: int
    maintenance: int
    mild_loss: int
    weight_loss: int
    mild_gain: int
    weight_gain: int


@router.get("/activity-levels")
async def activity_levels() -> dict[str, float]:
    return dict(ACTIVITY_MULTIPLIERS)


@router.post("", response_model=CalorieResponse)
async def calculate(body: CalorieRequest) -> CalorieResponse:
    weight_kg, height_cm = body.weight, body.height
    if body.imperial:
        weight_kg = pounds_to_kg(body.weight)
        height_cm = feet_inches_to_cm(body.height_feet or 0, body.height)

    try:
        plan = calculate_calorie_plan(
            gender=body.gender,
            age=body.age,
            weight_kg=weight_kg,
            height_cm=height_cm,
            activity_multiplier=body.activity_multiplier,
        )
    except ValueError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e

    goals = plan.goals
    return CalorieResponse(
        bmr=plan.bmr,
        maintenance=goals.maintenance,
        mild_loss=goals.mild_loss,
        weight_loss=goals.weight_loss,
        mild_gain=goals.mild_gain,
        weight_gain=goals.weight_gain,
    )
