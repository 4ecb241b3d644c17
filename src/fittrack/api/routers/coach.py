"""
fittrack.api.routers.coach

AI-coach proxy endpoint.

Responsibilities:
- Accept `{message, history}` and answer `{reply}` or `{error}` with the matching status code.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fittrack.api.deps import coach_service
from fittrack.services.coach import ChatTurn, CoachError, CoachService

router = APIRouter(prefix="/v1/ai-coach", tags=["ai-coach"])


class HistoryItem(BaseModel):
    sender: Literal["user", "bot"]
    text: str


class CoachRequest(BaseModel):
    message: str = ""
    history: list[HistoryItem] = Field(default_factory=list)


class CoachReply(BaseModel):
    reply: str


@router.post("", response_model=CoachReply)
async def ask_coach(
    body: CoachRequest,
    coach: CoachService = Depends(coach_service),
) -> CoachReply | JSONResponse:
    try:
        reply = await coach.reply(
            body.message,
            [ChatTurn(sender=h.sender, text=h.text) for h in body.history],
        )
    except CoachError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    return CoachReply(reply=reply)
