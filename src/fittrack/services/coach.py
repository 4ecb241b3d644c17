"""
fittrack.services.coach

AI-coach proxy.

Responsibilities:
- Validate a chat turn and build the prompt for the language model.
- Map provider failures to user-facing messages and HTTP status codes.

Stateless per call: no retries, no stored history.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

import httpx
from google.genai import errors as genai_errors

from fittrack.clients.gemini import TextModel
from fittrack.observability.logging import get_logger

log = get_logger(__name__)

MISSING_KEY_MESSAGE = "AI service is not configured correctly. Missing API key."
INVALID_KEY_MESSAGE = "AI service is not configured correctly. Invalid API key."
QUOTA_MESSAGE = "AI service quota exceeded. Please try again later."
BLOCKED_MESSAGE = "AI could not generate a response, possibly due to safety filters."
GENERIC_MESSAGE = "An error occurred while communicating with the AI coach."

# Only the most recent turns are sent along; older context rarely changes the answer.
MAX_HISTORY_TURNS = 10


@dataclass(frozen=True, slots=True)
class ChatTurn:
    sender: Literal["user", "bot"]
    text: str


class CoachError(Exception):
    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CoachService:
    def __init__(self, *, model: TextModel | None) -> None:
        # `None` means the service is not configured (no API key).
        self._model = model

    async def reply(self, message: str, history: Sequence[ChatTurn] = ()) -> str:
        if self._model is None:
            log.error("coach_not_configured")
            raise CoachError(MISSING_KEY_MESSAGE, status_code=500)
        if not message or not message.strip():
            raise CoachError("Message is required", status_code=400)

        log.info("coach_request", message_chars=len(message), history_turns=len(history))
        try:
            text = await self._model.generate(build_prompt(message, history))
        except (genai_errors.APIError, httpx.HTTPError) as e:
            log.error("coach_provider_error", error=str(e))
            raise CoachError(_provider_message(str(e)), status_code=500) from e

        if not text:
            log.warning("coach_empty_response")
            raise CoachError(BLOCKED_MESSAGE, status_code=500)
        return text


def build_prompt(message: str, history: Sequence[ChatTurn] = ()) -> str:
    lines = ["You are FitTrack AI Coach, a friendly fitness assistant."]
    recent = list(history)[-MAX_HISTORY_TURNS:]
    if recent:
        lines.append("Conversation so far:")
        for turn in recent:
            speaker = "User" if turn.sender == "user" else "Coach"
            lines.append(f"{speaker}: {turn.text}")
    lines.append(
        f'Please respond to this user message in a helpful, encouraging way: "{message}"'
    )
    return "\n".join(lines)


def _provider_message(error_text: str) -> str:
    if "API key not valid" in error_text:
        return INVALID_KEY_MESSAGE
    if "quota" in error_text.lower():
        return QUOTA_MESSAGE
    return GENERIC_MESSAGE
