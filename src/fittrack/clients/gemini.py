"""
fittrack.clients.gemini

Thin async wrapper around the Google generative-language SDK.

Responsibilities:
- Send a single prompt to the configured model and return its text (or None when nothing
  usable came back, e.g. blocked by safety filters).
"""

from __future__ import annotations

from typing import Protocol

from google import genai


class TextModel(Protocol):
    async def generate(self, prompt: str) -> str | None: ...


class GeminiClient:
    def __init__(self, *, api_key: str, model: str) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str) -> str | None:
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=[prompt],
        )
        text = getattr(response, "text", None)
        return text.strip() if text else None
