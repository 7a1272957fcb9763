"""
Gemini service: wraps Google Generative AI chat sessions.

Every request gets a fresh chat session seeded with the caller's history; the
model object (and its generation config) is built once and shared, since it
holds no per-conversation state.

The SDK call is blocking, so it runs in a worker thread. Any failure from the
SDK, the network, the optional deadline or text extraction surfaces as
GeminiError with the original exception chained.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import google.generativeai as genai

from app.config import Settings

logger = logging.getLogger(__name__)


class GeminiError(Exception):
    """Raised when the upstream model call fails for any reason."""


class GeminiChatService:
    """Relays one message plus prior turns to a Gemini model."""

    def __init__(
        self,
        api_key: str,
        model_name: str,
        generation_config: genai.GenerationConfig,
        system_instruction: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._model = genai.GenerativeModel(
            model_name,
            generation_config=generation_config,
            system_instruction=system_instruction,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiChatService":
        """Build the service from application settings."""
        return cls(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            generation_config=genai.GenerationConfig(
                temperature=settings.gemini_temperature,
                top_k=settings.gemini_top_k,
                top_p=settings.gemini_top_p,
                max_output_tokens=settings.gemini_max_output_tokens,
            ),
            system_instruction=settings.gemini_system_instruction,
            timeout_seconds=settings.gemini_timeout_seconds,
        )

    def _send_blocking(self, message: str, history: list[dict[str, Any]]) -> str:
        chat = self._model.start_chat(history=history)
        response = chat.send_message(message)
        # .text raises ValueError when the candidate has no text part
        # (e.g. blocked by safety filters).
        return response.text

    async def send(self, message: str, history: list[dict[str, Any]]) -> str:
        """
        Start a chat seeded with ``history``, send ``message`` and return the reply text.

        Raises GeminiError on any failure.
        """
        logger.debug(
            "Gemini request (%s): %d history turns", self.model_name, len(history)
        )
        call = asyncio.to_thread(self._send_blocking, message, history)
        try:
            if self.timeout_seconds is None:
                text = await call
            else:
                text = await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise GeminiError(
                f"Model '{self.model_name}' did not answer within {self.timeout_seconds}s"
            ) from exc
        except Exception as exc:
            raise GeminiError(f"Model '{self.model_name}' failed: {exc}") from exc

        logger.debug("Gemini response:\n%s", text)
        return text
