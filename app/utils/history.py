"""
History builders for Gemini chat sessions.

The frontend tags each turn with a free-form ``sender``; Gemini only accepts
the two roles ``user`` and ``model``. Anything that is not literally "user"
is treated as a model turn.
"""

from __future__ import annotations

from typing import Any, Iterable, Literal

from app.schemas.chat import ChatTurn

USER_SENDER = "user"

GeminiRole = Literal["user", "model"]


def map_role(sender: Any) -> GeminiRole:
    """Collapse a frontend sender tag onto Gemini's two-valued role vocabulary."""
    return "user" if sender == USER_SENDER else "model"


def build_gemini_history(turns: Iterable[ChatTurn]) -> list[dict[str, Any]]:
    """
    Convert frontend turns into the ``history`` argument of ``start_chat``.

    Order is preserved and every turn carries exactly one text part.
    """
    return [
        {"role": map_role(turn.sender), "parts": [{"text": turn.text}]}
        for turn in turns
    ]
