"""Pydantic schemas package."""

from app.schemas.chat import ChatError, ChatReply, ChatRequest, ChatTurn

__all__ = [
    "ChatTurn", "ChatRequest",
    "ChatReply", "ChatError",
]
