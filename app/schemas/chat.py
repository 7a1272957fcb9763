"""Pydantic schemas for the chat endpoint."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    """A single turn in the conversation history, as kept by the frontend."""

    # Missing, null or non-string tags are model turns, like any value
    # other than the literal "user".
    sender: Any = None
    text: str


class ChatRequest(BaseModel):
    """Body for POST /chat.

    ``message`` is optional at the schema level so that a missing or blank
    message is answered with the endpoint's own 400 body instead of a
    generic validation error.
    """

    message: Optional[str] = None
    history: Optional[list[ChatTurn]] = Field(default=None)


class ChatReply(BaseModel):
    """Successful relay of the model's text."""

    reply: str


class ChatError(BaseModel):
    """Error body returned with any non-2xx status."""

    error: str
