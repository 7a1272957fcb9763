"""
Chat endpoint: called by the frontend with the new message and prior turns.
Returns the model's reply, or an ``{"error": ...}`` body on failure.
"""

from __future__ import annotations

import logging
from typing import Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.schemas.chat import ChatError, ChatReply, ChatRequest
from app.services.gemini import GeminiChatService, GeminiError
from app.utils.history import build_gemini_history

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

EMPTY_MESSAGE_ERROR = "message cannot be empty"
UPSTREAM_ERROR = "a problem occurred while processing the message"


def get_chat_service(request: Request) -> GeminiChatService:
    """FastAPI dependency: the chat service built at application startup."""
    return request.app.state.chat_service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ChatError(error=message).model_dump(),
    )


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ChatError},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ChatError},
    },
)
async def chat(
    body: ChatRequest,
    service: GeminiChatService = Depends(get_chat_service),
) -> Union[ChatReply, JSONResponse]:
    """
    Relay a user message and its history to Gemini.

    400 when the message is missing or blank (no upstream call is made),
    500 with a generic message when the upstream call fails.
    """
    if not body.message or not body.message.strip():
        return _error(status.HTTP_400_BAD_REQUEST, EMPTY_MESSAGE_ERROR)

    history = build_gemini_history(body.history or [])
    logger.debug("Incoming chat: history_turns=%d", len(history))

    try:
        reply = await service.send(body.message, history)
    except GeminiError:
        logger.exception("Gemini call failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, UPSTREAM_ERROR)

    return ChatReply(reply=reply)
