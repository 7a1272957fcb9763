"""Shared fixtures: settings without a real key and a stub chat service."""

from __future__ import annotations

from typing import Any, Iterator, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import create_app


class StubChatService:
    """Records every upstream call instead of talking to Gemini."""

    def __init__(self, reply: str = "hi there", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, list[dict[str, Any]]]] = []

    async def send(self, message: str, history: list[dict[str, Any]]) -> str:
        self.calls.append((message, history))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", _env_file=None)


@pytest.fixture
def stub_service() -> StubChatService:
    return StubChatService()


@pytest.fixture
def client(settings: Settings, stub_service: StubChatService) -> Iterator[TestClient]:
    with TestClient(create_app(settings, chat_service=stub_service)) as test_client:
        yield test_client
