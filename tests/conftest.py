"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy import create_engine

from email_productivity_agent.config import Settings
from email_productivity_agent.db import ensure_schema
from email_productivity_agent.repository import (
    ActionItemRepository,
    DraftRepository,
    EmailRepository,
    PromptRepository,
)


class FakeGeminiClient:
    """Stand-in for GeminiClient that answers from a script.

    ``responder`` is either a list of answers consumed in order or a callable
    receiving ``(user_message, system_message)``. Exceptions are raised.
    """

    def __init__(self, responder: list[Any] | Callable[[str, str | None], Any]) -> None:
        self._responder = responder
        self.calls: list[tuple[str, str | None]] = []

    def _next(self, user_message: str, system_message: str | None) -> Any:
        if callable(self._responder):
            return self._responder(user_message, system_message)
        return self._responder.pop(0)

    async def send(self, user_message: str, system_message: str | None = None, **_: Any) -> str:
        self.calls.append((user_message, system_message))
        answer = self._next(user_message, system_message)
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def probe(self, timeout: float | None = None) -> str:
        return await self.send("test")


@pytest.fixture
def mock_settings() -> Settings:
    """Provide mock settings for testing."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        database_key="test-db-key",
        gemini_api_key="test-key",
        log_level="DEBUG",
        debug=True,
    )


@pytest.fixture
def fake_gemini() -> type[FakeGeminiClient]:
    """Provide the scripted Gemini client class."""
    return FakeGeminiClient


@pytest.fixture
def engine(tmp_path):
    """Provide a SQLite engine with the schema applied."""
    engine = create_engine(f"sqlite:///{tmp_path / 'agent.sqlite3'}")
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def email_repo(engine) -> EmailRepository:
    return EmailRepository(engine)


@pytest.fixture
def prompt_repo(engine) -> PromptRepository:
    return PromptRepository(engine)


@pytest.fixture
def action_item_repo(engine) -> ActionItemRepository:
    return ActionItemRepository(engine)


@pytest.fixture
def draft_repo(engine) -> DraftRepository:
    return DraftRepository(engine)


@pytest.fixture
def default_prompts(prompt_repo: PromptRepository) -> PromptRepository:
    """Store the three default task templates."""
    from email_productivity_agent.seed import DEFAULT_PROMPTS

    for prompt in DEFAULT_PROMPTS:
        prompt_repo.create(**prompt)
    return prompt_repo


@pytest.fixture
def sample_email_data() -> dict:
    """Provide sample email data structure."""
    return {
        "sender": "sarah.johnson@techcorp.com",
        "sender_name": "Sarah Johnson",
        "subject": "Q4 Planning Meeting - Action Required",
        "body": (
            "Hi Team,\n\nPlease review the attached budget proposal.\n\n"
            "Deadline: Friday, 3 PM\n\nThanks,\nSarah"
        ),
        "timestamp": "2024-12-01T10:00:00+00:00",
    }
