"""
Shared fixtures: a stub Gemini chat, a session store wired to it and a
TestClient with the store and settings swapped in.
"""

import asyncio
import os
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

# Settings are loaded when app.main is imported
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from app.main import app  # noqa: E402
from app.core.config import Settings, get_settings  # noqa: E402
from app.core.dependencies import get_session_store  # noqa: E402
from app.core.sessions import SessionStore  # noqa: E402


class FakeChat:
    """Stands in for google.genai's AsyncChat; remembers every turn it was sent."""

    def __init__(self, reply="hi there", error=None, delay=None, text_override=...):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.text_override = text_override
        self.history = []
        self.cancelled = False

    async def send_message(self, message):
        self.history.append(message)
        if self.delay is not None:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        if self.text_override is not ...:
            return SimpleNamespace(text=self.text_override)
        return SimpleNamespace(text=self.reply)


class ChatFactory:
    """Hands out FakeChat instances built from a template and keeps them for inspection."""

    def __init__(self, **chat_kwargs):
        self.chat_kwargs = chat_kwargs
        self.created = []

    def __call__(self):
        chat = FakeChat(**self.chat_kwargs)
        self.created.append(chat)
        return chat


@pytest.fixture
def chat_factory():
    return ChatFactory()


@pytest.fixture
def session_store(chat_factory):
    return SessionStore(chat_factory=chat_factory)


@pytest.fixture
def test_settings():
    return Settings(GOOGLE_API_KEY="test-google-api-key", REQUEST_TIMEOUT_SECONDS=0.2)


@pytest.fixture
def client(session_store, test_settings):
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
