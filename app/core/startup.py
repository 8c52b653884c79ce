# app/core/startup.py
import logging
from datetime import timedelta

from fastapi import FastAPI
from google import genai
from google.genai import types

from app.core.config import Settings
from app.core.sessions import SessionStore

logger = logging.getLogger(__name__)


def build_chat_factory(client: genai.Client, settings: Settings):
    """Returns a callable that opens a fresh async Gemini chat with empty history."""
    config = types.GenerateContentConfig(
        max_output_tokens=settings.MAX_OUTPUT_TOKENS,
        system_instruction=settings.SYSTEM_INSTRUCTION,
    )

    def create_chat():
        return client.aio.chats.create(model=settings.GEMINI_MODEL, config=config)

    return create_chat


async def startup_event(app: FastAPI, settings: Settings):
    """
    Initialize resources on application startup.
    """
    try:
        llm_client = genai.Client(api_key=settings.GOOGLE_API_KEY)
        app.state.llm_client = llm_client
        app.state.session_store = SessionStore(
            chat_factory=build_chat_factory(llm_client, settings),
            idle_timeout=timedelta(minutes=settings.SESSION_EXPIRY_MINUTES),
        )
        logger.info(f"Gemini client initialized (model={settings.GEMINI_MODEL}).")

    except Exception as e:
        logger.error(f"Failed to startup: {e}")
        raise
