import asyncio
import logging
from typing import Any

from google.genai import errors

from app.core.exceptions import (
    ChatError,
    InvalidAPIResponseError,
    RateLimitExceededError,
    RequestTimeoutError,
    UpstreamAPIError,
    UpstreamServerError,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_MARKERS = ("429", "too many requests", "resource exhausted", "resource_exhausted")


def extract_text(response: Any) -> str:
    """Pulls the generated text out of a Gemini response, rejecting empty replies."""
    text = getattr(response, "text", None)
    if not isinstance(text, str) or not text.strip():
        raise InvalidAPIResponseError("Invalid response received from the language model.")
    return text


def classify_upstream_error(error: Exception) -> Exception:
    """
    Maps an exception raised by the Gemini SDK onto the chat error taxonomy.
    Errors that cannot be classified are returned unchanged.
    """
    if isinstance(error, ChatError):
        return error

    if isinstance(error, errors.APIError):
        if error.code == 429:
            return RateLimitExceededError()
        if isinstance(error, errors.ServerError):
            return UpstreamServerError()
        return UpstreamAPIError(f"API Error: {error.message or error.status} (Status: {error.code})")

    # Untyped errors (transport layers, stubs) only carry their text.
    text = str(error).lower()
    if any(marker in text for marker in RATE_LIMIT_MARKERS):
        return RateLimitExceededError()
    return error


async def query_genai_api(chat_session: Any, message: str, timeout: float) -> str:
    """
    Sends one user turn through an async Gemini chat session and returns the reply text.

    The upstream call is cancelled when it does not finish within `timeout` seconds.
    """
    try:
        response = await asyncio.wait_for(chat_session.send_message(message), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"Language model call exceeded {timeout}s, cancelled.")
        raise RequestTimeoutError() from e
    except Exception as e:
        classified = classify_upstream_error(e)
        if classified is e:
            raise
        raise classified from e

    return extract_text(response)
