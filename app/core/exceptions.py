# app/core/exceptions.py
import logging
from datetime import datetime, timezone

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ChatError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidContentTypeError(ChatError):
    code = "INVALID_CONTENT_TYPE"
    status_code = 415
    default_message = "Content-Type must be application/json."


class InvalidJSONError(ChatError):
    code = "INVALID_JSON"
    status_code = 400
    default_message = "Request body is not valid JSON."


class InvalidInputError(ChatError):
    code = "INVALID_INPUT"
    status_code = 400
    default_message = "Invalid input."


class RequestTimeoutError(ChatError):
    code = "TIMEOUT"
    status_code = 408
    default_message = "Request timed out. Please try again."


class InvalidAPIResponseError(ChatError):
    code = "INVALID_API_RESPONSE"
    status_code = 502
    default_message = "The language model returned an empty response."


class RateLimitExceededError(ChatError):
    code = "RATE_LIMIT_EXCEEDED"
    status_code = 429
    default_message = "Too many requests. Please wait before trying again."


class UpstreamServerError(ChatError):
    code = "SERVER_ERROR"
    status_code = 502
    default_message = "The language model service is temporarily unavailable. Please try again later."


class UpstreamAPIError(ChatError):
    code = "API_ERROR"
    status_code = 502
    default_message = "API response error. Please check your request."


def handle_error(error: Exception) -> JSONResponse:
    """Logs the original error and converts it into the public error shape."""
    if isinstance(error, ChatError):
        chat_error = error
        detail = repr(error.__cause__) if error.__cause__ is not None else chat_error.message
        log = logger.error if chat_error.status_code >= 500 else logger.warning
        log(f"Error processing request ({chat_error.code}): {detail}")
    else:
        logger.error(f"Unhandled error processing request: {error!r}", exc_info=error)
        chat_error = ChatError()

    return JSONResponse(
        status_code=chat_error.status_code,
        content={
            "error": chat_error.message,
            "code": chat_error.code,
            "timestamp": utc_timestamp(),
        },
    )
