# app/services/llm/llm_services.py
import json
import logging

from fastapi import Request
from pydantic import ValidationError

from app.core.exceptions import InvalidContentTypeError, InvalidInputError, InvalidJSONError, utc_timestamp
from app.core.sessions import SessionStore
from app.models.llm_models import ChatRequest, ChatResponse, ConversationResetResponse, describe_validation_errors
from app.services.llm.llm_utils import query_genai_api

logger = logging.getLogger(__name__)


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json"


async def read_chat_request(request: Request) -> ChatRequest:
    """
    Checks the content type, decodes the body and validates the fields, in
    that order. Each step raises its own ChatError so nothing reaches the
    language model unless the request is well formed.
    """
    if not is_json_content_type(request.headers.get("content-type")):
        raise InvalidContentTypeError()

    raw_body = await request.body()
    try:
        payload = json.loads(raw_body)
    except ValueError as e:
        raise InvalidJSONError() from e

    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidInputError(describe_validation_errors(e)) from e


async def chat_logic(request: ChatRequest, session_store: SessionStore, timeout: float) -> ChatResponse:
    """
    Handles one chat turn: drops idle sessions, resolves the user's chat
    session and asks the language model for a reply.
    """
    session_store.sweep_expired()
    chat_session = session_store.get_or_create(request.user_id)

    logger.debug(f"Sending message for user {request.user_id} ({len(request.message)} chars)")
    reply = await query_genai_api(chat_session, request.message, timeout=timeout)
    logger.debug(f"Received reply for user {request.user_id} ({len(reply)} chars)")

    return ChatResponse(message=reply, conversation_id=request.user_id, timestamp=utc_timestamp())


def reset_conversation(user_id: str, session_store: SessionStore) -> ConversationResetResponse:
    """Forgets the server-side chat session so the next message starts a new conversation."""
    user_id = user_id.strip()
    if not user_id:
        raise InvalidInputError("Empty input field. 'userId' must not be empty.")

    cleared = session_store.remove(user_id)
    logger.info(f"Conversation reset for user {user_id} (session existed: {cleared})")
    return ConversationResetResponse(conversation_id=user_id, cleared=cleared, timestamp=utc_timestamp())
