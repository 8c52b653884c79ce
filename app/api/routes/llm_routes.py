# app/api/routes/llm_routes.py
from fastapi import APIRouter, Depends, Request

from app.core.config import Settings, get_settings
from app.core.dependencies import get_session_store
from app.core.exceptions import handle_error
from app.core.sessions import SessionStore
from app.models.llm_models import ChatResponse, ConversationResetResponse, ErrorResponse
from app.services.llm.llm_services import chat_logic, read_chat_request, reset_conversation

router = APIRouter()

ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 408, 415, 429, 500, 502)
}


@router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
async def chat(
    request: Request,
    session_store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    """
    Send a message to the language model, continuing the user's conversation.
    """
    try:
        chat_request = await read_chat_request(request)
        return await chat_logic(chat_request, session_store, timeout=settings.REQUEST_TIMEOUT_SECONDS)
    except Exception as e:
        return handle_error(e)


@router.delete("/chat/{user_id}", response_model=ConversationResetResponse, responses=ERROR_RESPONSES)
def reset_chat(user_id: str, session_store: SessionStore = Depends(get_session_store)):
    """Start the user's next message in a fresh conversation."""
    try:
        return reset_conversation(user_id, session_store)
    except Exception as e:
        return handle_error(e)
