# app/core/dependencies.py
from fastapi import Request

from app.core.sessions import SessionStore


def get_session_store(request: Request) -> SessionStore:
    """Dependency to provide the process-wide chat session store."""
    return request.app.state.session_store
