# app/api/routes/root_routes.py
from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.core.dependencies import get_session_store
from app.core.sessions import SessionStore

router = APIRouter()


@router.get("/")
async def read_root():
    return {"message": "Hello, World!"}


@router.get("/health")
async def health(
    session_store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    return {
        "status": "ok",
        "model": settings.GEMINI_MODEL,
        "active_sessions": len(session_store),
    }
