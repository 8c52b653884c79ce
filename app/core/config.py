# app/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    GOOGLE_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.0-flash"
    MAX_OUTPUT_TOKENS: int = 1000
    SYSTEM_INSTRUCTION: str = "You are a friendly and helpful assistant. Keep answers clear and concise."

    SESSION_EXPIRY_MINUTES: int = 30
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    ALLOWED_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    ALLOWED_HOSTS: list[str] = ["*"]

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        extra = "allow"


@lru_cache
def get_settings() -> Settings:
    """
    Loads settings once per process. Raises a ValidationError when
    GOOGLE_API_KEY is not set, which stops the server from starting.
    """
    return Settings()
