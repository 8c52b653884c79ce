# app/core/sessions.py
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

SESSION_EXPIRY_TIME = timedelta(minutes=30)


@dataclass
class ChatSessionEntry:
    chat_session: Any
    last_accessed: datetime


class SessionStore:
    """
    In-process map from user id to an upstream chat session.

    - one entry per user id
    - entries idle longer than idle_timeout are dropped by sweep_expired()
    - nothing survives a restart
    """

    def __init__(self, chat_factory: Callable[[], Any], idle_timeout: timedelta = SESSION_EXPIRY_TIME):
        self._chat_factory = chat_factory
        self.idle_timeout = idle_timeout
        self._lock = threading.Lock()
        self._sessions: Dict[str, ChatSessionEntry] = {}

    def _is_expired(self, entry: ChatSessionEntry, now: datetime) -> bool:
        return now - entry.last_accessed > self.idle_timeout

    def get_or_create(self, user_id: str, now: Optional[datetime] = None) -> Any:
        """Returns the chat session for user_id, starting a new one if missing or expired."""
        now = now or datetime.now()
        with self._lock:
            entry = self._sessions.get(user_id)
            if entry is None or self._is_expired(entry, now):
                logger.debug(f"Starting new chat session for user {user_id}")
                entry = ChatSessionEntry(chat_session=self._chat_factory(), last_accessed=now)
                self._sessions[user_id] = entry
            else:
                entry.last_accessed = now
            return entry.chat_session

    def sweep_expired(self, now: Optional[datetime] = None) -> List[str]:
        """Removes idle sessions and returns the user ids that were dropped."""
        now = now or datetime.now()
        with self._lock:
            expired = [
                user_id
                for user_id, entry in self._sessions.items()
                if self._is_expired(entry, now)
            ]
            for user_id in expired:
                del self._sessions[user_id]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired chat sessions.")
        return expired

    def remove(self, user_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(user_id, None) is not None

    def __contains__(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
