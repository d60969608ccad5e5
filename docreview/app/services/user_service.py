from __future__ import annotations
import logging
import threading
from typing import Dict, Iterable, List, Optional, Protocol

from pydantic import ValidationError

from docreview.app.core.config import settings
from docreview.app.schemas.user import User

log = logging.getLogger(__name__)

def seed_users(records: Iterable[dict]) -> List[User]:
    users = []
    for i, record in enumerate(records):
        try:
            users.append(User.model_validate(record))
        except ValidationError as exc:
            log.warning("skipping seed user %d: %s", i, exc.errors()[0].get("msg"))
    return users

class UserLookup(Protocol):
    def query_by_id(self, user_id: Optional[str]) -> Optional[User]: ...

class InMemoryUserDirectory:
    """Dict-backed user lookup, seeded from SEED_USERS_JSON by default."""

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._lock = threading.Lock()
        if users is None:
            users = seed_users(settings.seed_users())
        self._mem: Dict[str, User] = {u.id: u for u in users}

    def add(self, user: User) -> None:
        with self._lock:
            self._mem[user.id] = user

    def query_by_id(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        with self._lock:
            return self._mem.get(user_id)
