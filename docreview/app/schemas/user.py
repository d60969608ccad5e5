from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, field_validator

def _now() -> datetime:
    return datetime.now(timezone.utc)

class User(BaseModel):
    """Profile record owned by user management; read-only in this service."""
    id: str
    username: str
    message: Optional[str] = None
    company: Optional[str] = None
    hobby: Optional[str] = None
    create_date: datetime = Field(default_factory=_now)
    update_date: datetime = Field(default_factory=_now)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        # user-management stores numeric ids
        return str(v) if isinstance(v, int) else v
