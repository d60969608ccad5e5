from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

def _now() -> datetime:
    return datetime.now(timezone.utc)

class BatchIdDTO(BaseModel):
    # order is kept as submitted; duplicates are the service's concern
    ids: List[str] = Field(..., min_length=1)

class RefuseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    doc_id: str = Field(..., alias="docId", min_length=1)
    reason: str = Field(..., min_length=1)

class RefuseBatchDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    ids: List[str] = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)

class ReviewState(str, Enum):
    approved = "approved"
    refused = "refused"

class PendingDoc(BaseModel):
    id: str
    name: str
    uploader_id: str
    created_at: datetime = Field(default_factory=_now)

class DocReview(BaseModel):
    id: str
    doc_id: str
    doc_name: str
    user_id: str
    state: ReviewState
    reason: Optional[str] = None
    read: bool = False
    created_at: datetime = Field(default_factory=_now)

class DocLog(BaseModel):
    id: str
    doc_id: str
    doc_name: str
    action: str
    detail: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
