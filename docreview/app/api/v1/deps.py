from __future__ import annotations
from functools import lru_cache
from typing import Callable, Optional, Type, TypeVar

from fastapi import Depends, Query, Request
from pydantic import BaseModel, ValidationError

from docreview.app.core.errors import ParamsError, invalid_fields
from docreview.app.core.rbac import Principal, get_principal
from docreview.app.schemas.common import PageParams
from docreview.app.schemas.user import User
from docreview.app.services.review_service import DocReviewService, InMemoryDocReviewService
from docreview.app.services.user_service import InMemoryUserDirectory, UserLookup

M = TypeVar("M", bound=BaseModel)

@lru_cache
def get_review_service() -> DocReviewService:
    return InMemoryDocReviewService()

@lru_cache
def get_user_lookup() -> UserLookup:
    return InMemoryUserDirectory()

def page_params(
    page: int = Query(1, ge=1),
    rows: int = Query(10, ge=1, le=100),
    filter_word: Optional[str] = Query(default=None, alias="filterWord"),
) -> PageParams:
    return PageParams(page=page, rows=rows, filter_word=filter_word)

def resolve_actor(
    principal: Principal = Depends(get_principal),
    users: UserLookup = Depends(get_user_lookup),
) -> User:
    """The calling user's profile. Unknown or missing callers are a parameter error."""
    user = users.query_by_id(principal.user_id)
    if user is None:
        raise ParamsError()
    return user

def json_body(model: Type[M]) -> Callable[..., M]:
    """Request body parsed as ``model``. List it after the role gate: declared
    body parameters are parsed before any dependency runs."""
    async def parse(request: Request) -> M:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            raise ParamsError(data={"fields": invalid_fields(exc.errors())})

    return parse
