from __future__ import annotations
from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

class ApiResult(BaseModel):
    """Uniform response envelope returned by every endpoint."""
    code: int = 200
    message: str = "success"
    data: Optional[Any] = None

    @classmethod
    def success(cls, data: Any = None) -> "ApiResult":
        return cls(data=data)

    @classmethod
    def error(cls, code: int, message: str) -> "ApiResult":
        return cls(code=code, message=message)

class PageParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(1, ge=1)
    rows: int = Field(10, ge=1, le=100)
    filter_word: Optional[str] = Field(default=None, alias="filterWord")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.rows

class Page(BaseModel, Generic[T]):
    page: int
    rows: int
    total: int
    items: List[T] = []
