# admin_console/models/common.py
from typing import Any, Dict, List, Optional

from fastapi import Query
from pydantic import BaseModel

from admin_console.core.config import settings


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalCount: int
    hasNext: bool
    hasPrev: bool
    limit: int


class DataOut(BaseModel):
    success: bool = True
    data: Any


class MessageOut(BaseModel):
    success: bool = True
    message: str
    data: Optional[Any] = None


class DeletedOut(BaseModel):
    success: bool = True
    message: str
    deletedData: Dict[str, Any]


class PageOut(BaseModel):
    success: bool = True
    data: List[Dict[str, Any]]
    pagination: Pagination
    search: Optional[str] = None


class PageParams:
    """Query parameters shared by every paginated listing."""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        search: str = Query("", description="case-insensitive text search"),
    ):
        self.page = page
        self.limit = limit
        self.search = search.strip()

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit
