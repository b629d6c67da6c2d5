# schoolhub/utils/pagination.py
"""Pagination utilities for consistent API responses."""
from typing import Any, Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel, Field
from fastapi import Query
from math import ceil

from ..core.config import settings
from ..core.exceptions import ValidationError


class PaginationParams(BaseModel):
    """Standard pagination parameters."""
    page: int = Field(1, ge=1, description="Page number (starts from 1)")
    size: int = Field(10, ge=1, le=100, description="Items per page")


class PaginationMeta(BaseModel):
    """Pagination metadata."""
    page: int
    size: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool


class Paginator:
    """Pagination utility class."""

    @staticmethod
    def get_pagination_params(
        page: int = Query(1, ge=1, description="Page number"),
        size: Optional[int] = Query(None, ge=1, le=100, description="Items per page"),
    ) -> PaginationParams:
        """FastAPI dependency for pagination parameters."""
        return PaginationParams(page=page, size=size or settings.items_per_page)

    @staticmethod
    def create_meta(page: int, size: int, total: int) -> PaginationMeta:
        total_pages = ceil(total / size) if size > 0 else 0
        return PaginationMeta(
            page=page,
            size=size,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1
        )

    @staticmethod
    def create_response(
        items: List[Any],
        page: int,
        size: int,
        total: int,
        additional_info: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Create standardized paginated response."""
        meta = Paginator.create_meta(page, size, total)
        response = {
            "items": items,
            "meta": meta.model_dump()
        }

        # Flat copies of the meta fields
        response.update({
            "total": total,
            "page": page,
            "size": size,
            "has_next": meta.has_next,
            "has_previous": meta.has_previous,
            "total_pages": meta.total_pages
        })

        if additional_info:
            response.update(additional_info)

        return response

    @staticmethod
    def from_page(page_data: Dict[str, Any], formatter) -> Dict[str, Any]:
        """Format the items of a BaseService.paginate() result into a response"""
        return Paginator.create_response(
            [formatter(item) for item in page_data["items"]],
            page_data["page"],
            page_data["size"],
            page_data["total"],
        )


def parse_id_list(value: Optional[str]) -> List:
    """'a,b,c' query strings to a list of UUIDs"""
    if not value:
        return []
    try:
        return [UUID(part.strip()) for part in value.split(",") if part.strip()]
    except ValueError:
        raise ValidationError(f"Invalid id list: {value}")
