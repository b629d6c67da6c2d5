# schoolhub/routers/parents.py
from typing import Optional
from uuid import UUID
from datetime import timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_admin, require_staff
from ..models import Parent
from ..schemas.users import ParentCreate, ParentUpdate
from ..services.parent_service import ParentService
from ..utils.cache_decorators import cache_paginated_response
from ..utils.cache_invalidation import invalidate_cache
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/parents", tags=["Parents"])


def format_parent(parent: Parent) -> dict:
    return {
        "id": str(parent.id),
        "username": parent.username,
        "name": parent.name,
        "surname": parent.surname,
        "email": parent.email,
        "phone": parent.phone,
        "address": parent.address,
        "students": [
            {"id": str(s.id), "name": s.name, "surname": s.surname}
            for s in parent.students
        ],
    }


@router.get("/", response_model=dict)
@cache_paginated_response("parents", expire=timedelta(minutes=5))
async def get_parents(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    search: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ParentService(db)
    result = await service.list_parents(page=pagination.page, size=pagination.size, search=search)
    return Paginator.from_page(result, format_parent)


@router.get("/{parent_id}", response_model=dict)
async def get_parent(
    parent_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ParentService(db)
    return format_parent(await service.get_parent(parent_id))


@router.post("/", response_model=dict, status_code=201)
async def create_parent(
    parent_data: ParentCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = ParentService(db)
    parent = await service.create_parent(parent_data.model_dump())
    await invalidate_cache("parents")
    return {
        "success": True,
        "message": "Parent has been created!",
        "parent": format_parent(parent),
    }


@router.put("/{parent_id}", response_model=dict)
async def update_parent(
    parent_id: UUID,
    parent_data: ParentUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = ParentService(db)
    parent = await service.update_parent(parent_id, parent_data.model_dump())
    await invalidate_cache("parents")
    return {
        "success": True,
        "message": "Parent has been updated!",
        "parent": format_parent(parent),
    }


@router.delete("/{parent_id}", response_model=dict)
async def delete_parent(
    parent_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = ParentService(db)
    await service.delete(parent_id)
    await invalidate_cache("parents")
    return {"success": True, "message": "Parent has been deleted!"}
