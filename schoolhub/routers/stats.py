# schoolhub/routers/stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_admin
from ..services.stats_service import StatsService

router = APIRouter(prefix="/api/v1/stats", tags=["Stats"])


@router.get("/counts", response_model=dict)
async def user_counts(
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Admin dashboard: how many admins, teachers, students and parents exist"""
    return await StatsService(db).count_users()
