# schoolhub/services/stats_service.py
from typing import Dict
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Admin, Teacher, Student, Parent

logger = logging.getLogger(__name__)

ROLE_MODELS = {
    "admin": Admin,
    "teacher": Teacher,
    "student": Student,
    "parent": Parent,
}


class StatsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_users(self) -> Dict[str, int]:
        """Number of accounts per role, for the admin dashboard cards"""
        counts = {}
        for role, model in ROLE_MODELS.items():
            result = await self.db.execute(select(func.count(model.id)))
            counts[role] = result.scalar() or 0
        logger.debug(f"User counts: {counts}")
        return counts
