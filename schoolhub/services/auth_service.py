# schoolhub/services/auth_service.py
"""Login across the four user tables and username bookkeeping."""
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import AuthenticationError, DuplicateRecord
from ..core.security import Role, create_access_token, verify_password
from ..models import Admin, Teacher, Student, Parent

logger = logging.getLogger(__name__)

# Lookup order when a username exists in more than one table
USER_TABLES = (
    (Role.ADMIN, Admin),
    (Role.TEACHER, Teacher),
    (Role.STUDENT, Student),
    (Role.PARENT, Parent),
)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_username(self, username: str):
        for role, model in USER_TABLES:
            result = await self.db.execute(select(model).where(model.username == username))
            user = result.scalar_one_or_none()
            if user is not None:
                return role, user
        return None, None

    async def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        role, user = await self.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for username {username}")
            raise AuthenticationError("Incorrect username or password")

        full_name = f"{user.name} {user.surname}"
        token = create_access_token({
            "sub": str(user.id),
            "role": role.value,
            "name": full_name,
        })
        logger.info(f"User {user.id} logged in as {role.value}")
        return {
            "access_token": token,
            "token_type": "bearer",
            "role": role.value,
            "user_id": user.id,
            "name": full_name,
        }

    async def ensure_username_available(self, username: str, exclude_id: Optional[UUID] = None) -> None:
        """Usernames are unique across admins, teachers, students and parents"""
        for _, model in USER_TABLES:
            stmt = select(model.id).where(model.username == username)
            if exclude_id is not None:
                stmt = stmt.where(model.id != exclude_id)
            if (await self.db.execute(stmt)).first() is not None:
                raise DuplicateRecord(f"Username '{username}' is already taken")
