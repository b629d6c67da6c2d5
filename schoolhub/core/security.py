# schoolhub/core/security.py
"""Password hashing, JWT role claims and role gates."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Dict, Any
import uuid

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from .config import settings
from .exceptions import AuthenticationError, PermissionDenied

# auto_error is off so missing credentials produce our 401 body
security = HTTPBearer(auto_error=False)


class Role(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"


@dataclass(frozen=True)
class CurrentUser:
    id: uuid.UUID
    role: Role
    name: str = ""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    # Bcrypt has a 72 byte limit
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return hashed.decode('utf-8')


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """Resolve the caller from the bearer token claims"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
        role = Role(payload.get("role"))
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    return CurrentUser(id=user_id, role=role, name=payload.get("name", ""))


def require_roles(*roles: Role):
    """Dependency factory allowing only the given role claims"""
    async def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise PermissionDenied(
                f"Role '{current_user.role.value}' cannot access this resource"
            )
        return current_user
    return checker


require_admin = require_roles(Role.ADMIN)
require_staff = require_roles(Role.ADMIN, Role.TEACHER)
require_any_role = require_roles(Role.ADMIN, Role.TEACHER, Role.STUDENT, Role.PARENT)
