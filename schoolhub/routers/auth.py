from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, get_current_user
from ..schemas.users import LoginRequest, TokenResponse
from ..services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange username and password for a bearer token carrying the role claim"""
    service = AuthService(db)
    return await service.authenticate(credentials.username, credentials.password)


@router.get("/me")
async def me(current_user: CurrentUser = Depends(get_current_user)):
    return {
        "id": str(current_user.id),
        "role": current_user.role.value,
        "name": current_user.name,
    }
