from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_token, get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import LoginRequest, TokenResponse, UserInfo
from app.schemas.common import ApiResponse, MessageResponse
from app.services import users as users_service

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Log in with username or email."""
    user, token = await users_service.authenticate(db, credentials.username, credentials.password)
    return {"message": "Login successful", "token": token, "user": user}


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_current_token),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await users_service.revoke_token(db, token)
    return {"message": "Logout successful"}


@router.get("/me", response_model=ApiResponse[UserInfo])
async def me(current_user: User = Depends(get_current_user)):
    return {"data": current_user}


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    token: str = Depends(get_current_token),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    new_token = await users_service.refresh_token(db, current_user, token)
    return {"message": "Token refreshed successfully", "token": new_token, "user": current_user}
