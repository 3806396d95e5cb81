from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import require_admin
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import UserCreate, UserListItem
from app.schemas.common import ApiResponse, MessageResponse
from app.services import users as users_service

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/stats")
async def get_stats(db: AsyncSession = Depends(get_db)):
    return {"success": True, "data": await users_service.dashboard_stats(db)}


@router.get("/users", response_model=ApiResponse[List[UserListItem]])
async def list_users(db: AsyncSession = Depends(get_db)):
    return {"data": await users_service.list_users(db)}


@router.post("/users", response_model=ApiResponse[UserListItem], status_code=status.HTTP_201_CREATED)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await users_service.create_user(db, data)
    return {"data": user, "message": "User created successfully"}


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await users_service.delete_user(db, user_id, current_user)
    return {"message": "User deleted successfully"}
