from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import require_admin
from app.db.session import get_db
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.language import Language, LanguageCreate, LanguageUpdate
from app.services import languages as languages_service

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=ApiResponse[List[Language]])
async def list_languages(db: AsyncSession = Depends(get_db)):
    return {"data": await languages_service.list_languages(db)}


@router.get("/active", response_model=ApiResponse[List[Language]])
async def list_active_languages(db: AsyncSession = Depends(get_db)):
    return {"data": await languages_service.list_languages(db, active_only=True)}


@router.post("", response_model=ApiResponse[Language], status_code=status.HTTP_201_CREATED)
async def create_language(data: LanguageCreate, db: AsyncSession = Depends(get_db)):
    language = await languages_service.create_language(db, data)
    return {"data": language, "message": "Language created successfully"}


@router.put("/{language_id}", response_model=ApiResponse[Language])
async def update_language(language_id: int, data: LanguageUpdate, db: AsyncSession = Depends(get_db)):
    language = await languages_service.update_language(db, language_id, data)
    return {"data": language, "message": "Language updated successfully"}


@router.delete("/{language_id}", response_model=MessageResponse)
async def delete_language(language_id: int, db: AsyncSession = Depends(get_db)):
    await languages_service.delete_language(db, language_id)
    return {"message": "Language deleted successfully"}
