from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import require_admin
from app.db.session import get_db
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.content import BulkContentUpsert, ContentItem, ContentStructureEntry, ContentUpdate, ContentUpsert, Page
from app.services import content as content_service

router = APIRouter()

# Static paths are registered before the /{page} catch-alls.

@router.get("/pages", response_model=ApiResponse[List[Page]])
async def list_pages(db: AsyncSession = Depends(get_db)):
    return {"data": await content_service.list_pages(db)}


@router.get("/all")
async def get_all_content(db: AsyncSession = Depends(get_db)):
    """Every item grouped by page, language and section."""
    return {"success": True, **await content_service.get_all(db)}


@router.get("/simple")
async def get_simple_content(db: AsyncSession = Depends(get_db)):
    return {"success": True, **await content_service.get_simple(db)}


@router.get("/simple/{language_code}")
async def get_simple_content_by_language(language_code: str, db: AsyncSession = Depends(get_db)):
    return {"success": True, **await content_service.get_simple(db, language_code)}


@router.get("/language-code/{language_code}")
async def get_content_by_language_code(language_code: str, db: AsyncSession = Depends(get_db)):
    return {"success": True, **await content_service.get_by_language(db, language_code)}


@router.get("/language/{language_name}")
async def get_content_by_language_name(language_name: str, db: AsyncSession = Depends(get_db)):
    return {"success": True, **await content_service.get_by_language_name(db, language_name)}


@router.get("/structure/{page}", response_model=ApiResponse[List[ContentStructureEntry]])
async def get_page_structure(page: str, db: AsyncSession = Depends(get_db)):
    return {"data": await content_service.get_structure(db, page)}


@router.post("/bulk", dependencies=[Depends(require_admin)])
async def bulk_update_content(data: BulkContentUpsert, db: AsyncSession = Depends(get_db)):
    updated = await content_service.bulk_upsert(db, data)
    return {"success": True, "message": "Bulk content updated successfully", "updatedCount": updated}


@router.post("", response_model=ApiResponse[ContentItem], status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def upsert_content(data: ContentUpsert, db: AsyncSession = Depends(get_db)):
    item = await content_service.upsert(db, data)
    return {"data": item, "message": "Content saved successfully"}


@router.get("/{page}", response_model=ApiResponse[List[ContentItem]])
async def get_page_content(page: str, db: AsyncSession = Depends(get_db)):
    return {"data": await content_service.get_page_content(db, page)}


@router.get("/{page}/{language}", response_model=ApiResponse[List[ContentItem]])
async def get_page_content_by_language(page: str, language: str, db: AsyncSession = Depends(get_db)):
    return {"data": await content_service.get_page_content(db, page, language)}


@router.put("/{content_id}", response_model=ApiResponse[ContentItem], dependencies=[Depends(require_admin)])
async def update_content(content_id: int, data: ContentUpdate, db: AsyncSession = Depends(get_db)):
    item = await content_service.update_content(db, content_id, data.content)
    return {"data": item, "message": "Content updated successfully"}


@router.delete("/{content_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_content(content_id: int, db: AsyncSession = Depends(get_db)):
    await content_service.delete_content(db, content_id)
    return {"message": "Content deleted successfully"}
