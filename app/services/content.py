"""Multilingual page content: upserts and the grouped/flattened read projections.

A projection only contains rows that exist. A key missing in one language is
omitted for that language; nothing is backfilled from the default language.
"""
import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidArgument, NotFound
from app.db.base_class import utcnow
from app.models.content import ContentItem, Page
from app.models.language import Language
from app.schemas.content import BulkContentUpsert, ContentUpsert
from app.services.languages import find_invalid_codes, get_active_language

logger = logging.getLogger(__name__)


def attribute_name(section: Optional[str], key: Optional[str]) -> str:
    """Flattened attribute name for a section/key pair, e.g. ``hero_title``."""
    if section and key:
        return f"{section}_{key}"
    return key or section


def _item_payload(item: ContentItem) -> dict:
    return {
        "id": item.id,
        "content": item.content,
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }


async def _fetch_rows(db: AsyncSession, language_code: Optional[str] = None) -> Sequence:
    stmt = (
        select(ContentItem, Page.title, Language.name)
        .outerjoin(Page, Page.slug == ContentItem.page)
        .outerjoin(Language, Language.code == ContentItem.language_code)
    )
    if language_code is not None:
        stmt = stmt.where(ContentItem.language_code == language_code).order_by(
            ContentItem.page, ContentItem.section, ContentItem.key
        )
    else:
        stmt = stmt.order_by(
            ContentItem.page, ContentItem.language_code, ContentItem.section, ContentItem.key
        )
    result = await db.execute(stmt)
    return result.all()


async def list_pages(db: AsyncSession) -> List[Page]:
    result = await db.execute(select(Page).order_by(Page.title.asc()))
    return list(result.scalars().all())


async def get_all(db: AsyncSession) -> dict:
    """``{page: {page_title, languages: {lang: {language_name, sections: {section: {key: item}}}}}}``."""
    rows = await _fetch_rows(db)
    grouped: Dict[str, dict] = {}
    for item, page_title, language_name in rows:
        page = grouped.setdefault(item.page, {"page_title": page_title, "languages": {}})
        language = page["languages"].setdefault(
            item.language_code, {"language_name": language_name, "sections": {}}
        )
        section = language["sections"].setdefault(item.section, {})
        section[item.key] = _item_payload(item)
    return {"data": grouped, "total_items": len(rows)}


async def get_by_language(db: AsyncSession, language_code: str) -> dict:
    """``{page: {page_title, sections: {section: {key: item}}}}`` for one language."""
    rows = await _fetch_rows(db, language_code)
    grouped: Dict[str, dict] = {}
    for item, page_title, _ in rows:
        page = grouped.setdefault(item.page, {"page_title": page_title, "sections": {}})
        page["sections"].setdefault(item.section, {})[item.key] = _item_payload(item)
    return {
        "language_code": language_code,
        "language_name": rows[0][2] if rows else None,
        "data": grouped,
        "total_items": len(rows),
    }


async def get_by_language_name(db: AsyncSession, language_name: str) -> dict:
    result = await db.execute(
        select(Language.code).where(Language.name == language_name, Language.is_active.is_(True))
    )
    code = result.scalar_one_or_none()
    if code is None:
        raise NotFound("Language not found")

    projection = await get_by_language(db, code)
    projection["language_name"] = language_name
    return projection


async def get_simple(db: AsyncSession, language_code: Optional[str] = None) -> dict:
    """Flatten section and key into one attribute per page.

    Without a language every item is annotated with ``language`` and
    ``language_name``; rows are ordered by language so the last language
    written for an attribute wins.
    """
    rows = await _fetch_rows(db, language_code)
    simple: Dict[str, dict] = {}
    for item, _, language_name in rows:
        entry = {"content": item.content}
        if language_code is None:
            entry["language"] = item.language_code
            entry["language_name"] = language_name
        simple.setdefault(item.page, {})[attribute_name(item.section, item.key)] = entry

    projection = {"data": simple, "total_items": len(rows)}
    if language_code is not None:
        projection["language_code"] = language_code
        projection["language_name"] = rows[0][2] if rows else None
    return projection


async def get_page_content(db: AsyncSession, page: str, language_code: Optional[str] = None) -> List[ContentItem]:
    stmt = select(ContentItem).where(ContentItem.page == page)
    if language_code is not None:
        stmt = stmt.where(ContentItem.language_code == language_code).order_by(
            ContentItem.section, ContentItem.key
        )
    else:
        stmt = stmt.order_by(ContentItem.language_code, ContentItem.section, ContentItem.key)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_structure(db: AsyncSession, page: str) -> List[dict]:
    result = await db.execute(
        select(ContentItem.section, ContentItem.key)
        .where(ContentItem.page == page)
        .distinct()
        .order_by(ContentItem.section, ContentItem.key)
    )
    return [{"section": section, "key": key} for section, key in result.all()]


async def _upsert_row(db: AsyncSession, page: str, section: str, key: str, language_code: str, content: str) -> ContentItem:
    stmt = select(ContentItem).where(
        ContentItem.page == page,
        ContentItem.section == section,
        ContentItem.key == key,
        ContentItem.language_code == language_code,
    )
    existing = (await db.execute(stmt)).scalar_one_or_none()
    if existing is None:
        item = ContentItem(page=page, section=section, key=key, language_code=language_code, content=content)
        try:
            async with db.begin_nested():
                db.add(item)
        except IntegrityError:
            # another writer inserted the same tuple first; last write wins
            existing = (await db.execute(stmt)).scalar_one()
        else:
            return item

    existing.content = content
    existing.updated_at = utcnow()
    await db.flush()
    return existing


async def upsert(db: AsyncSession, data: ContentUpsert) -> ContentItem:
    if await get_active_language(db, data.language_code) is None:
        raise InvalidArgument("Language not found or inactive")

    try:
        item = await _upsert_row(db, data.page, data.section, data.key, data.language_code, data.content)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return item


async def bulk_upsert(db: AsyncSession, data: BulkContentUpsert) -> int:
    """Upsert one page/section/key across several languages, all or nothing."""
    invalid = await find_invalid_codes(db, (t.language_code for t in data.translations))
    if invalid:
        raise InvalidArgument(f"Invalid or inactive language codes: {', '.join(invalid)}")

    try:
        for translation in data.translations:
            await _upsert_row(db, data.page, data.section, data.key, translation.language_code, translation.content)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Bulk content update %s/%s/%s: %d translations", data.page, data.section, data.key, len(data.translations))
    return len(data.translations)


async def update_content(db: AsyncSession, content_id: int, content: str) -> ContentItem:
    item = await db.get(ContentItem, content_id)
    if item is None:
        raise NotFound("Content not found")
    item.content = content
    item.updated_at = utcnow()
    await db.commit()
    return item


async def delete_content(db: AsyncSession, content_id: int) -> None:
    result = await db.execute(delete(ContentItem).where(ContentItem.id == content_id))
    if result.rowcount == 0:
        raise NotFound("Content not found")
    await db.commit()
