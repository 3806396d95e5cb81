"""Language catalog with a single default language."""
import logging
from typing import Iterable, List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidArgument, NotFound
from app.models.content import ContentItem
from app.models.language import Language
from app.models.quiz import OptionContent, QuestionContent
from app.schemas.language import LanguageCreate, LanguageUpdate

logger = logging.getLogger(__name__)


async def list_languages(db: AsyncSession, active_only: bool = False) -> List[Language]:
    stmt = select(Language).order_by(Language.is_default.desc(), Language.name.asc())
    if active_only:
        stmt = stmt.where(Language.is_active.is_(True))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_active_language(db: AsyncSession, code: str) -> Language | None:
    result = await db.execute(
        select(Language).where(Language.code == code, Language.is_active.is_(True))
    )
    return result.scalar_one_or_none()


async def find_invalid_codes(db: AsyncSession, codes: Iterable[str]) -> List[str]:
    """Return the codes in ``codes`` that do not name an active language, in input order."""
    wanted = list(dict.fromkeys(codes))
    if not wanted:
        return []
    result = await db.execute(
        select(Language.code).where(Language.code.in_(wanted), Language.is_active.is_(True))
    )
    valid = set(result.scalars().all())
    return [code for code in wanted if code not in valid]


async def _clear_default(db: AsyncSession) -> None:
    await db.execute(update(Language).where(Language.is_default.is_(True)).values(is_default=False))


async def create_language(db: AsyncSession, data: LanguageCreate) -> Language:
    if data.is_default and not data.is_active:
        raise InvalidArgument("The default language must be active")

    try:
        if data.is_default:
            await _clear_default(db)
        language = Language(
            code=data.code,
            name=data.name,
            native_name=data.native_name,
            is_active=data.is_active,
            is_default=data.is_default,
        )
        db.add(language)
        await db.flush()
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise InvalidArgument("Language code already exists")
    except Exception:
        await db.rollback()
        raise

    logger.info("Language %s created (default=%s)", language.code, language.is_default)
    return language


async def update_language(db: AsyncSession, language_id: int, data: LanguageUpdate) -> Language:
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise InvalidArgument("No fields to update")

    language = await db.get(Language, language_id)
    if language is None:
        raise NotFound("Language not found")

    if changes.get("is_default") is False and language.is_default:
        raise InvalidArgument("Cannot unset the default language; make another language default instead")
    if changes.get("is_default", language.is_default) and not changes.get("is_active", language.is_active):
        raise InvalidArgument("The default language must be active")

    try:
        if changes.get("is_default"):
            await _clear_default(db)
        await db.execute(update(Language).where(Language.id == language_id).values(**changes))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise InvalidArgument("Language code already exists")
    except Exception:
        await db.rollback()
        raise

    await db.refresh(language)
    return language


async def delete_language(db: AsyncSession, language_id: int) -> None:
    """Delete a non-default language together with every translation keyed by its code."""
    language = await db.get(Language, language_id)
    if language is None:
        raise NotFound("Language not found")
    if language.is_default:
        raise InvalidArgument("Cannot delete default language")

    code = language.code
    try:
        await db.execute(delete(ContentItem).where(ContentItem.language_code == code))
        await db.execute(delete(QuestionContent).where(QuestionContent.language_code == code))
        await db.execute(delete(OptionContent).where(OptionContent.language_code == code))
        await db.execute(delete(Language).where(Language.id == language_id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Language %s deleted with its translations", code)
