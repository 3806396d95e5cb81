"""Admin users, bearer token sessions and dashboard counts."""
import logging
from typing import List

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidArgument, NotFound, Unauthorized
from app.core.security import get_password_hash, issue_token, verify_password
from app.db.base_class import utcnow
from app.models.language import Language
from app.models.quiz import Question, Quiz
from app.models.quiz_answer import UserAnswer
from app.models.quiz_friend import QuizFriend
from app.models.quiz_session import QuizSession
from app.models.user import AuthToken, User
from app.schemas.auth import UserCreate

logger = logging.getLogger(__name__)


async def authenticate(db: AsyncSession, username: str, password: str) -> tuple[User, str]:
    """Check credentials (username or email) and issue a stored bearer token."""
    result = await db.execute(select(User).where(or_(User.username == username, User.email == username)))
    user = result.scalars().first()
    if user is None or not verify_password(password, user.password):
        logger.info("Failed login for %s", username)
        raise Unauthorized("Invalid credentials")

    try:
        user.last_login = utcnow()
        token = await issue_token(db, user)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("User %s logged in", user.username)
    return user, token


async def revoke_token(db: AsyncSession, token: str) -> None:
    await db.execute(delete(AuthToken).where(AuthToken.token == token))
    await db.commit()


async def refresh_token(db: AsyncSession, user: User, old_token: str) -> str:
    try:
        await db.execute(delete(AuthToken).where(AuthToken.token == old_token))
        token = await issue_token(db, user)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return token


async def list_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    user = User(
        username=data.username,
        email=data.email,
        password=get_password_hash(data.password),
        role=data.role,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise InvalidArgument("Username or email already exists")
    except Exception:
        await db.rollback()
        raise

    logger.info("User %s created with role %s", user.username, user.role)
    return user


async def delete_user(db: AsyncSession, user_id: int, current_user: User) -> None:
    if user_id == current_user.id:
        raise InvalidArgument("Cannot delete your own account")

    result = await db.execute(delete(User).where(User.id == user_id))
    if result.rowcount == 0:
        raise NotFound("User not found")
    await db.commit()


async def dashboard_stats(db: AsyncSession) -> dict:
    async def count(stmt) -> int:
        return int(await db.scalar(stmt) or 0)

    return {
        "total_users": await count(select(func.count(User.id))),
        "total_languages": await count(select(func.count(Language.id))),
        "total_quizzes": await count(select(func.count(Quiz.id))),
        "total_questions": await count(select(func.count(Question.id))),
        "active_sessions": await count(
            select(func.count(QuizSession.id)).where(QuizSession.is_active.is_(True))
        ),
        "total_friends": await count(
            select(func.count(QuizFriend.id)).where(QuizFriend.is_active.is_(True))
        ),
        "total_answers": await count(select(func.count(UserAnswer.id))),
    }
