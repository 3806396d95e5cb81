import logging
import secrets
import string
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.core.errors import InternalError
from app.models.quiz_session import QuizSession, SESSION_ID_LENGTH

logger = logging.getLogger(__name__)

SESSION_ID_ALPHABET = string.ascii_uppercase + string.digits
MAX_SESSION_ID_ATTEMPTS = 10


def generate_session_token(length: int = SESSION_ID_LENGTH) -> str:
    return "".join(secrets.choice(SESSION_ID_ALPHABET) for _ in range(length))


async def generate_unique_session_id(db: AsyncSession) -> str:
    """Generate an 8-character uppercase alphanumeric id no session uses yet."""
    for attempt in range(1, MAX_SESSION_ID_ATTEMPTS + 1):
        code = generate_session_token()

        stmt = select(QuizSession.id).where(QuizSession.unique_id == code)
        result = await db.execute(stmt)
        if result.scalar_one_or_none() is None:
            return code
        logger.warning("Session id collision on attempt %d", attempt)

    raise InternalError("Could not allocate a unique session id")
