import secrets
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import Forbidden, Unauthorized
from app.db.base_class import utcnow
from app.db.session import get_db
from app.models.user import AuthToken, User

bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> tuple[str, datetime]:
    """Sign ``data`` into a JWT; returns the token and its naive UTC expiry."""
    expires_at = utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = data.copy()
    # jti keeps two tokens issued in the same second distinct
    to_encode.update({"exp": expires_at, "iat": utcnow(), "jti": secrets.token_hex(8)})
    token = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token, expires_at


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


async def issue_token(db: AsyncSession, user: User) -> str:
    """Store a fresh token for ``user``; the user's expired tokens are dropped on the way."""
    await db.execute(delete(AuthToken).where(AuthToken.user_id == user.id, AuthToken.expires_at <= utcnow()))
    token, expires_at = create_access_token(
        data={"sub": str(user.id), "username": user.username, "role": user.role}
    )
    db.add(AuthToken(user_id=user.id, token=token, expires_at=expires_at))
    return token


async def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Access token required")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_current_token),
    db: AsyncSession = Depends(get_db),
) -> User:
    try:
        payload = decode_access_token(token)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise Forbidden("Invalid or expired token")

    result = await db.execute(
        select(AuthToken).where(AuthToken.token == token, AuthToken.expires_at > utcnow())
    )
    if result.scalar_one_or_none() is None:
        raise Forbidden("Token has been revoked")

    user = await db.get(User, user_id)
    if user is None:
        raise Forbidden("Token has been revoked")
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise Forbidden("Admin access required")
    return current_user
