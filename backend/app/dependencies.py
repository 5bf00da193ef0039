"""Bearer-token handling and the FastAPI dependencies built on it."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import get_session
from .models import User
from .schemas import Token, TokenData, compute_expiry

JWT_ALGORITHM = "HS256"

# Plain bearer tokens; the client never uses the OAuth2 password form
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an AsyncSession."""
    async for session in get_session():
        yield session


def issue_access_token(user: User) -> Token:
    """Sign a token carrying the user's id, name and account."""

    settings = get_settings()
    expires_at = compute_expiry(settings.access_token_expires_minutes)
    claims = {
        "uid": user.id,
        "username": user.username,
        "account_id": user.account_id,
        "iat": int(datetime.now(timezone.utc).timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    encoded = jwt.encode(claims, settings.secret_key, algorithm=JWT_ALGORITHM)
    return Token(access_token=encoded, expires_at=expires_at)


def decode_access_token(token: str) -> TokenData:
    """Verify signature and expiry; raises jwt.PyJWTError or ValueError."""

    claims = jwt.decode(token, get_settings().secret_key, algorithms=[JWT_ALGORITHM])
    return TokenData(**claims)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve ``Authorization: Bearer <token>`` to an active user, else 401."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")

    try:
        token_data = decode_access_token(credentials.credentials)
    except (jwt.PyJWTError, ValueError) as exc:
        raise _unauthorized("Could not validate credentials") from exc

    user = (
        await session.execute(
            select(User).where(
                User.id == token_data.uid,
                User.account_id == token_data.account_id,
            )
        )
    ).scalar_one_or_none()
    if user is None or not user.is_active:
        raise _unauthorized("Inactive or missing user")
    return user
