"""Authentication routes: register, login, session pull, logout, refresh."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .dependencies import get_current_user, get_db_session, issue_access_token
from .models import User
from .schemas import Token, UserCreate, UserLogin, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# PBKDF2-SHA256 avoids the bcrypt backend issues
password_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return password_context.verify(password, password_hash)


async def _find_user(session: AsyncSession, username: str, account_id: str) -> User | None:
    result = await session.execute(
        select(User).where(User.username == username, User.account_id == account_id)
    )
    return result.scalar_one_or_none()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: UserCreate, session: AsyncSession = Depends(get_db_session)
) -> User:
    """Create a user; usernames are unique within an account."""

    if await _find_user(session, payload.username, payload.account_id) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )

    user = User(
        username=payload.username,
        account_id=payload.account_id,
        email=payload.email or "",
        password_hash=hash_password(payload.password),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info("Registered user %s in account %s", user.username, user.account_id)
    return user


@router.post("/login", response_model=Token)
async def login(
    payload: UserLogin, session: AsyncSession = Depends(get_db_session)
) -> Token:
    user = await _find_user(session, payload.username, payload.account_id)
    if user is None or not user.is_active or not verify_password(payload.password, user.password_hash):
        logger.info("Rejected login for %s in account %s", payload.username, payload.account_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return issue_access_token(user)


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: User = Depends(get_current_user)) -> User:
    """Return the principal behind the bearer token (session pull)."""

    return current_user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(current_user: User = Depends(get_current_user)) -> Response:
    """Acknowledge a sign-out. Tokens are stateless; the client drops its copy."""

    logger.info("User %s signed out", current_user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/refresh", response_model=Token)
async def refresh_token(current_user: User = Depends(get_current_user)) -> Token:
    """Issue a fresh token for a still-valid session."""

    return issue_access_token(current_user)
