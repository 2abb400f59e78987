"""Credential store: registration and login with password hashing."""

from __future__ import annotations

import structlog
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from assessmenttasks.core.auth import create_access_token
from assessmenttasks.core.config import get_settings
from assessmenttasks.domain.services.errors import PersistenceError
from assessmenttasks.infrastructure.db.models import UserModel

logger = structlog.get_logger()

# bcrypt at cost 10 unless BCRYPT_ROUNDS says otherwise
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


class AuthError(Exception):
    """Base exception for authentication errors."""


class InvalidCredentialsError(AuthError):
    """Raised when login credentials are invalid.

    Unknown email and wrong password share this error and its message.
    """


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def register_user(
        self, *, username: str | None, password: str, email: str | None
    ) -> str:
        """Persist a new user and return its identifier."""
        await logger.ainfo("register_attempt", email=email)

        user = UserModel(
            username=username,
            email=email,
            hashed_password=hash_password(password),
        )

        try:
            self.session.add(user)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            await logger.aerror("register_failed", email=email, exc_info=exc)
            raise PersistenceError("Could not store user") from exc

        await logger.ainfo("register_success", user_id=user.id, email=email)
        return user.id

    async def login(self, *, email: str, password: str) -> str:
        """Authenticate by email and password, returning a signed access token."""
        await logger.ainfo("login_attempt", email=email)

        stmt = (
            select(UserModel)
            .where(UserModel.email == email)
            .order_by(UserModel.created_at, UserModel.id)
            .limit(1)
        )
        try:
            user = await self.session.scalar(stmt)
        except SQLAlchemyError as exc:
            await logger.aerror("login_lookup_failed", email=email, exc_info=exc)
            raise PersistenceError("Could not read user") from exc

        if user is None:
            await logger.awarning("login_user_not_found", email=email)
            raise InvalidCredentialsError("Invalid email or password")

        if not verify_password(password, user.hashed_password):
            await logger.awarning("login_invalid_password", email=email)
            raise InvalidCredentialsError("Invalid email or password")

        token = create_access_token(user.id, email=user.email)

        await logger.ainfo("login_success", user_id=user.id, email=email)
        return token
