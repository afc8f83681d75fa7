"""Account service: signup, login and account lifecycle."""

import asyncio
from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    DuplicateKeyError,
    EmailTakenError,
    InvalidCredentialsError,
    UserNotFoundError,
    UsernameTakenError,
)
from core.security import hash_password, verify_password
from domain.entities.user import User, normalize_email, validate_password
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class AuthService:
    """Service layer for account creation and credential checks.

    Token issuing belongs to the auth provider; this service only answers
    "who is this" and "are these credentials right".
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def signup(self, username: str, email: str, password: str) -> User:
        """Register a new account.

        Email is checked before username, so a request colliding on both
        reports the email conflict.
        """
        validate_password(password)
        user = User.create(username=username, email=email, password_hash="")

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(user.email):
                raise EmailTakenError(user.email)
            if await uow.users.get_by_username(user.username):
                raise UsernameTakenError(user.username)

            # bcrypt is CPU-bound; keep it off the event loop
            user.password_hash = await asyncio.to_thread(hash_password, password)

            try:
                created = await uow.users.create(user)
            except DuplicateKeyError as e:
                if e.key == "username":
                    raise UsernameTakenError(user.username) from e
                raise EmailTakenError(user.email) from e
            await uow.commit()

        logger.info("user_signed_up", user_id=str(created.id), username=created.username)
        return created

    async def login(self, identifier: str, password: str) -> User:
        """Authenticate with an email or a username plus password."""
        identifier = identifier.strip()
        async with self._uow_factory() as uow:
            user = None
            if "@" in identifier:
                user = await uow.users.get_by_email(normalize_email(identifier))
            if user is None:
                user = await uow.users.get_by_username(identifier)

        if user is None:
            logger.info("login_failed", reason="unknown_user")
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info("login_failed", reason="bad_password", user_id=str(user.id))
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=str(user.id))
        return user

    async def get_user(self, user_id: UUID) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    async def account_exists(self, user_id: UUID) -> bool:
        async with self._uow_factory() as uow:
            return await uow.users.get(user_id) is not None

    async def get_by_username(self, username: str) -> User:
        """Get a user by username."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_username(username)
            if not user:
                raise UserNotFoundError(username)
            return user

    async def delete_account(self, user_id: UUID) -> None:
        """Delete an account and, through FK cascades, everything it owns."""
        async with self._uow_factory() as uow:
            deleted = await uow.users.delete(user_id)
            if not deleted:
                raise UserNotFoundError(str(user_id))
            await uow.commit()

        logger.info("user_deleted", user_id=str(user_id))
