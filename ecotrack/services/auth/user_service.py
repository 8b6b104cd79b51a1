"""
User registration and login.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.exceptions import AuthenticationError, ConflictError, InputError
from ecotrack.core.security import PasswordHasher
from ecotrack.database.repositories import UserRepository
from ecotrack.database.schemas import UserDBModel
from ecotrack.utils.validators import check_password, is_valid_email, sanitize_input

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return sanitize_input((email or "").strip().lower())


class UserService:
    """Creates accounts and checks credentials."""

    def __init__(self, session: AsyncSession, password_hasher: PasswordHasher):
        self.session = session
        self.password_hasher = password_hasher
        self.user_repo = UserRepository(session)

    async def register(
        self, email: str, password: str, name: Optional[str] = None
    ) -> UserDBModel:
        """
        Create a user account.

        Raises:
            InputError: If the email is malformed or the password is weak
            ConflictError: If the email is already registered
        """
        email = normalize_email(email)
        password = (password or "").strip()
        if not email or not password:
            raise InputError("Email and password required")

        if not is_valid_email(email):
            raise InputError("Please provide a valid email address")

        password_check = check_password(password)
        if not password_check.is_valid:
            raise InputError(
                "Password does not meet security requirements",
                details=password_check.feedback,
            )
        if password_check.is_common:
            raise InputError(
                "This password is too common and easily guessable. "
                "Please choose a stronger password."
            )

        if await self.user_repo.get_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        name = sanitize_input((name or "").strip()) or email.split("@")[0]
        try:
            user = await self.user_repo.create(
                email=email,
                password_hash=self.password_hasher.hash(password),
                name=name,
            )
            await self.session.commit()
        except IntegrityError as e:
            # lost a race with a concurrent registration for the same email
            await self.session.rollback()
            raise ConflictError("User with this email already exists") from e

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> UserDBModel:
        """
        Check credentials.

        Raises:
            InputError: If either field is missing or the email is malformed
            AuthenticationError: If the email is unknown or the password is wrong
        """
        email = normalize_email(email)
        password = (password or "").strip()
        if not email or not password:
            raise InputError("Email and password required")

        if not is_valid_email(email):
            raise InputError("Invalid email format")

        user = await self.user_repo.get_by_email(email)
        if user is None or not self.password_hasher.verify(password, user.password_hash):
            logger.info(f"Failed login for {email}")
            raise AuthenticationError("Invalid email or password")

        return user
