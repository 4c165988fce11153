"""
Business logic for users.

Handles customer registration and username/password authentication.
Admin accounts are not created here; the ``admin`` user is seeded by
``core.store.init_store``.
"""

import logging
from typing import Optional

from ..core.errors import ValidationFailed
from ..core.security import hash_password, verify_password
from ..core.store import get_ledger
from ..models import User

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


class UserService:
    """Service for registering and authenticating users."""

    @classmethod
    async def register(cls, username: str, password: str) -> User:
        """Create a new customer account.

        Raises ``ValidationFailed`` when the username is shorter than 3
        characters, the password shorter than 6, or the username is taken.
        """
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationFailed(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        ledger = get_ledger()
        # Hash outside the lock, then re-check uniqueness inside it.
        hashed = hash_password(password)
        with ledger.transaction():
            if ledger.find_user_by_username(username):
                raise ValidationFailed("Username is already taken")
            user = ledger.add_user(username, hashed, role="customer")
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    @classmethod
    async def authenticate(cls, username: str, password: str) -> Optional[User]:
        """Return the user if the credentials match, otherwise ``None``."""
        user = get_ledger().find_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.info("Failed login for username %s", username)
            return None
        return user
