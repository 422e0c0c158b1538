"""User domain service: register, login.

All DB operations use the injected AsyncSession. Self-deletion lives in
src/tf_cascade because it spans every collection the user owns.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_common.errors import EmailExistsError, InvalidCredentialsError
from src.tf_gateway.auth.jwt_handler import create_access_token
from src.tf_gateway.auth.password import hash_password, verify_password
from src.tf_gateway.user.db_models import UserModel

logger = logging.getLogger("tf.auth")

# Checked against when the email is unknown so both failure paths pay for bcrypt.
_DUMMY_HASH = hash_password("dummy-password-for-timing")


class UserService:
    """Stateless service — instantiate once, reuse across requests."""

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str]:
        """Create a user and return (user, access_token).

        A duplicate email raises EmailExistsError before anything is written;
        the DB UNIQUE constraint is the final guard against concurrent signups.
        """
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        if result.scalar_one_or_none() is not None:
            raise EmailExistsError()

        user = UserModel(
            name=name,
            email=email,
            password_hash=hash_password(password),
        )
        db.add(user)
        try:
            await db.flush()
            await db.refresh(user)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise EmailExistsError() from None
        except Exception:
            await db.rollback()
            raise

        logger.info("Registered user %s", user.id)
        return user, create_access_token(str(user.id))

    async def login(
        self,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str]:
        """Authenticate user and return (user, access_token).

        Unknown email and wrong password both raise InvalidCredentialsError.
        """
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        user = result.scalar_one_or_none()

        if user is None:
            verify_password(password, _DUMMY_HASH)
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user, create_access_token(str(user.id))
