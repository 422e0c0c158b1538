"""FastAPI dependency: get_current_user.

Usage in any protected router:
    from src.tf_gateway.auth.dependencies import CurrentUser

    @router.get("/protected")
    async def protected(current_user: CurrentUser):
        ...

The resolved user is handed to each handler as an explicit parameter;
nothing is stored on the request object.
"""

import logging
import uuid
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_common.database import get_db_session
from src.tf_common.errors import (
    InvalidTokenError,
    NotAuthenticatedError,
    UserNoLongerExistsError,
)
from src.tf_gateway.auth.jwt_handler import decode_token
from src.tf_gateway.user.db_models import UserModel

logger = logging.getLogger("tf.auth")

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button).
# auto_error=False so a missing header maps to NotAuthenticatedError.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> UserModel:
    """Extract and validate the JWT Bearer token, return the UserModel.

    Raises NotAuthenticatedError when no Bearer token is sent,
    InvalidTokenError when it is malformed, tampered with or expired, and
    UserNoLongerExistsError when its user was deleted after issuance.
    """
    if not token:
        raise NotAuthenticatedError()

    payload = decode_token(token)

    sub = payload.get("sub")
    if not sub:
        raise InvalidTokenError()
    try:
        user_id = uuid.UUID(str(sub))
    except ValueError:
        raise InvalidTokenError() from None

    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        logger.info("Rejected token for deleted user %s", user_id)
        raise UserNoLongerExistsError()

    return user


CurrentUser = Annotated[UserModel, Depends(get_current_user)]
