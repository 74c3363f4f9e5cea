"""Authentication boundary.

Sessions are issued by an external identity provider as bearer JWTs whose
``sub`` claim is the user id. Every board route depends on ``CurrentUser``,
so unauthenticated requests are rejected before any handler runs.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from kanbanhub.api.contracts import api, route
from kanbanhub.config import get_settings
from kanbanhub.db.session import get_db_session
from kanbanhub.models.user import User

router = APIRouter()
logger = structlog.get_logger()
settings = get_settings()
security = HTTPBearer(auto_error=False)

DEV_TOKEN = "dev-token-for-testing"
DEV_USER_ID = "dev-user"


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token for ``user_id``."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    )
    to_encode = {
        "sub": user_id,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _get_or_create_dev_user(db: AsyncSession) -> User:
    user = await db.get(User, DEV_USER_ID)
    if user is None:
        user = User(
            id=DEV_USER_ID,
            email="dev@kanbanhub.local",
            display_name="Dev User",
        )
        db.add(user)
        await db.commit()
        logger.info("Created dev user", user_id=DEV_USER_ID)
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """Get the current authenticated user from the bearer token."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    # Dev token bypass for local development
    if credentials.credentials == DEV_TOKEN and settings.environment == "development":
        return await _get_or_create_dev_user(db)

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        raise _unauthorized("Invalid token")

    user_id = payload.get("sub")
    if user_id is None or payload.get("type") != "access":
        raise _unauthorized("Invalid token")

    user = await db.get(User, str(user_id))
    if user is None:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return user


# Type alias for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]


@route(router, api.auth["me"])
async def get_current_user_info(current_user: CurrentUser) -> User:
    """Return the authenticated caller."""
    return current_user
