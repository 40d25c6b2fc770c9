import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from homefinder.api.responses import create_error_response
from homefinder.core.config import Settings, get_settings
from homefinder.models.user import User
from homefinder.services.personalization import PersonalizationService
from homefinder.services.store import PropertyStore

logger = logging.getLogger(__name__)

settings = get_settings()

security = HTTPBearer(auto_error=False)

def get_app_settings(request: Request) -> Settings:
    """Settings the app factory was built with."""
    return request.app.state.settings

AppSettings = Annotated[Settings, Depends(get_app_settings)]

def get_store(request: Request) -> PropertyStore:
    """The process-wide store built by the app factory."""
    return request.app.state.store

Store = Annotated[PropertyStore, Depends(get_store)]

def get_personalization_service(
    store: Store,
    app_settings: AppSettings,
) -> PersonalizationService:

    return PersonalizationService(store, settings=app_settings)

Personalization = Annotated[PersonalizationService, Depends(get_personalization_service)]

def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.jwt_access_token_expire_minutes
        )

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

def decode_token(token: str) -> dict[str, Any] | None:

    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

async def get_current_user(
    store: Store,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security)
    ] = None,
) -> User:
    """
    Dependency to get the current authenticated user.

    Args:
        store: Property store used to load the user
        credentials: HTTP Bearer credentials

    Returns:
        The authenticated User object

    Raises:
        HTTPException: If authentication fails
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=create_error_response(
            code="AUTH_REQUIRED",
            message="Could not validate credentials",
        ),
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    subject = payload.get("sub")
    if subject is None:
        raise credentials_exception

    try:
        user_id = UUID(str(subject))
    except ValueError:
        raise credentials_exception

    user = await store.get_user(user_id)
    if user is None:
        logger.warning(f"Token subject {user_id} does not match any user")
        raise credentials_exception

    return user

CurrentUser = Annotated[User, Depends(get_current_user)]

async def get_diagnostics_user(
    current_user: CurrentUser,
    app_settings: AppSettings,
) -> User:
    """Match diagnostics are limited to admins, or anyone in debug mode."""
    if app_settings.debug or current_user.is_admin:
        return current_user

    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=create_error_response(
            code="FORBIDDEN",
            message="Diagnostics are restricted to administrators",
        ),
    )

DiagnosticsUser = Annotated[User, Depends(get_diagnostics_user)]
