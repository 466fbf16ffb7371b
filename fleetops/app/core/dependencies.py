"""
Authentication dependencies for FastAPI.

This module resolves the calling user from the identity provider token,
sent either as a bearer token or in the session cookie.
"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from fleetops.app.core.config import settings
from fleetops.app.core.exceptions import DuplicateResourceError
from fleetops.app.core.jwt import decode_identity_token
from fleetops.app.db.session import get_db
from fleetops.app.models.enums import UserRole
from fleetops.app.models.user import User
from fleetops.app.services.audit import log_event, AuditAction

logger = logging.getLogger("fleetops.auth")

# HTTP Bearer security scheme (cookie sessions are accepted too)
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """Return the bearer token, falling back to the session cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


async def provision_user(db: AsyncSession, payload: dict) -> User:
    """
    Create a local user for a subject seen for the first time.

    New users always start with the driver role; admins promote them.
    An email already held by another user is rejected with a 400.
    """
    metadata = payload.get("user_metadata") or {}
    email = payload.get("email")
    if email:
        taken = await db.execute(select(User.id).where(User.email == email))
        if taken.scalar_one_or_none() is not None:
            logger.warning("Refusing to provision %s: email already in use", payload["sub"])
            raise DuplicateResourceError("User", "email", email)

    user = User(
        id=payload["sub"],
        email=email,
        first_name=metadata.get("first_name"),
        last_name=metadata.get("last_name"),
        profile_image_url=metadata.get("avatar_url"),
        role=UserRole.DRIVER,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateResourceError("User", "email", email)
    await db.refresh(user)
    logger.info("Provisioned user %s from identity token", user.id)

    await log_event(
        db=db,
        action=AuditAction.USER_PROVISIONED,
        actor=user,
        target_id=user.id,
        metadata={"email": user.email}
    )
    return user


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    FastAPI dependency resolving the authenticated user.

    Checks:
    1. A token is present (bearer header or session cookie)
    2. Token signature, expiry and audience are valid
    3. The subject maps to a local user (provisioned on first sight)
    4. The user is still active

    Returns:
        The User row of the caller

    Raises:
        HTTPException: 401 if authentication fails, 403 if user is inactive
    """
    token = extract_token(request, credentials)
    if not token:
        raise _unauthorized()

    # 1. Decode and validate JWT
    payload = decode_identity_token(token)
    if payload is None:
        raise _unauthorized("Could not validate credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token payload")

    # 2. Look up (or provision) the local user
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        if not settings.auto_provision_users:
            raise _unauthorized("User not found")
        user = await provision_user(db, payload)

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    return user
