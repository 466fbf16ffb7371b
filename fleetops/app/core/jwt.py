"""
JWT utilities for identity provider tokens.

Tokens are issued by the external identity service and signed with a
shared secret; this module verifies them and can mint equivalent tokens
for local development and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fleetops.app.core.config import settings


def create_identity_token(
    subject: str,
    email: Optional[str] = None,
    user_metadata: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a token shaped like the ones the identity provider issues.

    Args:
        subject: User id at the identity provider (becomes ``sub``)
        email: Optional email claim
        user_metadata: Optional profile claims (first_name, last_name, avatar_url)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string

    Example payload:
        {
            "sub": "5c1f...",
            "email": "driver@example.com",
            "aud": "authenticated",
            "user_metadata": {"first_name": "Ana"},
            "exp": 1234567890
        }
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode: Dict[str, Any] = {
        "sub": subject,
        "exp": expire,
        "user_metadata": user_metadata or {},
    }
    if email:
        to_encode["email"] = email
    if settings.identity_jwt_audience:
        to_encode["aud"] = settings.identity_jwt_audience

    return jwt.encode(to_encode, settings.identity_jwt_secret, algorithm=settings.identity_jwt_algorithm)


def decode_identity_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and validate an identity provider token.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload if valid, None otherwise
    """
    try:
        return jwt.decode(
            token,
            settings.identity_jwt_secret,
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_jwt_audience,
            options={"verify_aud": settings.identity_jwt_audience is not None},
        )
    except JWTError:
        return None
