"""JWT creation and verification.

Two kinds of token, signed with separate secrets:
- Session token: proves who the caller is. Minted by the auth provider
  integration, carried in the session cookie or a Bearer header.
- App token: issued by POST /api/generate-token. Binds the session
  user to a creator; verified downstream, never stored.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from muzer.config import settings

SESSION_TOKEN_TYPE = "session"
APP_TOKEN_TYPE = "app"


class TokenError(Exception):
    """Raised when token creation/verification fails."""


def create_session_token(
    user_id: str,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a session JWT for user_id."""
    if expires_minutes is None:
        expires_minutes = settings.session_expire_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "type": SESSION_TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str) -> dict:
    """Verify and decode a session JWT.

    Returns the payload dict on success.
    Raises TokenError on failure.
    """
    payload = _decode(token, settings.session_secret)
    if payload.get("type") != SESSION_TOKEN_TYPE or not payload.get("sub"):
        raise TokenError("Not a session token")
    return payload


def encode_app_token(
    user_id: str,
    creator_id: str,
    expires_minutes: Optional[int] = None,
) -> str:
    if expires_minutes is None:
        expires_minutes = settings.app_token_expire_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "creatorId": creator_id,
        "type": APP_TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.app_token_secret, algorithm=settings.jwt_algorithm)


def decode_app_token(token: str) -> dict:
    payload = _decode(token, settings.app_token_secret)
    if payload.get("type") != APP_TOKEN_TYPE:
        raise TokenError("Not an app token")
    return payload


def _decode(token: str, secret: str) -> dict:
    try:
        return jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")
