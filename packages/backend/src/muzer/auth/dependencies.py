"""FastAPI auth dependencies: the session guard.

Identity resolution goes through an injectable IdentityResolver rather
than a process-wide session store. The default resolver reads a session
JWT from the session cookie or an Authorization: Bearer header; tests
and other deployments swap it via app.dependency_overrides[get_identity_resolver].
"""

from dataclasses import dataclass
from typing import Optional, Protocol

import structlog
from fastapi import Depends, Request

from muzer.auth.jwt import TokenError, verify_session_token
from muzer.config import settings
from muzer.errors import Unauthorized

logger = structlog.get_logger()


@dataclass(frozen=True)
class Identity:
    """The authenticated user making the request."""

    user_id: str


class IdentityResolver(Protocol):
    async def resolve_identity(self, request: Request) -> Optional[Identity]:
        """Return the caller's identity, or None if there is no valid session."""
        ...


class SessionIdentityResolver:
    """Resolve identity from a signed session token.

    Tries the session cookie first, then the Bearer header; the first
    token that verifies wins. A request whose tokens all fail
    verification has no session.
    """

    def __init__(self, cookie_name: Optional[str] = None):
        self.cookie_name = cookie_name or settings.session_cookie_name

    async def resolve_identity(self, request: Request) -> Optional[Identity]:
        for source, token in self._candidate_tokens(request):
            try:
                payload = verify_session_token(token)
            except TokenError as e:
                logger.info("session.rejected", source=source, reason=str(e))
                continue
            return Identity(user_id=str(payload["sub"]))
        return None

    def _candidate_tokens(self, request: Request) -> list[tuple[str, str]]:
        candidates = []
        cookie = request.cookies.get(self.cookie_name)
        if cookie:
            candidates.append(("cookie", cookie))
        authorization = request.headers.get("authorization", "")
        if authorization.startswith("Bearer "):
            bearer = authorization[7:].strip()
            if bearer:
                candidates.append(("bearer", bearer))
        return candidates


_default_resolver = SessionIdentityResolver()


def get_identity_resolver() -> IdentityResolver:
    """FastAPI dependency: the resolver used by the session guard."""
    return _default_resolver


async def get_current_identity_optional(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Optional[Identity]:
    """Soft auth: None when the caller has no valid session."""
    return await resolver.resolve_identity(request)


async def get_current_identity(
    identity: Optional[Identity] = Depends(get_current_identity_optional),
) -> Identity:
    """Hard auth: 401 before the route body runs if there is no session."""
    if identity is None:
        raise Unauthorized()
    return identity
