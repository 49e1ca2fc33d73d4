"""Token issuer: app tokens binding a user to a creator.

The user id always comes from the resolved session identity; only the
creator id comes from the caller. Tokens are stateless JWTs: nothing is
stored, there is no revocation, and they expire after
settings.app_token_expire_minutes.
"""

from typing import Optional

from muzer.auth.jwt import decode_app_token, encode_app_token
from muzer.errors import BadRequest
from muzer.schemas.token import AppTokenClaims


class TokenIssuer:
    """Issue and verify app tokens."""

    def __init__(self, expires_minutes: Optional[int] = None):
        self.expires_minutes = expires_minutes

    def issue(self, user_id: str, creator_id: Optional[str]) -> str:
        """Create an app token for (user_id, creator_id).

        Raises BadRequest when creator_id is missing or empty.
        """
        if not creator_id:
            raise BadRequest("Missing creatorId")
        return encode_app_token(
            user_id=user_id,
            creator_id=creator_id,
            expires_minutes=self.expires_minutes,
        )

    def verify(self, token: str) -> AppTokenClaims:
        """Decode a token issued by issue(). Raises TokenError if invalid."""
        return AppTokenClaims.model_validate(decode_app_token(token))
