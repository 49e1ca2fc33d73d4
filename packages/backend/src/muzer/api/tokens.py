"""App token API.

POST /generate-token {creatorId} → {success, token}

Order of checks: session (401), then body (400), then generation (500).
Generation failures are logged in full but reported generically.
"""

import structlog
from fastapi import APIRouter, Depends, Request

from muzer.api._body import parse_body
from muzer.auth.dependencies import Identity, get_current_identity
from muzer.errors import InternalError, MuzerError
from muzer.schemas.token import GenerateTokenRequest, TokenResponse
from muzer.services.token_service import TokenIssuer

logger = structlog.get_logger()

router = APIRouter()


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer()


@router.post("/generate-token", response_model=TokenResponse)
async def generate_token(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    body = await parse_body(request, GenerateTokenRequest)
    try:
        token = issuer.issue(user_id=identity.user_id, creator_id=body.creator_id)
    except MuzerError:
        raise
    except Exception:
        logger.exception(
            "token.generation_failed",
            user_id=identity.user_id,
            creator_id=body.creator_id,
        )
        raise InternalError("Failed to generate token")

    logger.info(
        "token.generated", user_id=identity.user_id, creator_id=body.creator_id
    )
    return TokenResponse(token=token)
