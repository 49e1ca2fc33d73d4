"""Pydantic schemas for app tokens."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GenerateTokenRequest(BaseModel):
    creator_id: Optional[str] = Field(default=None, alias="creatorId")


class TokenResponse(BaseModel):
    success: bool = True
    token: str


class AppTokenClaims(BaseModel):
    """Decoded, verified contents of an app token."""

    user_id: str = Field(alias="userId")
    creator_id: str = Field(alias="creatorId")
    issued_at: datetime = Field(alias="iat")
    expires_at: datetime = Field(alias="exp")
