"""HTTP client for the spaces API.

Thin async wrapper over httpx. A call succeeds only when the response
is 2xx AND the body says success=true AND the payload has the expected
shape; anything else raises a ClientError carrying the server's message
when there is one. Nothing is retried.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import httpx
from pydantic import ValidationError

from muzer.client.errors import ApiError, NetworkFailure
from muzer.schemas.space import SpaceRead as Space

DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")


@dataclass(frozen=True)
class CreatedSpace:
    message: str
    space: Space


class SpacesClient:
    """Async client for /api/spaces and /api/generate-token.

    Use as an async context manager, or call aclose() when done.
    """

    def __init__(
        self,
        base_url: str,
        session_token: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {}
        if session_token:
            headers["Authorization"] = f"Bearer {session_token}"
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SpacesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ─── Spaces ─────────────────────────────────────────

    async def list_spaces(self) -> list[Space]:
        return await self._request(
            "GET",
            "/api/spaces",
            fallback="Failed to fetch spaces",
            parse=lambda data: [Space.model_validate(s) for s in data.get("spaces") or []],
        )

    async def create_space(self, space_name: str) -> CreatedSpace:
        return await self._request(
            "POST",
            "/api/spaces",
            json={"spaceName": space_name},
            fallback="Failed to create space",
            parse=lambda data: CreatedSpace(
                message=data.get("message") or "Space created",
                space=Space.model_validate(data["space"]),
            ),
        )

    async def delete_space(self, space_id: str) -> str:
        return await self._request(
            "DELETE",
            "/api/spaces/",
            params={"spaceId": space_id},
            fallback="Failed to delete space",
            parse=lambda data: data.get("message") or "Space deleted",
        )

    # ─── Tokens ─────────────────────────────────────────

    async def generate_token(self, creator_id: str) -> str:
        return await self._request(
            "POST",
            "/api/generate-token",
            json={"creatorId": creator_id},
            fallback="Failed to generate token",
            parse=_token_from,
        )

    # ─── Internals ──────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        parse: Callable[[dict[str, Any]], T],
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> T:
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            raise NetworkFailure(str(e) or fallback) from e

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkFailure(f"{fallback}: unreadable response") from e

        if not isinstance(data, dict):
            raise ApiError(fallback, status_code=response.status_code)
        if not response.is_success or not data.get("success"):
            raise ApiError(data.get("message") or fallback, status_code=response.status_code)

        # A success envelope with the wrong shape is still a failed call
        try:
            return parse(data)
        except (KeyError, TypeError, ValidationError) as e:
            raise ApiError(fallback, status_code=response.status_code) from e


def _token_from(data: dict[str, Any]) -> str:
    token = data["token"]
    if not isinstance(token, str) or not token:
        raise TypeError("token must be a non-empty string")
    return token
