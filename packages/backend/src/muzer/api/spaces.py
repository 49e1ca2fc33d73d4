"""Spaces API routes.

- GET    /spaces               → the caller's spaces
- GET    /spaces?spaceId=<id>  → host of one space
- POST   /spaces               → create {spaceName}
- DELETE /spaces/?spaceId=<id> → delete one of the caller's spaces

Every route requires a session. Each path is also registered with a
trailing slash: clients call DELETE /api/spaces/?spaceId=..., and a
307 redirect would not be followed by most HTTP clients.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from muzer.api._body import parse_body
from muzer.auth.dependencies import Identity, get_current_identity
from muzer.db.engine import get_db
from muzer.errors import BadRequest, Forbidden, NotFound
from muzer.schemas.space import (
    MessageResponse,
    SpaceCreate,
    SpaceCreatedResponse,
    SpaceHostResponse,
    SpaceListResponse,
    SpaceRead,
)
from muzer.services.space_service import SpaceService

router = APIRouter()

MAX_SPACE_NAME = 100


def _svc(db: AsyncSession = Depends(get_db)) -> SpaceService:
    return SpaceService(db)


@router.get(
    "/spaces",
    response_model=Union[SpaceListResponse, SpaceHostResponse],
)
@router.get(
    "/spaces/",
    response_model=Union[SpaceListResponse, SpaceHostResponse],
    include_in_schema=False,
)
async def list_spaces(
    space_id: Optional[str] = Query(None, alias="spaceId"),
    identity: Identity = Depends(get_current_identity),
    svc: SpaceService = Depends(_svc),
):
    """List the caller's spaces, or look up the host of one space."""
    if space_id:
        space = await svc.get_space(space_id)
        if not space:
            raise NotFound("Space not found")
        return SpaceHostResponse(host_id=space.host_id)

    spaces = await svc.list_spaces(identity.user_id)
    return SpaceListResponse(
        spaces=[SpaceRead.model_validate(s) for s in spaces]
    )


@router.post("/spaces", response_model=SpaceCreatedResponse, status_code=201)
@router.post(
    "/spaces/",
    response_model=SpaceCreatedResponse,
    status_code=201,
    include_in_schema=False,
)
async def create_space(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    svc: SpaceService = Depends(_svc),
):
    """Create a space hosted by the caller."""
    body = await parse_body(request, SpaceCreate)
    name = (body.space_name or "").strip()
    if not name:
        raise BadRequest("Space name is required")
    if len(name) > MAX_SPACE_NAME:
        raise BadRequest(f"Space name must be at most {MAX_SPACE_NAME} characters")

    space = await svc.create_space(name=name, host_id=identity.user_id)
    return SpaceCreatedResponse(
        message="Space created successfully",
        space=SpaceRead.model_validate(space),
    )


@router.delete("/spaces", response_model=MessageResponse)
@router.delete("/spaces/", response_model=MessageResponse, include_in_schema=False)
async def delete_space(
    space_id: Optional[str] = Query(None, alias="spaceId"),
    identity: Identity = Depends(get_current_identity),
    svc: SpaceService = Depends(_svc),
):
    """Delete one of the caller's spaces."""
    if not space_id:
        raise BadRequest("Space Id is required")

    space = await svc.get_space(space_id)
    if not space:
        raise NotFound("Space not found")
    if space.host_id != identity.user_id:
        raise Forbidden("You are not authorized to delete this space")

    await svc.delete_space(space)
    return MessageResponse(message="Space deleted successfully")
