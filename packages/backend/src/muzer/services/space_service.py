"""Space service: business logic for the spaces collection.

API routes call the service, the service calls the database. Routes
own HTTP concerns (status codes, ownership errors); the service only
knows about rows.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from muzer.db.models import Space

logger = structlog.get_logger()


class SpaceService:
    """Business logic for spaces."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_spaces(self, host_id: str) -> list[Space]:
        """All spaces hosted by host_id, oldest first."""
        result = await self.db.execute(
            select(Space)
            .where(Space.host_id == host_id)
            .order_by(Space.created_at, Space.id)
        )
        return list(result.scalars().all())

    async def get_space(self, space_id: str) -> Space | None:
        return await self.db.get(Space, space_id)

    async def create_space(self, name: str, host_id: str) -> Space:
        space = Space(name=name, host_id=host_id, is_active=True)
        self.db.add(space)
        await self.db.commit()
        await self.db.refresh(space)
        logger.info("spaces.created", space_id=space.id, host_id=host_id)
        return space

    async def delete_space(self, space: Space) -> None:
        space_id, host_id = space.id, space.host_id
        await self.db.delete(space)
        await self.db.commit()
        logger.info("spaces.deleted", space_id=space_id, host_id=host_id)
