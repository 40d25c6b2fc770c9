import uuid
from typing import Sequence

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from homefinder.models.property import ListingPurposeEnum, Property
from homefinder.models.reference import Location
from homefinder.repositories.base import BaseRepository


class PropertyRepository(BaseRepository[Property]):
    def __init__(self, session: AsyncSession):
        super().__init__(Property, session)

    async def get_candidates(
        self,
        *,
        purpose: ListingPurposeEnum | None = None,
        city_id: uuid.UUID | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[Property]:
        conditions = []

        if purpose is not None:
            conditions.append(Property.purpose == purpose)

        query = select(Property)

        if city_id is not None:
            query = query.join(Location, Property.location_id == Location.id)
            conditions.append(Location.city_id == city_id)

        if conditions:
            query = query.where(and_(*conditions))

        query = (
            query
            .order_by(Property.created_at.desc(), Property.id)
            .offset(skip)
            .limit(limit)
        )

        result = await self.session.execute(query)
        return result.scalars().all()
