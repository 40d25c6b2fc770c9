import uuid
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from homefinder.models.preference import UserPreference
from homefinder.models.property import ListingPurposeEnum, Property
from homefinder.models.user import User
from homefinder.repositories.preference import PreferenceRepository
from homefinder.repositories.property import PropertyRepository
from homefinder.repositories.user import UserRepository

@dataclass(frozen=True)
class ListingQuery:


    purpose: Optional[ListingPurposeEnum] = None
    city_id: Optional[uuid.UUID] = None
    skip: int = 0
    limit: int = 100

class PropertyStore(Protocol):
    """Read/write access to users, preferences and listings."""

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]: ...

    async def get_preference(self, user_id: uuid.UUID) -> Optional[UserPreference]: ...

    async def save_preference(
        self,
        user_id: uuid.UUID,
        values: dict[str, Any],
    ) -> UserPreference: ...

    async def list_listings(self, query: ListingQuery) -> Sequence[Property]: ...

class SQLAlchemyPropertyStore:
    """
    PropertyStore backed by the async SQLAlchemy repositories.

    Built once per process from a session factory. Each call runs in its own
    session, so one store instance can be shared by concurrent requests.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):

        self.session_factory = session_factory

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:

        async with self.session_factory() as session:
            return await UserRepository(session).get(user_id)

    async def get_preference(self, user_id: uuid.UUID) -> Optional[UserPreference]:

        async with self.session_factory() as session:
            return await PreferenceRepository(session).get_by_user(user_id)

    async def save_preference(
        self,
        user_id: uuid.UUID,
        values: dict[str, Any],
    ) -> UserPreference:

        async with self.session_factory() as session:
            try:
                preference, _ = await PreferenceRepository(session).upsert(user_id, values)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            return preference

    async def list_listings(self, query: ListingQuery) -> Sequence[Property]:

        async with self.session_factory() as session:
            return await PropertyRepository(session).get_candidates(
                purpose=query.purpose,
                city_id=query.city_id,
                skip=query.skip,
                limit=query.limit,
            )
