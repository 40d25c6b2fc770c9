import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homefinder.models.preference import UserPreference
from homefinder.repositories.base import BaseRepository


class PreferenceRepository(BaseRepository[UserPreference]):
    def __init__(self, session: AsyncSession):
        super().__init__(UserPreference, session)

    async def get_by_user(self, user_id: uuid.UUID) -> UserPreference | None:
        result = await self.session.execute(
            select(UserPreference).where(UserPreference.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        user_id: uuid.UUID,
        data: dict[str, Any],
    ) -> tuple[UserPreference, bool]:
        existing = await self.get_by_user(user_id)

        if existing is not None:
            values = {k: v for k, v in data.items() if k != "user_id"}
            return await self.update(existing, values), False

        preference = await self.create({**data, "user_id": user_id})
        return preference, True
