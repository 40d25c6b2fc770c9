from sqlalchemy.ext.asyncio import AsyncSession

from homefinder.models.user import User
from homefinder.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession):
        super().__init__(User, session)
