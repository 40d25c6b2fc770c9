from homefinder.repositories.base import BaseRepository
from homefinder.repositories.preference import PreferenceRepository
from homefinder.repositories.property import PropertyRepository
from homefinder.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PreferenceRepository",
    "PropertyRepository",
    "UserRepository",
]
