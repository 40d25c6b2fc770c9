from homefinder.services.personalization import PersonalizationService, PersonalizedListings
from homefinder.services.store import ListingQuery, PropertyStore, SQLAlchemyPropertyStore

__all__ = [
    "PersonalizationService",
    "PersonalizedListings",
    "ListingQuery",
    "PropertyStore",
    "SQLAlchemyPropertyStore",
]
