from homefinder.models.preference import (
    PreferencePropertyTypeEnum,
    PreferencePurposeEnum,
    PropertyStyleEnum,
    UserPreference,
)
from homefinder.models.property import ListingPurposeEnum, Property
from homefinder.models.reference import City, Location, Project, PropertyType
from homefinder.models.user import User, UserRoleEnum

__all__ = [
    "User",
    "UserRoleEnum",
    "City",
    "Location",
    "Project",
    "PropertyType",
    "Property",
    "ListingPurposeEnum",
    "UserPreference",
    "PreferencePurposeEnum",
    "PreferencePropertyTypeEnum",
    "PropertyStyleEnum",
]
