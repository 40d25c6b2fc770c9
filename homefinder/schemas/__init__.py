from homefinder.schemas.common import BaseSchema, IDTimestampSchema
from homefinder.schemas.preference import PreferenceResponse, PreferenceUpdate
from homefinder.schemas.property import (
    ListingDiagnosticResponse,
    PersonalizedPropertiesResponse,
    PropertySummaryResponse,
)

__all__ = [
    "BaseSchema",
    "IDTimestampSchema",
    "PreferenceResponse",
    "PreferenceUpdate",
    "ListingDiagnosticResponse",
    "PersonalizedPropertiesResponse",
    "PropertySummaryResponse",
]
