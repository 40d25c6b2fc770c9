from datetime import datetime
from typing import Any
from uuid import UUID

from homefinder.models.preference import PreferencePropertyTypeEnum, PreferencePurposeEnum
from homefinder.models.property import ListingPurposeEnum
from homefinder.schemas.common import BaseSchema
from homefinder.services.matching import MatchEvaluation, coerce_price
from homefinder.services.matching.vocabulary import (
    preference_property_type_for,
    preference_purpose_for,
)

DEFAULT_TYPE_LABEL = "House"

class PropertySummaryResponse(BaseSchema):

    
    id: UUID
    title: str
    description: str | None = None
    short_description: str | None = None
    price: float
    purpose: ListingPurposeEnum
    bedrooms: int | None = None
    bathrooms: int | None = None
    rooms: int | None = None
    sqm: float | None = None
    has_garage: bool = False
    has_balcony: bool = False
    image: str | None = None
    created_at: datetime | None = None
    city: str = ""
    area: str = ""
    type: str = DEFAULT_TYPE_LABEL
    project_id: UUID | None = None

    @classmethod
    def from_property(cls, prop: Any) -> "PropertySummaryResponse":

        location = prop.location
        return cls(
            id=prop.id,
            title=prop.title,
            description=prop.description,
            short_description=prop.short_description,
            price=float(coerce_price(prop.price)),
            purpose=prop.purpose,
            bedrooms=prop.bedrooms,
            bathrooms=prop.bathrooms,
            rooms=prop.rooms,
            sqm=float(prop.area_sqm) if prop.area_sqm is not None else None,
            has_garage=bool(prop.has_garage),
            has_balcony=bool(prop.has_balcony),
            image=prop.image_url,
            created_at=prop.created_at,
            city=location.city.name if location and location.city else "",
            area=location.name if location else "",
            # Display label only; matching never substitutes a missing type.
            type=prop.property_type.name if prop.property_type else DEFAULT_TYPE_LABEL,
            project_id=prop.project_id,
        )

class PersonalizedPropertiesResponse(BaseSchema):

    
    properties: list[PropertySummaryResponse]
    is_personalized: bool
    is_near_match: bool = False
    message: str | None = None

def _preference_purpose(purpose: Any) -> PreferencePurposeEnum | None:
    if purpose is None:
        return None
    try:
        return preference_purpose_for(purpose)
    except ValueError:
        return None

class ListingDiagnosticResponse(BaseSchema):

    
    id: UUID
    purpose: str | None = None
    price: float
    type: str | None = None
    project_id: UUID | None = None
    city_id: UUID | None = None
    # The listing expressed in preference terms, for side-by-side comparison.
    preference_purpose: PreferencePurposeEnum | None = None
    preference_property_type: PreferencePropertyTypeEnum | None = None
    is_match: bool
    reasons: list[str]

    @classmethod
    def from_evaluation(cls, evaluation: MatchEvaluation) -> "ListingDiagnosticResponse":

        listing = evaluation.listing
        purpose = listing.purpose.value if hasattr(listing.purpose, "value") else listing.purpose
        return cls(
            id=listing.id,
            purpose=purpose,
            price=float(listing.coerced_price),
            type=listing.property_type,
            project_id=listing.project_id,
            city_id=listing.city_id,
            preference_purpose=_preference_purpose(listing.purpose),
            preference_property_type=preference_property_type_for(listing.property_type),
            is_match=evaluation.is_match,
            reasons=evaluation.reasons,
        )
