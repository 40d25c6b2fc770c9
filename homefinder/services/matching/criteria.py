import enum
import math
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from homefinder.models.preference import (
    PreferencePropertyTypeEnum,
    PreferencePurposeEnum,
    PropertyStyleEnum,
)
from homefinder.models.property import ListingPurposeEnum
from homefinder.services.matching.vocabulary import (
    listing_purpose_for,
    parse_property_type,
    parse_purpose,
    parse_style,
    property_type_name_for,
)

ZERO = Decimal("0")
INFINITY = Decimal("Infinity")

class CriterionEnum(str, enum.Enum):

    PRICE = "price"
    PURPOSE = "purpose"
    PROPERTY_TYPE = "property_type"
    STYLE = "style"
    CITY = "city"

ALL_CRITERIA: tuple[CriterionEnum, ...] = tuple(CriterionEnum)
RELAXED_CRITERIA: tuple[CriterionEnum, ...] = (CriterionEnum.PRICE, CriterionEnum.PURPOSE)

def coerce_price(value: Any) -> Decimal:
    """
    Coerce a listing price to a Decimal for range comparison.

    Missing, non-numeric, NaN and infinite values all become 0 so that a
    malformed listing is still evaluated rather than rejected.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, float) and not math.isfinite(value):
        return ZERO
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not price.is_finite():
        return ZERO
    return price

@dataclass
class PreferenceData:


    user_id: Optional[uuid.UUID] = None
    purpose: Union[PreferencePurposeEnum, str, None] = PreferencePurposeEnum.BOTH
    property_type: Union[PreferencePropertyTypeEnum, str, None] = PreferencePropertyTypeEnum.BOTH
    property_style: Union[PropertyStyleEnum, str, None] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    city_id: Optional[uuid.UUID] = None

    def __post_init__(self) -> None:
        self.purpose = parse_purpose(self.purpose)
        self.property_type = parse_property_type(self.property_type)
        self.property_style = parse_style(self.property_style)

    @property
    def price_floor(self) -> Decimal:
        return ZERO if self.min_price is None else coerce_price(self.min_price)

    @property
    def price_ceiling(self) -> Decimal:
        return INFINITY if self.max_price is None else coerce_price(self.max_price)

    @property
    def has_inverted_bounds(self) -> bool:
        return self.price_floor > self.price_ceiling

    @classmethod
    def from_model(cls, preference: Any) -> "PreferenceData":

        return cls(
            user_id=preference.user_id,
            purpose=preference.purpose,
            property_type=preference.property_type,
            property_style=preference.property_style,
            min_price=preference.min_price,
            max_price=preference.max_price,
            city_id=getattr(preference, "city_id", None),
        )

@dataclass
class ListingData:


    id: Any
    purpose: Union[ListingPurposeEnum, str, None]
    price: Any = None
    property_type: Optional[str] = None
    project_id: Optional[Any] = None
    city_id: Optional[uuid.UUID] = None
    source: Any = field(default=None, repr=False, compare=False)

    @property
    def coerced_price(self) -> Decimal:
        return coerce_price(self.price)

    @classmethod
    def from_model(cls, listing: Any) -> "ListingData":

        property_type = listing.property_type.name if listing.property_type else None
        location = getattr(listing, "location", None)

        return cls(
            id=listing.id,
            purpose=listing.purpose,
            price=listing.price,
            property_type=property_type,
            project_id=listing.project_id,
            city_id=location.city_id if location else None,
            source=listing,
        )

def _format_amount(value: Decimal) -> str:
    if value == INFINITY:
        return "inf"
    return f"{value.normalize():f}"

class PreferenceCriteria:
    """
    Individual preference checks.

    Each check returns None when the listing passes, otherwise a short
    human-readable reason used by diagnostics.
    """

    def check_price(self, preference: PreferenceData, listing: ListingData) -> Optional[str]:

        price = listing.coerced_price
        floor = preference.price_floor
        ceiling = preference.price_ceiling

        if floor <= price <= ceiling:
            return None
        return f"price {_format_amount(price)} not in {_format_amount(floor)}-{_format_amount(ceiling)}"

    def check_purpose(self, preference: PreferenceData, listing: ListingData) -> Optional[str]:

        expected = listing_purpose_for(preference.purpose)
        if expected is None:
            return None

        if listing.purpose == expected:
            return None
        actual = listing.purpose.value if isinstance(listing.purpose, enum.Enum) else listing.purpose
        return f"purpose {actual} != {expected.value}"

    def check_property_type(self, preference: PreferenceData, listing: ListingData) -> Optional[str]:

        expected = property_type_name_for(preference.property_type)
        if expected is None:
            return None

        if listing.property_type is None:
            return f"type missing != {expected}"
        if listing.property_type != expected:
            return f"type {listing.property_type} != {expected}"
        return None

    def check_style(self, preference: PreferenceData, listing: ListingData) -> Optional[str]:

        if preference.property_style == PropertyStyleEnum.PROJECT and listing.project_id is None:
            return "not a project"
        if preference.property_style == PropertyStyleEnum.NORMAL and listing.project_id is not None:
            return "is a project"
        return None

    def check_city(self, preference: PreferenceData, listing: ListingData) -> Optional[str]:

        if preference.city_id is None:
            return None
        if listing.city_id != preference.city_id:
            return f"city {listing.city_id} != {preference.city_id}"
        return None

    def check(
        self,
        criterion: CriterionEnum,
        preference: PreferenceData,
        listing: ListingData,
    ) -> Optional[str]:

        checks = {
            CriterionEnum.PRICE: self.check_price,
            CriterionEnum.PURPOSE: self.check_purpose,
            CriterionEnum.PROPERTY_TYPE: self.check_property_type,
            CriterionEnum.STYLE: self.check_style,
            CriterionEnum.CITY: self.check_city,
        }
        return checks[criterion](preference, listing)
