"""
Translation between the preference vocabulary and the listing vocabulary.

Users state preferences as BUY/RENT/BOTH and HOUSE/APARTMENT/BOTH, while
listings carry SALE/RENT and a free-text property type name. Every call site
that crosses between the two goes through the tables below.
"""

from typing import Optional, Union

from homefinder.models.preference import (
    PreferencePropertyTypeEnum,
    PreferencePurposeEnum,
    PropertyStyleEnum,
)
from homefinder.models.property import ListingPurposeEnum

PURPOSE_TO_LISTING: dict[PreferencePurposeEnum, ListingPurposeEnum] = {
    PreferencePurposeEnum.BUY: ListingPurposeEnum.SALE,
    PreferencePurposeEnum.RENT: ListingPurposeEnum.RENT,
}
LISTING_TO_PURPOSE: dict[ListingPurposeEnum, PreferencePurposeEnum] = {
    listing: preference for preference, listing in PURPOSE_TO_LISTING.items()
}

PROPERTY_TYPE_NAMES: dict[PreferencePropertyTypeEnum, str] = {
    PreferencePropertyTypeEnum.HOUSE: "House",
    PreferencePropertyTypeEnum.APARTMENT: "Apartment",
}
NAME_TO_PROPERTY_TYPE: dict[str, PreferencePropertyTypeEnum] = {
    name: property_type for property_type, name in PROPERTY_TYPE_NAMES.items()
}

def parse_purpose(
    value: Union[PreferencePurposeEnum, str, None],
) -> PreferencePurposeEnum:
    """
    Parse a preference purpose. Missing values mean BOTH.

    Raises:
        ValueError: If the value is not a known purpose
    """
    if value is None:
        return PreferencePurposeEnum.BOTH
    return PreferencePurposeEnum(value)

def parse_property_type(
    value: Union[PreferencePropertyTypeEnum, str, None],
) -> PreferencePropertyTypeEnum:
    """
    Parse a preference property type. Missing values mean BOTH.

    Raises:
        ValueError: If the value is not a known property type
    """
    if value is None:
        return PreferencePropertyTypeEnum.BOTH
    return PreferencePropertyTypeEnum(value)

def parse_style(
    value: Union[PropertyStyleEnum, str, None],
) -> Optional[PropertyStyleEnum]:
    """Parse a property style; unknown or missing values impose no constraint."""
    if value is None:
        return None
    try:
        return PropertyStyleEnum(value)
    except ValueError:
        return None

def listing_purpose_for(
    purpose: Union[PreferencePurposeEnum, str, None],
) -> Optional[ListingPurposeEnum]:
    """Listing purpose a preference asks for, or None when it accepts any."""
    return PURPOSE_TO_LISTING.get(parse_purpose(purpose))

def preference_purpose_for(
    listing_purpose: Union[ListingPurposeEnum, str],
) -> PreferencePurposeEnum:

    return LISTING_TO_PURPOSE[ListingPurposeEnum(listing_purpose)]

def property_type_name_for(
    property_type: Union[PreferencePropertyTypeEnum, str, None],
) -> Optional[str]:
    """Listing type name a preference asks for, or None when it accepts any."""
    return PROPERTY_TYPE_NAMES.get(parse_property_type(property_type))

def preference_property_type_for(
    name: Optional[str],
) -> Optional[PreferencePropertyTypeEnum]:
    """Exact, case-sensitive reverse lookup of a listing type name."""
    if name is None:
        return None
    return NAME_TO_PROPERTY_TYPE.get(name)
