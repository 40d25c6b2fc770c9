from decimal import Decimal
from uuid import UUID

from pydantic import Field, model_validator

from homefinder.models.preference import (
    PreferencePropertyTypeEnum,
    PreferencePurposeEnum,
    PropertyStyleEnum,
)
from homefinder.schemas.common import BaseSchema, IDTimestampSchema

class PreferenceBase(BaseSchema):

    
    purpose: PreferencePurposeEnum = PreferencePurposeEnum.BOTH
    property_type: PreferencePropertyTypeEnum = PreferencePropertyTypeEnum.BOTH
    property_style: PropertyStyleEnum | None = None
    city_id: UUID | None = None
    min_price: Decimal | None = Field(None, ge=0, description="Lower price bound, inclusive")
    max_price: Decimal | None = Field(None, ge=0, description="Upper price bound, inclusive")

class PreferenceUpdate(PreferenceBase):

    
    @model_validator(mode="after")
    def validate_price_range(self) -> "PreferenceUpdate":

        if self.min_price is not None and self.max_price is not None:
            if self.min_price > self.max_price:
                raise ValueError("min_price must be less than or equal to max_price")
        return self

class PreferenceResponse(PreferenceBase, IDTimestampSchema):

    
    user_id: UUID
