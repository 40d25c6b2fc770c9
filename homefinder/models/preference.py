import enum
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum, ForeignKey, Numeric
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homefinder.core.database import BaseModel

if TYPE_CHECKING:
    from homefinder.models.reference import City
    from homefinder.models.user import User

class PreferencePurposeEnum(str, enum.Enum):

    BUY = "BUY"
    RENT = "RENT"
    BOTH = "BOTH"

class PreferencePropertyTypeEnum(str, enum.Enum):

    HOUSE = "HOUSE"
    APARTMENT = "APARTMENT"
    BOTH = "BOTH"

class PropertyStyleEnum(str, enum.Enum):

    NORMAL = "NORMAL"
    PROJECT = "PROJECT"
    BOTH = "BOTH"

class UserPreference(BaseModel):

    __tablename__ = "user_preferences"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    purpose: Mapped[PreferencePurposeEnum] = mapped_column(
        Enum(
            PreferencePurposeEnum,
            name="preference_purpose_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=PreferencePurposeEnum.BOTH,
        nullable=False,
    )
    property_type: Mapped[PreferencePropertyTypeEnum] = mapped_column(
        Enum(
            PreferencePropertyTypeEnum,
            name="preference_property_type_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=PreferencePropertyTypeEnum.BOTH,
        nullable=False,
    )
    property_style: Mapped[Optional[PropertyStyleEnum]] = mapped_column(
        Enum(
            PropertyStyleEnum,
            name="property_style_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=True,
    )
    city_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("cities.id", ondelete="SET NULL"),
        nullable=True,
    )

    min_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2),
        nullable=True,
    )
    max_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2),
        nullable=True,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="preference",
    )
    city: Mapped[Optional["City"]] = relationship(
        "City",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<UserPreference(user_id={self.user_id}, purpose={self.purpose}, "
            f"type={self.property_type}, style={self.property_style})>"
        )
