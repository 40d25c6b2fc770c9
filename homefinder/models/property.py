import enum
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homefinder.core.database import BaseModel

if TYPE_CHECKING:
    from homefinder.models.reference import Location, Project, PropertyType

class ListingPurposeEnum(str, enum.Enum):

    SALE = "SALE"
    RENT = "RENT"

class Property(BaseModel):

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    short_description: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    # Nullable on purpose; matching treats a missing price as 0.
    price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2),
        nullable=True,
    )
    purpose: Mapped[ListingPurposeEnum] = mapped_column(
        Enum(
            ListingPurposeEnum,
            name="listing_purpose_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )

    bedrooms: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )
    bathrooms: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )
    rooms: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )
    area_sqm: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
    )
    has_garage: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    has_balcony: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    image_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    property_type_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("property_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    project_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    location_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
    )

    property_type: Mapped[Optional["PropertyType"]] = relationship(
        "PropertyType",
        back_populates="properties",
        lazy="selectin",
    )
    project: Mapped[Optional["Project"]] = relationship(
        "Project",
        back_populates="properties",
    )
    location: Mapped[Optional["Location"]] = relationship(
        "Location",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_properties_purpose", "purpose"),
        Index("idx_properties_price", "price"),
        Index("idx_properties_project_id", "project_id"),
        Index("idx_properties_created_at", "created_at"),
    )

    @property
    def city_id(self) -> Optional[uuid.UUID]:
        return self.location.city_id if self.location else None

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, purpose={self.purpose}, price={self.price})>"
