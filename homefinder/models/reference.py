import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homefinder.core.database import BaseModel

if TYPE_CHECKING:
    from homefinder.models.property import Property

class City(BaseModel):

    __tablename__ = "cities"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )

    locations: Mapped[list["Location"]] = relationship(
        "Location",
        back_populates="city",
    )

    def __repr__(self) -> str:
        return f"<City(id={self.id}, name={self.name})>"

class Location(BaseModel):

    __tablename__ = "locations"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    city_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("cities.id", ondelete="CASCADE"),
        nullable=False,
    )

    city: Mapped["City"] = relationship(
        "City",
        back_populates="locations",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_locations_city_id", "city_id"),
    )

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name={self.name})>"

class PropertyType(BaseModel):

    __tablename__ = "property_types"

    name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
    )

    properties: Mapped[list["Property"]] = relationship(
        "Property",
        back_populates="property_type",
    )

    def __repr__(self) -> str:
        return f"<PropertyType(id={self.id}, name={self.name})>"

class Project(BaseModel):
    """Multi-unit development that groups several listings."""

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    city_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("cities.id", ondelete="SET NULL"),
        nullable=True,
    )

    properties: Mapped[list["Property"]] = relationship(
        "Property",
        back_populates="project",
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
