import enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homefinder.core.database import BaseModel

if TYPE_CHECKING:
    from homefinder.models.preference import UserPreference

class UserRoleEnum(str, enum.Enum):

    USER = "USER"
    AGENT = "AGENT"
    ADMIN = "ADMIN"

class User(BaseModel):

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    password_hash: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    role: Mapped[UserRoleEnum] = mapped_column(
        Enum(UserRoleEnum, name="user_role_enum", values_callable=lambda x: [e.value for e in x]),
        default=UserRoleEnum.USER,
        nullable=False,
    )

    preference: Mapped[Optional["UserPreference"]] = relationship(
        "UserPreference",
        back_populates="user",
        uselist=False,
    )

    __table_args__ = (
        Index("idx_users_email", "email"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRoleEnum.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
