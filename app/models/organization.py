"""
Organization Model
The landlord / management company that owns properties and employs users
"""
import secrets

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin


def generate_verification_code() -> str:
    return secrets.token_hex(4).upper()


class Organization(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=True)

    # Shared with staff so they can join the organization at sign-up
    verification_code: Mapped[str] = mapped_column(
        String(16), unique=True, nullable=False, index=True, default=generate_verification_code
    )

    # Relationships
    properties = relationship("Property", back_populates="organization")
    users = relationship("User", back_populates="organization")
