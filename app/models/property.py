"""
Property and Floor Models
A property is built once with its floors and units and rarely mutated after
"""
import uuid

from sqlalchemy import String, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin


class Property(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "properties"
    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("organizations.id"), nullable=True, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    property_type: Mapped[str] = mapped_column(String(50), default="RESIDENTIAL")  # RESIDENTIAL, COMMERCIAL, MIXED
    description: Mapped[str] = mapped_column(Text, nullable=True)

    # Relationships
    organization = relationship("Organization", back_populates="properties")
    floors = relationship(
        "Floor", back_populates="property", cascade="all, delete-orphan", order_by="Floor.name"
    )
    units = relationship(
        "Unit", back_populates="property", cascade="all, delete-orphan", order_by="Unit.unit_number"
    )
    tenants = relationship("Tenant", back_populates="property", cascade="all, delete-orphan")
    tenancies = relationship("UnitTenancy", back_populates="property", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="property", cascade="all, delete-orphan")


class Floor(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "floors"
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Letter label, "A" for the first floor
    name: Mapped[str] = mapped_column(String(10), nullable=False)

    property = relationship("Property", back_populates="floors")
    units = relationship("Unit", back_populates="floor", order_by="Unit.unit_number")
