"""
Tenant Model - Property Management
"""
import uuid

from sqlalchemy import String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin


class Tenant(Base, UUIDMixin, TimestampMixin):
    """
    A person renting one or more units of a single property.
    Unit assignments live on UnitTenancy, not here.
    """
    __tablename__ = "tenants"
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Tenant details
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=True)
    id_number: Mapped[str] = mapped_column(String(50), nullable=True, index=True)  # National ID
    emergency_contact: Mapped[str] = mapped_column(String(255), nullable=True)

    # Relationships
    property = relationship("Property", back_populates="tenants")
    tenancies = relationship("UnitTenancy", back_populates="tenant")
