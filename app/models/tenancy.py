"""
Unit Tenancy Model
Binds one tenant to one unit with a monthly rent. Owns its chain of payments.
"""
from datetime import date
from enum import Enum
import uuid

from sqlalchemy import String, Float, Date, ForeignKey, Uuid, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin


class TenancyStatus(str, Enum):
    ACTIVE = "active"
    ENDED = "ended"


class UnitTenancy(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "unit_tenancies"
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    unit_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("units.id", ondelete="CASCADE"), nullable=False, index=True
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )

    monthly_rent: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=TenancyStatus.ACTIVE.value, nullable=False, index=True
    )

    # Relationships
    tenant = relationship("Tenant", back_populates="tenancies")
    unit = relationship("Unit", back_populates="tenancies")
    property = relationship("Property", back_populates="tenancies")
    payments = relationship("Payment", back_populates="unit_tenancy", order_by="Payment.due_date")

    __table_args__ = (
        # At most one active tenancy per unit
        Index(
            "uq_unit_tenancies_active_unit",
            "unit_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )
