import uuid
from enum import Enum

from sqlalchemy import String, Float, ForeignKey, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin


class UnitStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"


class Unit(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "units"
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )
    floor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("floors.id", ondelete="CASCADE"), nullable=True, index=True
    )

    unit_number: Mapped[str] = mapped_column(String(20), nullable=False)
    monthly_rent: Mapped[float] = mapped_column(Float, nullable=True)

    # Only changed through app.services.unit_state
    status: Mapped[str] = mapped_column(
        String(20), default=UnitStatus.AVAILABLE.value, server_default=UnitStatus.AVAILABLE.value, nullable=False
    )

    property = relationship("Property", back_populates="units")
    floor = relationship("Floor", back_populates="units")
    tenancies = relationship("UnitTenancy", back_populates="unit")

    __table_args__ = (
        Index("idx_units_property_status", "property_id", "status"),
    )
