"""
Payment Model
Rent, deposit and ad-hoc charges raised against a unit tenancy
"""
from datetime import date
from enum import Enum
import uuid

from sqlalchemy import String, Float, Date, ForeignKey, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin


class PaymentStatus(str, Enum):
    """Payment status enum"""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentMethod(str, Enum):
    """Settlement channels accepted at the counter"""
    MPESA = "mpesa"
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    CARD = "card"


class Payment(Base, UUIDMixin, TimestampMixin):
    """A single amount owed under a tenancy, settled at most once"""
    __tablename__ = "payments"
    unit_tenancy_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("unit_tenancies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Charge
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=True)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Settlement - null until paid
    payment_date: Mapped[date] = mapped_column(Date, nullable=True)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=True)
    reference_number: Mapped[str] = mapped_column(String(100), nullable=True)

    payment_status: Mapped[str] = mapped_column(
        String(20), default=PaymentStatus.PENDING.value, nullable=False
    )

    # Relationships
    unit_tenancy = relationship("UnitTenancy", back_populates="payments")
    property = relationship("Property", back_populates="payments")

    __table_args__ = (
        Index("idx_payments_property_status", "property_id", "payment_status"),
    )
