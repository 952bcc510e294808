"""
Dashboard Aggregator - read-only rollups for a property
"""
import uuid
from dataclasses import dataclass, asdict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.context import RequestContext
from app.db.store import EntityStore
from app.models.payment import Payment, PaymentStatus
from app.models.property import Property
from app.models.tenant import Tenant
from app.models.unit import Unit, UnitStatus


@dataclass
class PropertyStats:
    total_units: int
    available_units: int
    occupied_units: int
    occupancy_rate: int
    tenant_count: int
    pending_payments: int
    completed_payments: int
    overdue_payments: int
    outstanding_amount: float
    collected_amount: float

    def to_dict(self) -> dict:
        return asdict(self)


def get_property_stats(ctx: RequestContext, db: Session, property_id: uuid.UUID) -> PropertyStats:
    store = EntityStore(db)
    property_ = store.require(Property, property_id, label="Property")
    ctx.ensure_access(property_)

    total_units = store.count(Unit, property_id=property_id)
    available = store.count(Unit, property_id=property_id, status=UnitStatus.AVAILABLE.value)
    occupied = store.count(Unit, property_id=property_id, status=UnitStatus.OCCUPIED.value)

    def _sum(*statuses: PaymentStatus) -> float:
        stmt = select(func.coalesce(func.sum(Payment.amount), 0.0)).where(
            Payment.property_id == property_id,
            Payment.payment_status.in_([s.value for s in statuses]),
        )
        return float(db.execute(stmt).scalar_one())

    return PropertyStats(
        total_units=total_units,
        available_units=available,
        occupied_units=occupied,
        occupancy_rate=(occupied * 100 // total_units) if total_units else 0,
        tenant_count=store.count(Tenant, property_id=property_id),
        pending_payments=store.count(Payment, property_id=property_id, payment_status=PaymentStatus.PENDING.value),
        completed_payments=store.count(Payment, property_id=property_id, payment_status=PaymentStatus.PAID.value),
        overdue_payments=store.count(Payment, property_id=property_id, payment_status=PaymentStatus.OVERDUE.value),
        outstanding_amount=_sum(PaymentStatus.PENDING, PaymentStatus.OVERDUE),
        collected_amount=_sum(PaymentStatus.PAID),
    )
