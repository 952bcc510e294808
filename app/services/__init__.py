from app.services import unit_state
from app.services.property_builder import build_property_structure, floor_label
from app.services.tenancy_service import TenancyService
from app.services.payment_scheduler import PaymentScheduler
from app.services.dashboard_service import get_property_stats, PropertyStats

__all__ = [
    "unit_state",
    "build_property_structure",
    "floor_label",
    "TenancyService",
    "PaymentScheduler",
    "get_property_stats",
    "PropertyStats",
]
