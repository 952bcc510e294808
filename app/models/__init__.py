# Import all models in dependency order so relationship strings resolve
from app.models.organization import Organization
from app.models.user import User, UserRole
from app.models.property import Property, Floor
from app.models.unit import Unit, UnitStatus
from app.models.tenant import Tenant
from app.models.tenancy import UnitTenancy, TenancyStatus
from app.models.payment import Payment, PaymentStatus, PaymentMethod

__all__ = [
    "Organization",
    "User",
    "UserRole",
    "Property",
    "Floor",
    "Unit",
    "UnitStatus",
    "Tenant",
    "UnitTenancy",
    "TenancyStatus",
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
]
