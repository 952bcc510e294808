from app.api.routes.auth import router as auth_router
from app.api.routes.organizations import router as organizations_router
from app.api.routes.properties import router as properties_router
from app.api.routes.units import router as units_router
from app.api.routes.tenants import router as tenants_router
from app.api.routes.tenancies import router as tenancies_router
from app.api.routes.payments import router as payments_router
from app.api.routes.dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "organizations_router",
    "properties_router",
    "units_router",
    "tenants_router",
    "tenancies_router",
    "payments_router",
    "dashboard_router",
]
