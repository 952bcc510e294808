"""
Tenant Routes
Tenants are created through the tenancy endpoints; these cover reads and edits
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from app.core.context import RequestContext
from app.core.deps import get_request_context
from app.core.exceptions import NotFoundError
from app.database import get_db
from app.db.store import EntityStore
from app.db.unit_of_work import atomic
from app.models.tenant import Tenant
from app.schemas.tenant import TenantResponse, TenantUpdate

router = APIRouter()


def _require_tenant(ctx: RequestContext, store: EntityStore, tenant_id: UUID) -> Tenant:
    tenant = store.require(Tenant, tenant_id, label="Tenant")
    ctx.ensure_access(tenant.property)
    return tenant


def _first_accessible(ctx: RequestContext, tenants: List[Tenant], description: str) -> Tenant:
    # Tenants are unique per property only, so pick the first the caller may see
    for tenant in tenants:
        if ctx.can_access(tenant.property):
            return tenant
    if tenants:
        ctx.ensure_access(tenants[0].property)
    raise NotFoundError(f"Tenant not found with {description}")


@router.get("/", response_model=List[TenantResponse])
def list_tenants(
    property_id: Optional[UUID] = None,
    email: Optional[str] = None,
    id_number: Optional[str] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    tenants = EntityStore(db).list(
        Tenant, order_by=Tenant.name, property_id=property_id, email=email, id_number=id_number
    )
    return [t for t in tenants if ctx.can_access(t.property)]


@router.get("/id-number/{id_number}", response_model=TenantResponse)
def get_tenant_by_id_number(
    id_number: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    tenants = EntityStore(db).list(Tenant, order_by=Tenant.created_at, id_number=id_number)
    return _first_accessible(ctx, tenants, f"ID number: {id_number}")


@router.get("/email/{email}", response_model=TenantResponse)
def get_tenant_by_email(
    email: str,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    tenants = EntityStore(db).list(Tenant, order_by=Tenant.created_at, email=email)
    return _first_accessible(ctx, tenants, f"email: {email}")


@router.get("/{tenant_id}", response_model=TenantResponse)
def get_tenant(
    tenant_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return _require_tenant(ctx, EntityStore(db), tenant_id)


@router.put("/{tenant_id}", response_model=TenantResponse)
def update_tenant(
    tenant_id: UUID,
    tenant_update: TenantUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    store = EntityStore(db)
    with atomic(db, "update tenant"):
        tenant = _require_tenant(ctx, store, tenant_id)
        for key, value in tenant_update.model_dump(exclude_unset=True).items():
            setattr(tenant, key, value)
        store.save(tenant)
    return tenant
