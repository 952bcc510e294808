"""
Unit Tenancy Routes - thin wrappers over TenancyService
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from app.core.context import RequestContext
from app.core.deps import get_request_context
from app.database import get_db
from app.models.tenancy import TenancyStatus
from app.schemas.tenancy import (
    CompleteTenancyCreate, CompleteTenancyResponse, UnitTenancyCreate,
    UnitTenancyResponse, EndTenancyRequest,
)
from app.services.tenancy_service import TenancyService

router = APIRouter()


@router.post("/complete", response_model=CompleteTenancyResponse, status_code=status.HTTP_201_CREATED)
def create_complete_tenancy(
    request: CompleteTenancyCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Register a tenant, lease the listed units and raise deposit + first rent"""
    tenant_id = TenancyService(db).create_complete_tenancy(ctx, request)
    return CompleteTenancyResponse(tenant_id=tenant_id)


@router.post("/", response_model=UnitTenancyResponse, status_code=status.HTTP_201_CREATED)
def create_unit_tenancy(
    request: UnitTenancyCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return TenancyService(db).create_unit_tenancy(ctx, request)


@router.patch("/{tenancy_id}/end", response_model=UnitTenancyResponse)
def end_tenancy(
    tenancy_id: UUID,
    request: Optional[EndTenancyRequest] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    end_date = request.end_date if request else None
    return TenancyService(db).end_tenancy(ctx, tenancy_id, end_date=end_date)


@router.get("/", response_model=List[UnitTenancyResponse])
def list_tenancies(
    property_id: Optional[UUID] = None,
    tenant_id: Optional[UUID] = None,
    unit_id: Optional[UUID] = None,
    status: Optional[TenancyStatus] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return TenancyService(db).list_tenancies(
        ctx,
        property_id=property_id,
        tenant_id=tenant_id,
        unit_id=unit_id,
        status=status.value if status else None,
    )


@router.get("/unit/{unit_id}/active", response_model=UnitTenancyResponse)
def get_active_tenancy(
    unit_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return TenancyService(db).get_active_tenancy(ctx, unit_id)


@router.get("/{tenancy_id}", response_model=UnitTenancyResponse)
def get_tenancy(
    tenancy_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return TenancyService(db).get_tenancy(ctx, tenancy_id)
