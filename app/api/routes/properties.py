from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.core.context import RequestContext
from app.core.deps import get_request_context
from app.database import get_db
from app.db.store import EntityStore
from app.db.unit_of_work import atomic
from app.models.property import Property, Floor
from app.models.unit import Unit, UnitStatus
from app.schemas.property import (
    PropertyStructureCreate, PropertyUpdate, PropertyResponse,
    PropertyDetailResponse, FloorResponse, UnitResponse,
)
from app.services.property_builder import build_property_structure

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_property(ctx: RequestContext, store: EntityStore, property_id: UUID) -> Property:
    property_ = store.require(Property, property_id, label="Property")
    ctx.ensure_access(property_)
    return property_


@router.post("/create-property", response_model=PropertyDetailResponse, status_code=status.HTTP_201_CREATED)
def create_property_with_structure(
    request: PropertyStructureCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Create a property together with its floors and units"""
    return build_property_structure(ctx, db, request)


@router.get("/", response_model=List[PropertyResponse])
def list_properties(
    organization_id: Optional[UUID] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Properties of the current user's organization"""
    store = EntityStore(db)
    properties = store.list(
        Property,
        order_by=Property.name,
        organization_id=ctx.organization_id or organization_id,
    )
    return [p for p in properties if ctx.can_access(p)]


@router.get("/{property_id}", response_model=PropertyDetailResponse)
def get_property(
    property_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return _require_property(ctx, EntityStore(db), property_id)


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: UUID,
    property_update: PropertyUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Update descriptive fields; the floor/unit structure is fixed at build time"""
    store = EntityStore(db)
    with atomic(db, "update property"):
        property_ = _require_property(ctx, store, property_id)
        for key, value in property_update.model_dump(exclude_unset=True).items():
            setattr(property_, key, value)
        store.save(property_)
    return property_


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Delete a property with everything under it"""
    store = EntityStore(db)
    with atomic(db, "delete property"):
        _require_property(ctx, store, property_id)
        store.delete(Property, property_id, label="Property")
    logger.info(f"[STRUCTURE] Property {property_id} deleted by {ctx.actor}")
    return None


@router.get("/{property_id}/floors", response_model=List[FloorResponse])
def list_floors(
    property_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    store = EntityStore(db)
    _require_property(ctx, store, property_id)
    return store.list(Floor, order_by=Floor.name, property_id=property_id)


@router.get("/{property_id}/units", response_model=List[UnitResponse])
def list_units(
    property_id: UUID,
    status: Optional[UnitStatus] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Units of a property, optionally filtered by occupancy status"""
    store = EntityStore(db)
    _require_property(ctx, store, property_id)
    return store.list(
        Unit,
        order_by=Unit.unit_number,
        property_id=property_id,
        status=status.value if status else None,
    )
