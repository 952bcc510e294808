from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from app.core.context import RequestContext
from app.core.deps import get_request_context
from app.database import get_db
from app.db.store import EntityStore
from app.models.property import Floor
from app.models.unit import Unit
from app.schemas.property import UnitResponse

router = APIRouter()


@router.get("/floor/{floor_id}", response_model=List[UnitResponse])
def list_units_by_floor(
    floor_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    store = EntityStore(db)
    floor = store.require(Floor, floor_id, label="Floor")
    ctx.ensure_access(floor.property)
    return store.list(Unit, order_by=Unit.unit_number, floor_id=floor_id)


@router.get("/{unit_id}", response_model=UnitResponse)
def get_unit(
    unit_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Read-only: occupancy changes only through the tenancy endpoints"""
    unit = EntityStore(db).require(Unit, unit_id, label="Unit")
    ctx.ensure_access(unit.property)
    return unit
