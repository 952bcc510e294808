"""
Property Structure Builder
Creates a property together with its lettered floors and numbered units.

Floors are lettered from the start floor: index 1 is "A", 2 is "B" ... 26 is
"Z". Units are numbered <floor letter><two-digit sequence>, so the first
floor holds A01, A02 ... A10. An optional custom floor is appended right
after the last standard floor with its own unit count and rent.

Floor indexes outside 1..26 are rejected with StructureError before any row
is written; there is no wrap-around or multi-letter naming.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.context import RequestContext
from app.core.exceptions import StructureError
from app.db.store import EntityStore
from app.db.unit_of_work import atomic
from app.models.property import Property, Floor
from app.models.unit import Unit, UnitStatus
from app.schemas.property import PropertyStructureCreate

logger = logging.getLogger(__name__)

MAX_FLOOR_INDEX = 26


def floor_label(index: int) -> str:
    """Letter for a 1-based floor index: 1 -> "A", 26 -> "Z"."""
    if not 1 <= index <= MAX_FLOOR_INDEX:
        raise StructureError(
            f"Floor index {index} cannot be lettered; floors must fall between A (1) and Z ({MAX_FLOOR_INDEX})"
        )
    return chr(64 + index)


def unit_number(label: str, sequence: int) -> str:
    return f"{label}{sequence:02d}"


def plan_floor_labels(floor_count: int, start_floor: int = 1, custom_floor_units: Optional[int] = None) -> List[str]:
    """
    Labels for every floor the build will create, standard floors first.
    Raises StructureError if any of them would fall past 'Z'.
    """
    if floor_count < 0:
        raise StructureError("Floor count cannot be negative")
    if start_floor < 1:
        raise StructureError("Start floor must be 1 or greater")

    indexes = [start_floor + i for i in range(floor_count)]
    if custom_floor_units and custom_floor_units > 0:
        indexes.append(start_floor + floor_count)
    return [floor_label(index) for index in indexes]


def _add_floor(store: EntityStore, property_: Property, label: str, unit_count: int, rent: Optional[float]) -> Floor:
    floor = store.save(Floor(property_id=property_.id, name=label))
    for sequence in range(1, unit_count + 1):
        store.save(
            Unit(
                property_id=property_.id,
                floor_id=floor.id,
                unit_number=unit_number(label, sequence),
                monthly_rent=rent,
                status=UnitStatus.AVAILABLE.value,
            )
        )
    return floor


def build_property_structure(ctx: RequestContext, db: Session, request: PropertyStructureCreate) -> Property:
    """
    Create the property, its floors and units in one transaction.
    Returns the persisted Property.
    """
    labels = plan_floor_labels(request.floor_count, request.start_floor, request.custom_floor_units)
    has_custom_floor = bool(request.custom_floor_units and request.custom_floor_units > 0)
    standard_labels = labels[:-1] if has_custom_floor else labels

    store = EntityStore(db)
    with atomic(db, "build property structure"):
        property_ = store.save(
            Property(
                organization_id=ctx.owning_organization(request.organization_id),
                name=request.property_name,
                address=request.property_address,
                property_type=request.property_type or settings.DEFAULT_PROPERTY_TYPE,
                description=request.description,
            )
        )

        for label in standard_labels:
            _add_floor(store, property_, label, request.units_per_floor, request.default_rent)

        if has_custom_floor:
            rent = request.custom_floor_rent if request.custom_floor_rent is not None else request.default_rent
            _add_floor(store, property_, labels[-1], request.custom_floor_units, rent)

    total_units = request.floor_count * request.units_per_floor + (request.custom_floor_units if has_custom_floor else 0)
    logger.info(
        f"[STRUCTURE] Property {property_.id} '{property_.name}' built by {ctx.actor}: "
        f"{len(labels)} floor(s) [{', '.join(labels)}], {total_units} unit(s)"
    )
    return property_
