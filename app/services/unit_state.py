"""
Unit State Machine

    available --occupy--> occupied
    occupied  --vacate--> available

Units are created `available` by the structure builder. Every occupancy change
in the system goes through `transition`, which refuses a move whose source
state does not match. Callers load the unit with a row lock and run the
transition inside their unit of work, so check-and-set is atomic with the
tenancy write that triggered it.
"""
import logging

from app.core.exceptions import ConflictError
from app.models.unit import Unit, UnitStatus

logger = logging.getLogger(__name__)

OCCUPY = "occupy"
VACATE = "vacate"

# event -> (required source state, target state)
TRANSITIONS = {
    OCCUPY: (UnitStatus.AVAILABLE, UnitStatus.OCCUPIED),
    VACATE: (UnitStatus.OCCUPIED, UnitStatus.AVAILABLE),
}


def can_transition(unit: Unit, event: str) -> bool:
    source, _ = TRANSITIONS[event]
    return unit.status == source.value


def transition(unit: Unit, event: str) -> Unit:
    if event not in TRANSITIONS:
        raise ValueError(f"Unknown unit event: {event}")

    source, target = TRANSITIONS[event]
    if unit.status != source.value:
        if event == OCCUPY:
            raise ConflictError(f"Unit {unit.unit_number} is not available")
        raise ConflictError(
            f"Unit {unit.unit_number} cannot {event} from status '{unit.status}'"
        )

    unit.status = target.value
    logger.info(f"[UNIT] {unit.unit_number}: {source.value} -> {target.value}")
    return unit


def occupy(unit: Unit) -> Unit:
    return transition(unit, OCCUPY)


def vacate(unit: Unit) -> Unit:
    return transition(unit, VACATE)
