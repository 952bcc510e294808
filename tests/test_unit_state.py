import pytest

from app.core.exceptions import ConflictError
from app.models.unit import Unit, UnitStatus
from app.services import unit_state


def make_unit(status=UnitStatus.AVAILABLE.value):
    return Unit(unit_number="A01", status=status)


def test_occupy_available_unit():
    unit = unit_state.occupy(make_unit())
    assert unit.status == UnitStatus.OCCUPIED.value


def test_occupy_occupied_unit_names_the_unit():
    unit = make_unit(UnitStatus.OCCUPIED.value)
    with pytest.raises(ConflictError, match="Unit A01 is not available"):
        unit_state.occupy(unit)
    assert unit.status == UnitStatus.OCCUPIED.value


def test_vacate_occupied_unit():
    unit = unit_state.vacate(make_unit(UnitStatus.OCCUPIED.value))
    assert unit.status == UnitStatus.AVAILABLE.value


def test_vacate_available_unit_is_refused():
    unit = make_unit()
    with pytest.raises(ConflictError):
        unit_state.vacate(unit)
    assert unit.status == UnitStatus.AVAILABLE.value


def test_can_transition():
    unit = make_unit()
    assert unit_state.can_transition(unit, unit_state.OCCUPY)
    assert not unit_state.can_transition(unit, unit_state.VACATE)


def test_unknown_event():
    with pytest.raises(ValueError):
        unit_state.transition(make_unit(), "demolish")
