import pytest

from app.core.exceptions import StructureError
from app.models.property import Property, Floor
from app.models.unit import Unit, UnitStatus
from app.services.property_builder import floor_label, unit_number, plan_floor_labels


def test_floor_labels():
    assert floor_label(1) == "A"
    assert floor_label(26) == "Z"
    with pytest.raises(StructureError):
        floor_label(27)
    with pytest.raises(StructureError):
        floor_label(0)


def test_unit_number_is_zero_padded():
    assert unit_number("B", 3) == "B03"
    assert unit_number("A", 10) == "A10"


def test_plan_floor_labels():
    assert plan_floor_labels(3) == ["A", "B", "C"]
    assert plan_floor_labels(3, custom_floor_units=2) == ["A", "B", "C", "D"]
    assert plan_floor_labels(2, start_floor=3) == ["C", "D"]
    assert plan_floor_labels(0, custom_floor_units=4) == ["A"]


def test_build_with_custom_floor(db, build_structure):
    property_ = build_structure(
        floor_count=3, units_per_floor=4, custom_floor_units=2, custom_floor_rent=45000
    )

    assert [floor.name for floor in property_.floors] == ["A", "B", "C", "D"]
    assert len(property_.units) == 3 * 4 + 2
    assert all(unit.status == UnitStatus.AVAILABLE.value for unit in property_.units)

    top = property_.floors[-1]
    assert [unit.unit_number for unit in top.units] == ["D01", "D02"]
    assert all(unit.monthly_rent == 45000 for unit in top.units)
    assert [unit.unit_number for unit in property_.floors[0].units] == ["A01", "A02", "A03", "A04"]
    assert property_.property_type == "RESIDENTIAL"


def test_custom_floor_falls_back_to_default_rent(build_structure):
    property_ = build_structure(floor_count=1, units_per_floor=1, custom_floor_units=1)
    assert {unit.monthly_rent for unit in property_.units} == {20000}


def test_start_floor_shifts_labels(build_structure):
    property_ = build_structure(floor_count=2, units_per_floor=1, start_floor=25)
    assert [unit.unit_number for unit in property_.units] == ["Y01", "Z01"]


def test_floor_beyond_z_persists_nothing(db, build_structure):
    with pytest.raises(StructureError):
        build_structure(floor_count=26, units_per_floor=2, custom_floor_units=1)

    assert db.query(Property).count() == 0
    assert db.query(Floor).count() == 0
    assert db.query(Unit).count() == 0


def test_property_without_floors(build_structure):
    property_ = build_structure(floor_count=0, units_per_floor=5)
    assert property_.floors == []
    assert property_.units == []
