import logging
from datetime import date

import pytest

from app.core.exceptions import ConflictError, NotFoundError
from app.db.unit_of_work import atomic
from app.models.tenancy import UnitTenancy, TenancyStatus
from app.models.tenant import Tenant


def test_second_active_tenancy_is_a_conflict(db, build_structure, unit_by_number, lease):
    property_ = build_structure()
    a01 = unit_by_number(property_, "A01")
    tenant_id = lease(property_, [a01])

    with pytest.raises(ConflictError, match="unit_tenancies"):
        with atomic(db, "duplicate tenancy"):
            db.add(UnitTenancy(
                tenant_id=tenant_id,
                unit_id=a01.id,
                property_id=property_.id,
                monthly_rent=20000,
                start_date=date(2024, 5, 1),
                status=TenancyStatus.ACTIVE.value,
            ))

    assert db.query(UnitTenancy).filter_by(unit_id=a01.id).count() == 1


def test_domain_error_rolls_back_without_traceback(db, build_structure, caplog):
    property_ = build_structure()

    with caplog.at_level(logging.WARNING, logger="app.db.unit_of_work"):
        with pytest.raises(NotFoundError):
            with atomic(db, "register tenant"):
                db.add(Tenant(property_id=property_.id, name="Akinyi Otieno"))
                db.flush()
                raise NotFoundError("Unit X01 not found")

    assert db.query(Tenant).count() == 0
    record = next(r for r in caplog.records if r.name == "app.db.unit_of_work")
    assert "register tenant rolled back: Unit X01 not found" in record.getMessage()
    assert record.exc_info is None


def test_unexpected_error_keeps_traceback(db, caplog):
    with caplog.at_level(logging.WARNING, logger="app.db.unit_of_work"):
        with pytest.raises(RuntimeError):
            with atomic(db, "broken step"):
                raise RuntimeError("boom")

    record = next(r for r in caplog.records if r.name == "app.db.unit_of_work")
    assert record.exc_info is not None
