import uuid
from datetime import date

import pytest

from app.core.exceptions import AuthorizationError, ConflictError, DomainValidationError, NotFoundError
from app.models.payment import Payment, PaymentStatus
from app.models.tenancy import UnitTenancy
from app.schemas.payment import PaymentCreate, SettlementDetails
from app.services.payment_scheduler import PaymentScheduler, is_rent_charge


@pytest.fixture
def tenancy(db, build_structure, unit_by_number, lease):
    property_ = build_structure()
    tenant_id = lease(property_, [unit_by_number(property_, "A01")], monthly_rent=18000)
    return db.query(UnitTenancy).filter_by(tenant_id=tenant_id).one()


@pytest.fixture
def scheduler(db):
    return PaymentScheduler(db)


def charges(db, tenancy):
    return db.query(Payment).filter_by(unit_tenancy_id=tenancy.id).order_by(Payment.due_date).all()


def by_description(db, tenancy, description):
    return next(p for p in charges(db, tenancy) if p.description == description)


def test_is_rent_charge():
    assert is_rent_charge(Payment(description="Rent - March 2024"))
    assert is_rent_charge(Payment(description="MONTHLY RENT"))
    assert not is_rent_charge(Payment(description="Security Deposit - Unit A01"))
    assert not is_rent_charge(Payment(description=None))


def test_settling_rent_schedules_next_invoice(db, ctx, scheduler, tenancy):
    rent = scheduler.create_payment(
        ctx, PaymentCreate(unit_tenancy_id=tenancy.id, amount=18000, description="Rent - March 2024", due_date=date(2024, 3, 5))
    )

    scheduler.update_payment_status(ctx, rent.id, "paid")

    next_rent = by_description(db, tenancy, "Monthly Rent")
    assert next_rent.payment_status == PaymentStatus.PENDING.value
    assert next_rent.due_date == date(2024, 4, 4)
    assert next_rent.amount == 18000
    assert next_rent.property_id == tenancy.property_id


def test_settling_deposit_does_not_roll_over(db, ctx, scheduler, tenancy):
    deposit = by_description(db, tenancy, "Security Deposit - Unit A01")

    scheduler.update_payment_status(ctx, deposit.id, "paid")

    assert len(charges(db, tenancy)) == 2


def test_settling_twice_rolls_over_once(db, ctx, scheduler, tenancy):
    rent = by_description(db, tenancy, "Rent - March 2024")

    scheduler.update_payment_status(ctx, rent.id, "paid")
    scheduler.update_payment_status(ctx, rent.id, "paid")

    assert len(charges(db, tenancy)) == 3


def test_settlement_details_are_stamped(db, ctx, scheduler, tenancy):
    rent = by_description(db, tenancy, "Rent - March 2024")
    details = SettlementDetails(payment_date=date(2024, 3, 4), payment_method="mpesa", reference_number="SC41XYZ9QK")

    paid = scheduler.update_payment_status(ctx, rent.id, "paid", details)

    assert paid.payment_date == date(2024, 3, 4)
    assert paid.payment_method == "mpesa"
    assert paid.reference_number == "SC41XYZ9QK"


def test_payment_date_defaults_to_today(ctx, db, scheduler, tenancy):
    deposit = by_description(db, tenancy, "Security Deposit - Unit A01")
    assert scheduler.update_payment_status(ctx, deposit.id, "paid").payment_date == date.today()


def test_paid_payment_cannot_be_reopened(db, ctx, scheduler, tenancy):
    deposit = by_description(db, tenancy, "Security Deposit - Unit A01")
    scheduler.update_payment_status(ctx, deposit.id, "paid")

    with pytest.raises(ConflictError):
        scheduler.update_payment_status(ctx, deposit.id, "pending")

    db.expire_all()
    assert deposit.payment_status == PaymentStatus.PAID.value


def test_unknown_status(db, ctx, scheduler, tenancy):
    deposit = by_description(db, tenancy, "Security Deposit - Unit A01")
    with pytest.raises(DomainValidationError):
        scheduler.update_payment_status(ctx, deposit.id, "refunded")


def test_missing_payment(ctx, scheduler, tenancy):
    with pytest.raises(NotFoundError):
        scheduler.update_payment_status(ctx, uuid.uuid4(), "paid")


def test_rollover_chain_keeps_monthly_cadence(db, ctx, scheduler, tenancy):
    first = by_description(db, tenancy, "Rent - March 2024")
    scheduler.update_payment_status(ctx, first.id, "paid")
    second = by_description(db, tenancy, "Monthly Rent")
    scheduler.update_payment_status(ctx, second.id, "paid")

    upcoming = [
        p for p in charges(db, tenancy)
        if p.description == "Monthly Rent" and p.payment_status == PaymentStatus.PENDING.value
    ]
    assert [p.due_date for p in upcoming] == [date(2024, 5, 5)]


def test_process_payment_settles_batch(db, ctx, scheduler, tenancy):
    ids = [p.id for p in charges(db, tenancy)]

    processed = scheduler.process_payment(
        ctx, tenancy.tenant_id, ids, SettlementDetails(payment_method="cash")
    )

    assert processed == ids
    statuses = {p.id: p.payment_status for p in charges(db, tenancy)}
    assert all(statuses[payment_id] == PaymentStatus.PAID.value for payment_id in ids)
    # only the rent charge rolls over
    assert len(statuses) == 3


def test_process_payment_with_foreign_payment_changes_nothing(
    db, ctx, scheduler, tenancy, unit_by_number, lease
):
    property_ = tenancy.property
    other_tenant = lease(property_, [unit_by_number(property_, "A02")], first_name="Otieno")
    other_tenancy = db.query(UnitTenancy).filter_by(tenant_id=other_tenant).one()
    ids = [p.id for p in charges(db, tenancy)] + [charges(db, other_tenancy)[0].id]

    with pytest.raises(AuthorizationError, match=str(tenancy.tenant_id)):
        scheduler.process_payment(ctx, tenancy.tenant_id, ids)

    db.expire_all()
    assert db.query(Payment).filter_by(payment_status=PaymentStatus.PAID.value).count() == 0
    assert db.query(Payment).count() == 4


def test_mark_overdue_only_touches_past_due_pending(db, ctx, scheduler, tenancy):
    # deposit due 2024-03-01, first rent due 2024-03-06
    updated = scheduler.mark_overdue_payments(ctx, as_of=date(2024, 3, 4))

    assert updated == 1
    assert by_description(db, tenancy, "Security Deposit - Unit A01").payment_status == PaymentStatus.OVERDUE.value
    assert by_description(db, tenancy, "Rent - March 2024").payment_status == PaymentStatus.PENDING.value


def test_mark_overdue_skips_paid(db, ctx, scheduler, tenancy):
    deposit = by_description(db, tenancy, "Security Deposit - Unit A01")
    scheduler.update_payment_status(ctx, deposit.id, "paid")

    assert scheduler.mark_overdue_payments(ctx, as_of=date(2024, 3, 4), property_id=tenancy.property_id) == 0


def test_overdue_rent_can_still_be_settled(db, ctx, scheduler, tenancy):
    scheduler.mark_overdue_payments(ctx, as_of=date(2024, 4, 1))
    rent = by_description(db, tenancy, "Rent - March 2024")
    assert rent.payment_status == PaymentStatus.OVERDUE.value

    scheduler.update_payment_status(ctx, rent.id, "paid")

    assert by_description(db, tenancy, "Monthly Rent").due_date == date(2024, 4, 5)


def test_delete_payment(db, ctx, scheduler, tenancy):
    deposit = by_description(db, tenancy, "Security Deposit - Unit A01")
    rent = by_description(db, tenancy, "Rent - March 2024")
    scheduler.update_payment_status(ctx, deposit.id, "paid")

    with pytest.raises(ConflictError):
        scheduler.delete_payment(ctx, deposit.id)

    scheduler.delete_payment(ctx, rent.id)
    assert [p.description for p in charges(db, tenancy)] == ["Security Deposit - Unit A01"]


def test_list_payments_filters(ctx, scheduler, tenancy):
    pending = scheduler.list_payments(ctx, property_id=tenancy.property_id, status=PaymentStatus.PENDING.value)
    assert len(pending) == 2
    assert scheduler.list_payments(ctx, unit_tenancy_id=tenancy.id, status=PaymentStatus.PAID.value) == []
