"""
Payment Scheduler

Moves payments through pending -> paid / overdue and materialises the next
rent invoice when a rent charge is settled:

  * settling a payment stamps date, method and reference exactly once;
    settling it again is a no-op and never produces a second rollover
  * a settled payment whose description mentions "rent" (any case) spawns a
    pending "Monthly Rent" payment due RENT_CYCLE_DAYS after its due date,
    same amount, tenancy and property; deposits do not roll over
  * a paid payment cannot be moved back to pending/overdue

There is no background job. The next invoice is written synchronously in the
same transaction as the settlement that triggered it.
"""
import logging
import uuid
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.context import RequestContext
from app.core.exceptions import AuthorizationError, ConflictError, DomainValidationError, NotFoundError
from app.db.store import EntityStore
from app.db.unit_of_work import atomic
from app.models.payment import Payment, PaymentStatus
from app.models.property import Property
from app.models.tenancy import UnitTenancy
from app.schemas.payment import PaymentCreate, SettlementDetails

logger = logging.getLogger(__name__)

NEXT_RENT_DESCRIPTION = "Monthly Rent"


def is_rent_charge(payment: Payment) -> bool:
    return bool(payment.description) and "rent" in payment.description.lower()


class PaymentScheduler:
    def __init__(self, db: Session):
        self.db = db
        self.store = EntityStore(db)

    # ──────────────────────────── Settlement ────────────────────────────

    def update_payment_status(
        self,
        ctx: RequestContext,
        payment_id: uuid.UUID,
        new_status: str,
        details: Optional[SettlementDetails] = None,
    ) -> Payment:
        """Change one payment's status; settling a rent charge rolls it over."""
        with atomic(self.db, "update payment status"):
            payment = self._apply_status(ctx, payment_id, new_status, details)
        return payment

    def process_payment(
        self,
        ctx: RequestContext,
        tenant_id: uuid.UUID,
        pending_payment_ids: List[uuid.UUID],
        details: Optional[SettlementDetails] = None,
    ) -> List[uuid.UUID]:
        """
        Settle a batch of payments on behalf of one tenant.

        All-or-nothing: if any payment is missing or belongs to another
        tenant, no payment in the batch changes. Returns the ids in input order.
        """
        processed: List[uuid.UUID] = []
        with atomic(self.db, "process payment"):
            for payment_id in pending_payment_ids:
                payment = self.store.require(Payment, payment_id, label="Payment", for_update=True)
                if payment.unit_tenancy.tenant_id != tenant_id:
                    raise AuthorizationError(
                        f"Payment {payment_id} does not belong to tenant {tenant_id}"
                    )
                self._apply_status(ctx, payment_id, PaymentStatus.PAID.value, details)
                processed.append(payment.id)

        logger.info(f"[PAYMENT] Processed {len(processed)} payment(s) for tenant {tenant_id} by {ctx.actor}")
        return processed

    def schedule_next_rent_payment(self, paid_payment: Payment) -> Optional[Payment]:
        """
        Create the next period's rent invoice for a settled rent charge.
        Returns None for anything that is not rent (deposits, fees).
        """
        if not is_rent_charge(paid_payment):
            return None

        next_payment = self.store.save(
            Payment(
                unit_tenancy_id=paid_payment.unit_tenancy_id,
                property_id=paid_payment.property_id,
                amount=paid_payment.amount,
                description=NEXT_RENT_DESCRIPTION,
                due_date=paid_payment.due_date + timedelta(days=settings.RENT_CYCLE_DAYS),
                payment_status=PaymentStatus.PENDING.value,
            )
        )
        logger.info(
            f"[PAYMENT] Rolled over {paid_payment.id}: next rent {next_payment.id} due {next_payment.due_date}"
        )
        return next_payment

    def mark_overdue_payments(
        self,
        ctx: RequestContext,
        as_of: Optional[date] = None,
        property_id: Optional[uuid.UUID] = None,
    ) -> int:
        """Flip pending payments due before `as_of` (default today) to overdue."""
        cutoff = as_of or date.today()
        with atomic(self.db, "mark overdue payments"):
            stmt = select(Payment).where(
                Payment.payment_status == PaymentStatus.PENDING.value,
                Payment.due_date < cutoff,
            )
            if property_id is not None:
                ctx.ensure_access(self.store.require(Property, property_id, label="Property"))
                stmt = stmt.where(Payment.property_id == property_id)

            payments = [p for p in self.db.execute(stmt.with_for_update()).scalars() if ctx.can_access(p.property)]
            for payment in payments:
                payment.payment_status = PaymentStatus.OVERDUE.value
            self.db.flush()

        logger.info(f"[PAYMENT] {len(payments)} payment(s) marked overdue as of {cutoff} by {ctx.actor}")
        return len(payments)

    # ──────────────────────────── Charges ────────────────────────────

    def create_payment(self, ctx: RequestContext, request: PaymentCreate) -> Payment:
        """Raise a manual pending charge against an existing tenancy."""
        with atomic(self.db, "create payment"):
            tenancy = self.store.require(UnitTenancy, request.unit_tenancy_id, label="Tenancy")
            ctx.ensure_access(tenancy.property)
            payment = self.store.save(
                Payment(
                    unit_tenancy_id=tenancy.id,
                    property_id=tenancy.property_id,
                    amount=request.amount,
                    description=request.description,
                    due_date=request.due_date,
                    payment_status=PaymentStatus.PENDING.value,
                )
            )
        logger.info(f"[PAYMENT] Charge {payment.id} of {request.amount} raised on tenancy {request.unit_tenancy_id}")
        return payment

    def delete_payment(self, ctx: RequestContext, payment_id: uuid.UUID) -> None:
        with atomic(self.db, "delete payment"):
            payment = self.store.require(Payment, payment_id, label="Payment", for_update=True)
            ctx.ensure_access(payment.property)
            if payment.payment_status == PaymentStatus.PAID.value:
                raise ConflictError(f"Payment {payment_id} is settled and cannot be deleted")
            self.store.delete(Payment, payment_id, label="Payment")

    def get_payment(self, ctx: RequestContext, payment_id: uuid.UUID) -> Payment:
        payment = self.store.require(Payment, payment_id, label="Payment")
        ctx.ensure_access(payment.property)
        return payment

    def list_payments(
        self,
        ctx: RequestContext,
        property_id: Optional[uuid.UUID] = None,
        unit_tenancy_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
    ) -> List[Payment]:
        payments = self.store.list(
            Payment,
            order_by=Payment.due_date,
            property_id=property_id,
            unit_tenancy_id=unit_tenancy_id,
            payment_status=status,
        )
        return [p for p in payments if ctx.can_access(p.property)]

    # ──────────────────────────── Internals ────────────────────────────

    def _apply_status(
        self,
        ctx: RequestContext,
        payment_id: uuid.UUID,
        new_status: str,
        details: Optional[SettlementDetails],
    ) -> Payment:
        try:
            new_status = PaymentStatus(new_status).value
        except ValueError:
            raise DomainValidationError(f"Unknown payment status '{new_status}' for payment {payment_id}")

        payment = self.store.require(Payment, payment_id, label="Payment", for_update=True)
        ctx.ensure_access(payment.property)
        previous = payment.payment_status

        if previous == PaymentStatus.PAID.value:
            if new_status == PaymentStatus.PAID.value:
                logger.info(f"[PAYMENT] {payment_id} already settled, nothing to do")
                return payment
            raise ConflictError(f"Payment {payment_id} is already settled and cannot become {new_status}")

        payment.payment_status = new_status
        if new_status != PaymentStatus.PAID.value:
            self.store.save(payment)
            logger.info(f"[PAYMENT] {payment_id}: {previous} -> {new_status}")
            return payment

        details = details or SettlementDetails()
        payment.payment_date = details.payment_date or date.today()
        payment.payment_method = details.payment_method.value if details.payment_method else None
        payment.reference_number = details.reference_number
        self.store.save(payment)
        logger.info(f"[PAYMENT] {payment_id} settled ({previous} -> paid) ref={payment.reference_number}")

        self.schedule_next_rent_payment(payment)
        return payment
