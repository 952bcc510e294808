"""
Tenancy Lifecycle Manager

Creates and ends unit tenancies. Every path that puts a tenant into a unit
goes through `_open_tenancy`, which locks the unit row, runs the checked
`occupy` transition and writes the tenancy. `create_complete_tenancy` also
bootstraps the deposit and first-rent payments for each unit.

Public methods are each a single unit of work: a failure on any unit rolls
back the tenant, tenancies, payments and unit statuses written so far.
"""
import logging
import uuid
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.context import RequestContext
from app.core.exceptions import ConflictError, NotFoundError
from app.db.store import EntityStore
from app.db.unit_of_work import atomic
from app.models.payment import Payment, PaymentStatus
from app.models.property import Property
from app.models.tenancy import UnitTenancy, TenancyStatus
from app.models.tenant import Tenant
from app.models.unit import Unit
from app.schemas.tenancy import CompleteTenancyCreate, UnitTenancyCreate
from app.services import unit_state

logger = logging.getLogger(__name__)


def deposit_description(unit_number: str) -> str:
    return f"Security Deposit - Unit {unit_number}"


def first_rent_description(start_date: date) -> str:
    return f"Rent - {start_date.strftime('%B')} {start_date.year}"


class TenancyService:
    def __init__(self, db: Session):
        self.db = db
        self.store = EntityStore(db)

    # ──────────────────────────── Lifecycle ────────────────────────────

    def create_complete_tenancy(self, ctx: RequestContext, request: CompleteTenancyCreate) -> uuid.UUID:
        """
        Register a tenant and lease them every unit in `request.unit_ids`.

        Units are processed in the given order. Returns the new tenant id.

        Raises:
            NotFoundError: property or a unit is missing, or a unit belongs
                to another property.
            ConflictError: a unit is not available.
            AuthorizationError: the property is outside the caller's organization.
        """
        with atomic(self.db, "create tenancy"):
            property_ = self._require_property(ctx, request.property_id)

            tenant = self.store.save(
                Tenant(
                    property_id=property_.id,
                    name=request.tenant_name,
                    email=request.email,
                    phone=request.phone,
                    id_number=request.id_number,
                    emergency_contact=request.emergency_contact,
                )
            )

            for unit_id in request.unit_ids:
                tenancy, unit = self._open_tenancy(
                    property_, tenant, unit_id, request.monthly_rent, request.start_date
                )
                self._create_initial_payments(tenancy, unit)

            tenant_id = tenant.id

        logger.info(
            f"[TENANCY] Tenant {tenant_id} '{request.tenant_name}' moved into "
            f"{len(request.unit_ids)} unit(s) of property {request.property_id} by {ctx.actor}"
        )
        return tenant_id

    def create_unit_tenancy(self, ctx: RequestContext, request: UnitTenancyCreate) -> UnitTenancy:
        """Lease one more unit to an existing tenant. No payments are bootstrapped."""
        with atomic(self.db, "create unit tenancy"):
            property_ = self._require_property(ctx, request.property_id)
            tenant = self.store.require(Tenant, request.tenant_id, label="Tenant")
            if tenant.property_id != property_.id:
                raise NotFoundError(f"Tenant {tenant.id} not found in property {property_.id}")

            tenancy, _ = self._open_tenancy(
                property_, tenant, request.unit_id, request.monthly_rent, request.start_date
            )

        logger.info(f"[TENANCY] Tenancy {tenancy.id} opened for tenant {request.tenant_id} by {ctx.actor}")
        return tenancy

    def end_tenancy(self, ctx: RequestContext, tenancy_id: uuid.UUID, end_date: Optional[date] = None) -> UnitTenancy:
        """
        End an active tenancy and release its unit.

        Raises NotFoundError when the tenancy does not exist or has already
        ended; nothing is changed in that case.
        """
        with atomic(self.db, "end tenancy"):
            tenancy = self.store.get(UnitTenancy, tenancy_id, for_update=True)
            if tenancy is None or tenancy.status != TenancyStatus.ACTIVE.value:
                raise NotFoundError(f"Active tenancy not found: {tenancy_id}")
            ctx.ensure_access(self.store.require(Property, tenancy.property_id, label="Property"))

            unit = self.store.require(Unit, tenancy.unit_id, label="Unit", for_update=True)

            tenancy.status = TenancyStatus.ENDED.value
            tenancy.end_date = end_date or date.today()
            self.store.save(tenancy)

            unit_state.vacate(unit)
            self.store.save(unit)

        logger.info(f"[TENANCY] Tenancy {tenancy_id} ended, unit {unit.unit_number} released by {ctx.actor}")
        return tenancy

    # ──────────────────────────── Queries ────────────────────────────

    def get_tenancy(self, ctx: RequestContext, tenancy_id: uuid.UUID) -> UnitTenancy:
        tenancy = self.store.require(UnitTenancy, tenancy_id, label="Tenancy")
        ctx.ensure_access(tenancy.property)
        return tenancy

    def get_active_tenancy(self, ctx: RequestContext, unit_id: uuid.UUID) -> UnitTenancy:
        matches = self.store.list(UnitTenancy, unit_id=unit_id, status=TenancyStatus.ACTIVE.value)
        if not matches:
            raise NotFoundError(f"No active tenancy for unit {unit_id}")
        ctx.ensure_access(matches[0].property)
        return matches[0]

    def list_tenancies(
        self,
        ctx: RequestContext,
        property_id: Optional[uuid.UUID] = None,
        tenant_id: Optional[uuid.UUID] = None,
        unit_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
    ) -> List[UnitTenancy]:
        tenancies = self.store.list(
            UnitTenancy,
            order_by=UnitTenancy.start_date,
            property_id=property_id,
            tenant_id=tenant_id,
            unit_id=unit_id,
            status=status,
        )
        return [t for t in tenancies if ctx.can_access(t.property)]

    # ──────────────────────────── Internals ────────────────────────────

    def _require_property(self, ctx: RequestContext, property_id: uuid.UUID) -> Property:
        property_ = self.store.require(Property, property_id, label="Property")
        ctx.ensure_access(property_)
        return property_

    def _open_tenancy(
        self,
        property_: Property,
        tenant: Tenant,
        unit_id: uuid.UUID,
        monthly_rent: float,
        start_date: date,
    ):
        unit = self.store.require(Unit, unit_id, label="Unit", for_update=True)
        if unit.property_id != property_.id:
            raise NotFoundError(f"Unit {unit.unit_number} not found in property {property_.id}")

        # Raises ConflictError naming the unit when it is not available
        unit_state.occupy(unit)

        try:
            tenancy = self.store.save(
                UnitTenancy(
                    tenant_id=tenant.id,
                    unit_id=unit.id,
                    property_id=property_.id,
                    monthly_rent=monthly_rent,
                    start_date=start_date,
                    status=TenancyStatus.ACTIVE.value,
                )
            )
        except IntegrityError as exc:
            # Unit status drifted from its tenancies; the active-tenancy index still holds
            raise ConflictError(f"Unit {unit.unit_number} already has an active tenancy") from exc
        self.store.save(unit)
        return tenancy, unit

    def _create_initial_payments(self, tenancy: UnitTenancy, unit: Unit) -> List[Payment]:
        deposit = self.store.save(
            Payment(
                unit_tenancy_id=tenancy.id,
                property_id=tenancy.property_id,
                amount=tenancy.monthly_rent * settings.DEPOSIT_MONTHS,
                description=deposit_description(unit.unit_number),
                due_date=tenancy.start_date,
                payment_status=PaymentStatus.PENDING.value,
            )
        )
        rent = self.store.save(
            Payment(
                unit_tenancy_id=tenancy.id,
                property_id=tenancy.property_id,
                amount=tenancy.monthly_rent,
                description=first_rent_description(tenancy.start_date),
                due_date=tenancy.start_date + timedelta(days=settings.FIRST_RENT_DUE_DAYS),
                payment_status=PaymentStatus.PENDING.value,
            )
        )
        return [deposit, rent]
