"""
Payment Routes - settlement, rollover and charges via PaymentScheduler
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from app.core.context import RequestContext
from app.core.deps import get_request_context
from app.database import get_db
from app.schemas.payment import (
    PaymentCreate, PaymentResponse, PaymentStatusEnum, PaymentStatusUpdate,
    ProcessPaymentRequest, ProcessPaymentResponse, MarkOverdueRequest,
    MarkOverdueResponse, SettlementDetails,
)
from app.services.payment_scheduler import PaymentScheduler

router = APIRouter()


@router.post("/process-payment", response_model=ProcessPaymentResponse)
def process_payment(
    request: ProcessPaymentRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Settle a tenant's pending payments in one all-or-nothing batch"""
    details = SettlementDetails(
        payment_date=request.payment_date,
        payment_method=request.payment_method,
        reference_number=request.reference_number,
    )
    payment_ids = PaymentScheduler(db).process_payment(
        ctx, request.tenant_id, request.pending_payment_ids, details
    )
    return ProcessPaymentResponse(payment_ids=payment_ids)


@router.patch("/{payment_id}/status", response_model=PaymentResponse)
def update_payment_status(
    payment_id: UUID,
    request: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    details = SettlementDetails(
        payment_date=request.payment_date,
        payment_method=request.payment_method,
        reference_number=request.reference_number,
    )
    return PaymentScheduler(db).update_payment_status(ctx, payment_id, request.status.value, details)


@router.post("/mark-overdue", response_model=MarkOverdueResponse)
def mark_overdue(
    request: MarkOverdueRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    updated = PaymentScheduler(db).mark_overdue_payments(ctx, as_of=request.as_of, property_id=request.property_id)
    return MarkOverdueResponse(updated=updated)


@router.post("/", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    request: PaymentCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return PaymentScheduler(db).create_payment(ctx, request)


@router.get("/", response_model=List[PaymentResponse])
def list_payments(
    property_id: Optional[UUID] = None,
    unit_tenancy_id: Optional[UUID] = None,
    status: Optional[PaymentStatusEnum] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return PaymentScheduler(db).list_payments(
        ctx,
        property_id=property_id,
        unit_tenancy_id=unit_tenancy_id,
        status=status.value if status else None,
    )


@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(
    payment_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return PaymentScheduler(db).get_payment(ctx, payment_id)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(
    payment_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    PaymentScheduler(db).delete_payment(ctx, payment_id)
    return None
