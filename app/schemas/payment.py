"""
Payment Request/Response Schemas
Pydantic models for payment API validation
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.payment import PaymentMethod


class PaymentStatusEnum(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


# ==================== Settlement ====================

class SettlementDetails(BaseModel):
    """How a payment was settled. payment_date defaults to today."""
    payment_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    reference_number: Optional[str] = None


class ProcessPaymentRequest(SettlementDetails):
    tenant_id: UUID
    pending_payment_ids: List[UUID] = Field(..., min_length=1)
    # Informational only, amounts are never prorated
    amount: Optional[float] = None
    description: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tenant_id": "9a7c2b0e-2f7b-4a55-9f8e-0d9e1f2a3b4c",
                "pending_payment_ids": ["1e2d3c4b-5a69-4788-9a0b-1c2d3e4f5a6b"],
                "payment_date": "2024-03-04",
                "payment_method": "mpesa",
                "reference_number": "SC41XYZ9QK",
            }
        }
    )


class ProcessPaymentResponse(BaseModel):
    success: bool = True
    payment_ids: List[UUID]
    message: str = "Payment processed successfully"


class PaymentStatusUpdate(SettlementDetails):
    status: PaymentStatusEnum


class MarkOverdueRequest(BaseModel):
    as_of: Optional[date] = None
    property_id: Optional[UUID] = None


class MarkOverdueResponse(BaseModel):
    success: bool = True
    updated: int


# ==================== Charges ====================

class PaymentCreate(BaseModel):
    unit_tenancy_id: UUID
    amount: float = Field(..., gt=0)
    description: Optional[str] = None
    due_date: date


class PaymentResponse(BaseModel):
    id: UUID
    unit_tenancy_id: UUID
    property_id: UUID
    amount: float
    description: Optional[str] = None
    due_date: date
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    reference_number: Optional[str] = None
    payment_status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
