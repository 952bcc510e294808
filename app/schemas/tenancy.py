"""
Unit Tenancy Schemas
"""
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompleteTenancyCreate(BaseModel):
    """New tenant moving into one or more units of a property."""
    property_id: UUID
    unit_ids: List[UUID] = Field(..., min_length=1)

    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field("", max_length=120)
    email: Optional[str] = None
    phone: Optional[str] = None
    id_number: Optional[str] = None
    emergency_contact: Optional[str] = None

    monthly_rent: float = Field(..., gt=0)
    start_date: date

    @field_validator("unit_ids")
    @classmethod
    def unit_ids_unique(cls, value: List[UUID]) -> List[UUID]:
        if len(set(value)) != len(value):
            raise ValueError("unit_ids must not repeat a unit")
        return value

    @property
    def tenant_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "property_id": "6f1c1c2e-8f1b-4b0e-9a53-3f1f3c9b2d11",
                "unit_ids": ["0b6d6b9a-1f52-4d6e-bb0b-2f3a8f1f0c21"],
                "first_name": "Wanjiru",
                "last_name": "Kamau",
                "email": "wanjiru@mail.co.ke",
                "phone": "+254712345678",
                "id_number": "29384756",
                "emergency_contact": "Otieno +254700111222",
                "monthly_rent": 25000,
                "start_date": "2024-03-01",
            }
        }
    )


class CompleteTenancyResponse(BaseModel):
    success: bool = True
    tenant_id: UUID
    message: str = "Tenancy created successfully"


class UnitTenancyCreate(BaseModel):
    """Existing tenant taking one more unit."""
    tenant_id: UUID
    unit_id: UUID
    property_id: UUID
    monthly_rent: float = Field(..., gt=0)
    start_date: date


class EndTenancyRequest(BaseModel):
    end_date: Optional[date] = None


class UnitTenancyResponse(BaseModel):
    id: UUID
    tenant_id: UUID
    unit_id: UUID
    property_id: UUID
    monthly_rent: float
    start_date: date
    end_date: Optional[date] = None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
