from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime
from typing import Optional, List


# ==================== Units & Floors ====================

class UnitResponse(BaseModel):
    id: UUID
    property_id: UUID
    floor_id: Optional[UUID] = None
    unit_number: str
    monthly_rent: Optional[float] = None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FloorResponse(BaseModel):
    id: UUID
    property_id: UUID
    name: str
    units: List[UnitResponse] = []

    model_config = ConfigDict(from_attributes=True)


# ==================== Properties ====================

class PropertyStructureCreate(BaseModel):
    """Property plus generated floors/units in one request."""
    property_name: str = Field(..., min_length=1, max_length=255)
    property_address: str = Field(..., min_length=1, max_length=500)
    property_type: Optional[str] = None
    description: Optional[str] = None
    organization_id: Optional[UUID] = None

    floor_count: int = Field(0, ge=0)
    units_per_floor: int = Field(0, ge=0)
    start_floor: int = Field(1, ge=1)
    custom_floor_units: Optional[int] = Field(None, ge=0)

    default_rent: Optional[float] = Field(None, ge=0)
    custom_floor_rent: Optional[float] = Field(None, ge=0)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "property_name": "Kilimani Heights",
                "property_address": "Argwings Kodhek Rd, Nairobi",
                "floor_count": 4,
                "units_per_floor": 6,
                "start_floor": 1,
                "custom_floor_units": 2,
                "default_rent": 25000,
                "custom_floor_rent": 40000,
            }
        }
    )


class PropertyUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    property_type: Optional[str] = None
    description: Optional[str] = None


class PropertyResponse(BaseModel):
    id: UUID
    organization_id: Optional[UUID] = None
    name: str
    address: str
    property_type: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyDetailResponse(PropertyResponse):
    floors: List[FloorResponse] = []
