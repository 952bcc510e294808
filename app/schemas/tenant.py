"""
Tenant Pydantic Schemas - API Request/Response Models
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from uuid import UUID


class TenantUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    id_number: Optional[str] = None
    emergency_contact: Optional[str] = None


class TenantResponse(BaseModel):
    id: UUID
    property_id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    id_number: Optional[str] = None
    emergency_contact: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
