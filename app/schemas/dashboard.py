from pydantic import BaseModel


class PropertyStatsResponse(BaseModel):
    total_units: int
    available_units: int
    occupied_units: int
    occupancy_rate: int
    tenant_count: int
    pending_payments: int
    completed_payments: int
    overdue_payments: int
    outstanding_amount: float
    collected_amount: float
