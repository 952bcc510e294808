from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID

from app.core.context import RequestContext
from app.core.deps import get_request_context
from app.database import get_db
from app.schemas.dashboard import PropertyStatsResponse
from app.services.dashboard_service import get_property_stats

router = APIRouter()


@router.get("/property/{property_id}/stats", response_model=PropertyStatsResponse)
def property_stats(
    property_id: UUID,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    """Unit occupancy and payment rollups for one property"""
    return get_property_stats(ctx, db, property_id).to_dict()
