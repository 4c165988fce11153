"""Admin dashboard endpoints for API v1."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from zaiboost_api.app.core.security import require_admin
from zaiboost_api.app.schemas.statistics import StatsOverview
from zaiboost_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/stats", response_model=StatsOverview)
async def get_stats(current_user: Dict[str, Any] = Depends(require_admin)) -> StatsOverview:
    """Revenue from completed orders, active order count and customer count."""
    return await StatisticsService.overview()
