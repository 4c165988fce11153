"""Public catalog endpoint for API v1."""

from typing import List, Optional

from fastapi import APIRouter, Query

from zaiboost_api.app.models import Category, Game
from zaiboost_api.app.schemas.catalog import CatalogItemRead
from zaiboost_api.app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[CatalogItemRead])
async def list_services(
    game: Optional[Game] = Query(None),
    category: Optional[Category] = Query(None),
) -> List[CatalogItemRead]:
    """List the boosting services on offer.  No authentication required."""
    items = await CatalogService.list_services(game=game, category=category)
    return [CatalogItemRead.model_validate(item) for item in items]
