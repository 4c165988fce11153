"""Read access to the service catalog and its pricing rules."""

from typing import List, Optional

from ..core.errors import NotFound
from ..core.store import get_ledger
from ..models import CatalogItem


class CatalogService:
    """Service for the public catalog of boosting services."""

    @classmethod
    async def list_services(cls, game: Optional[str] = None, category: Optional[str] = None) -> List[CatalogItem]:
        """Return catalog items, optionally filtered by game and category."""
        items = get_ledger().list_services()
        if game:
            items = [s for s in items if s.game == game]
        if category:
            items = [s for s in items if s.category == category]
        return items

    @classmethod
    async def get_service(cls, service_id: int) -> CatalogItem:
        service = get_ledger().get_service(service_id)
        if service is None:
            raise NotFound(f"Service {service_id} not found")
        return service

    @classmethod
    async def quote(cls, service_id: int, start_value: int = 0, target_value: int = 0) -> int:
        """Catalog price for a progress range on the given service."""
        service = await cls.get_service(service_id)
        return service.quote(start_value, target_value)
