"""
Service layer for the admin dashboard figures.

Revenue only counts completed orders; active orders are those still
pending or in progress; the user count excludes admins.
"""

from ..core.store import get_ledger
from ..models import ACTIVE_STATUSES
from ..schemas.statistics import StatsOverview


class StatisticsService:
    """Aggregates over the ledger for administrators."""

    @classmethod
    async def overview(cls) -> StatsOverview:
        ledger = get_ledger()
        orders = ledger.list_orders()
        completed = [o for o in orders if o.status == "completed"]
        return StatsOverview(
            revenue=sum(o.total_price for o in completed),
            active_orders=sum(1 for o in orders if o.status in ACTIVE_STATUSES),
            total_users=sum(1 for u in ledger.list_users() if u.role == "customer"),
            completed_orders=len(completed),
        )
