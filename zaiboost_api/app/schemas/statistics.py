"""Response schema for the admin dashboard figures."""

from pydantic import BaseModel


class StatsOverview(BaseModel):
    revenue: int
    active_orders: int
    total_users: int
    completed_orders: int
