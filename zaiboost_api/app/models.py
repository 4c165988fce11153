"""
Typed records stored in the ledger.

Each collection of the JSON snapshot maps to one pydantic model.  The
models enforce required fields when a record is created or loaded from
disk; API request and response shapes live separately in ``schemas``.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Role = Literal["customer", "admin"]
Game = Literal["genshin", "wuwa"]
Category = Literal["daily", "explore", "endgame"]
OrderStatus = Literal["pending", "processing", "completed", "cancelled"]

ACTIVE_STATUSES = ("pending", "processing")
TERMINAL_STATUSES = ("completed", "cancelled")


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string with a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class User(BaseModel):
    id: int
    username: str
    password: str
    role: Role = "customer"
    created_at: str = Field(default_factory=utc_now)


class CatalogItem(BaseModel):
    """A purchasable boosting service and its pricing rule."""

    id: int
    game: Game
    category: Category
    name: str
    description: str = ""
    price_base: int = 0
    price_per_unit: int = 0
    unit_name: str
    created_at: str = Field(default_factory=utc_now)

    def quote(self, start_value: int = 0, target_value: int = 0) -> int:
        """Price of taking an account from ``start_value`` to ``target_value``.

        Endgame clears are sold at the flat base price; the progress range
        does not affect it.
        """
        if self.category == "endgame":
            return self.price_base
        return self.price_base + max(0, target_value - start_value) * self.price_per_unit


class Order(BaseModel):
    id: int
    user_id: int
    service_id: int
    game: str
    uid: str
    server: str
    game_username: str
    game_password: str
    total_price: int = 0
    status: OrderStatus = "pending"
    start_value: int = 0
    current_value: int = 0
    target_value: int = 0
    notes: str = ""
    created_at: str = Field(default_factory=utc_now)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class OrderUpdate(BaseModel):
    """The only order fields an admin may change after creation."""

    status: Optional[OrderStatus] = None
    current_value: Optional[int] = Field(None, ge=0)


class Review(BaseModel):
    id: int
    order_id: Optional[int] = None
    user_id: int
    rating: int
    comment: str
    created_at: str = Field(default_factory=utc_now)


class Counters(BaseModel):
    users: int = 0
    services: int = 0
    orders: int = 0
    reviews: int = 0


class Snapshot(BaseModel):
    """Full ledger state as written to disk."""

    users: List[User] = Field(default_factory=list)
    services: List[CatalogItem] = Field(default_factory=list)
    orders: List[Order] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)
    counters: Counters = Field(default_factory=Counters)
