"""
Pydantic schemas for boosting orders.

``OrderCreate`` is what a customer submits.  ``total_price`` is the
amount the client showed the customer; the server stores it as given
and only falls back to the catalog price when it is omitted.

Customers read their orders as ``OrderRead`` (no game password).
Admins read ``OrderAdminRead``, which adds the owner's username and the
decrypted game password.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..models import OrderStatus


class OrderCreate(BaseModel):
    """Schema for placing a new order."""

    service_id: int = Field(..., description="Catalog service being ordered")
    game: Optional[str] = Field(None, description="Defaults to the service's game")
    uid: str = Field(..., min_length=1, description="In-game UID")
    server: str = Field(..., min_length=1, description="Game server, e.g. Asia")
    game_username: str = Field(..., min_length=1)
    game_password: str = Field(..., min_length=1)
    total_price: Optional[int] = Field(None, ge=0, description="Price shown to the customer")
    start_value: int = Field(0, ge=0)
    target_value: int = Field(0, ge=0)
    notes: str = ""

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str) -> str:
        v = v.strip()
        if len(v) > 1000:
            raise ValueError("Notes must be 1000 characters or fewer")
        return v


class OrderCreated(BaseModel):
    id: int
    message: str = "Order created"


class OrderRead(BaseModel):
    id: int
    user_id: int
    service_id: int
    game: str
    uid: str
    server: str
    game_username: str
    total_price: int
    status: OrderStatus
    start_value: int
    current_value: int
    target_value: int
    notes: str
    created_at: str
    service_name: Optional[str] = None
    service_category: Optional[str] = None


class OrderAdminRead(OrderRead):
    username: Optional[str] = None
    game_password: Optional[str] = None
