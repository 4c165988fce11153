"""Pydantic schemas for the public service catalog."""

from pydantic import BaseModel

from ..models import Category, Game


class CatalogItemRead(BaseModel):
    id: int
    game: Game
    category: Category
    name: str
    description: str
    price_base: int
    price_per_unit: int
    unit_name: str
    created_at: str

    model_config = {
        "from_attributes": True,
    }
