"""
Products module data models.
"""

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A catalogue entry."""

    model_config = {"frozen": True}

    id: int = Field(..., description="Product ID")
    name: str = Field(..., description="Display name")
    price: float = Field(..., ge=0, description="Unit price")


CATALOGUE: tuple[Product, ...] = (
    Product(id=123, name="Chicken Breast", price=12.99),
)
