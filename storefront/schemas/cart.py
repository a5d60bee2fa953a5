"""
Pydantic schemas for cart pricing
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class CartLine(BaseModel):
    """A product and the quantity wanted"""
    product_id: int = Field(..., gt=0, description="Product ID")
    quantity: int = Field(1, gt=0, description="Quantity")


class Cart(BaseModel):
    """Cart contents as held by the client"""
    items: List[CartLine] = Field(default_factory=list)


class CartQuoteLine(BaseModel):
    """Cart line priced with the current product price"""
    product_id: int
    name: str
    image_url: Optional[str] = None
    price: Decimal
    quantity: int
    subtotal: Decimal
    in_stock: bool


class CartQuote(BaseModel):
    """Priced cart"""
    items: List[CartQuoteLine]
    total_items: int
    total_price: Decimal
