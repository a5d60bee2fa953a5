"""
Pydantic schemas for order request/response validation
"""
from decimal import Decimal
from pydantic import BaseModel, Field, EmailStr, ConfigDict
from typing import Any, Dict, List, Optional
from datetime import datetime

from storefront.schemas.cart import CartLine


class ShippingAddress(BaseModel):
    """Shipping destination"""
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    post_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)


class OrderCreate(BaseModel):
    """Schema for checkout completion"""
    items: List[CartLine] = Field(..., description="Ordered products")
    shipping_address: ShippingAddress
    customer_email: Optional[EmailStr] = Field(None, description="Contact email (guest checkout)")
    payment_method: str = Field("Carta di credito", max_length=50)
    payment_confirmed: bool = Field(
        False,
        description="Payment was confirmed synchronously; the order starts as PAGATO"
    )


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: Any = Field(..., description="Target status: PENDING, PAGATO, SPEDITO, CONSEGNATO, ANNULLATO")


class OrderItemResponse(BaseModel):
    """Schema for an order line"""
    id: int
    product_id: int
    product_name: str
    quantity: int
    price: Decimal
    subtotal: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: int
    user_id: Optional[int]
    status: str
    total: Decimal
    customer_email: Optional[str]
    shipping_address: str
    shipping_city: str
    shipping_post_code: str
    shipping_country: str
    payment_method: Optional[str]
    payment_status: Optional[str]
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    """Pagination metadata"""
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class OrderListResponse(BaseModel):
    """Schema for a page of orders"""
    orders: List[OrderResponse]
    pagination: Pagination


class TopProduct(BaseModel):
    """Best-selling product"""
    id: int
    name: str
    total_quantity: int
    total_revenue: Decimal


class DashboardStats(BaseModel):
    """Admin dashboard figures"""
    revenue_today: Decimal
    revenue_month: Decimal
    orders_by_status: Dict[str, int]
    top_products: List[TopProduct]
