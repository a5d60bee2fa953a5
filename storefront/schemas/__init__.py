"""
Schemas package
"""
from storefront.schemas.cart import Cart, CartLine, CartQuote, CartQuoteLine
from storefront.schemas.event import OrderEvent
from storefront.schemas.order import (
    ShippingAddress,
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    OrderResponse,
    Pagination,
    OrderListResponse,
    TopProduct,
    DashboardStats
)
from storefront.schemas.product import (
    CategoryCreate,
    CategoryResponse,
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)
from storefront.schemas.review import (
    ReviewCreate,
    ReviewAuthor,
    ReviewResponse,
    ProductReviewsResponse
)

__all__ = [
    "Cart",
    "CartLine",
    "CartQuote",
    "CartQuoteLine",
    "OrderEvent",
    "ShippingAddress",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "OrderResponse",
    "Pagination",
    "OrderListResponse",
    "TopProduct",
    "DashboardStats",
    "CategoryCreate",
    "CategoryResponse",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "ReviewCreate",
    "ReviewAuthor",
    "ReviewResponse",
    "ProductReviewsResponse"
]
