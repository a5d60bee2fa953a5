"""
Models package
"""
from storefront.models.user import User
from storefront.models.product import Category, Product
from storefront.models.order import Order, OrderItem
from storefront.models.review import Review

__all__ = [
    "User",
    "Category",
    "Product",
    "Order",
    "OrderItem",
    "Review"
]
