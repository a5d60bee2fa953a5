"""
Repositories package
"""
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository, CategoryRepository
from storefront.repositories.review_repository import ReviewRepository
from storefront.repositories.user_repository import UserRepository

__all__ = [
    "OrderRepository",
    "ProductRepository",
    "CategoryRepository",
    "ReviewRepository",
    "UserRepository"
]
