"""
Services package
"""
from storefront.services.cart_service import CartService
from storefront.services.dashboard_service import DashboardService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService
from storefront.services.review_service import ReviewService

__all__ = [
    "CartService",
    "DashboardService",
    "NotificationService",
    "OrderService",
    "ProductService",
    "ReviewService"
]
