"""
Order Service - Business Logic Layer
"""
import logging
import math
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session

from storefront.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    PermissionDeniedError
)
from storefront.lifecycle import OrderStatus, apply_transition, parse_status
from storefront.models.order import Order, OrderItem
from storefront.models.user import User
from storefront.publishers.event_publisher import EventPublisher
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.schemas.order import OrderCreate, OrderResponse, OrderListResponse, Pagination
from storefront.services.cart_service import merge_lines

logger = logging.getLogger(__name__)


def format_shipping_address(order: Order) -> str:
    return f"{order.shipping_address}, {order.shipping_city}, {order.shipping_post_code}, {order.shipping_country}"


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session, event_publisher: Optional[EventPublisher] = None):
        self.db = db
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.event_publisher = event_publisher or EventPublisher()

    def create_order(self, order_data: OrderCreate, user: Optional[User] = None) -> OrderResponse:
        """
        Create an order at checkout completion

        Steps:
        1. Merge duplicate cart lines
        2. Load products and check stock availability
        3. Snapshot unit prices and calculate the total
        4. Save order, items and stock changes in one transaction
        5. Publish OrderCreated event (best effort)

        Args:
            order_data: Checkout payload
            user: Authenticated customer, None for guest checkout

        Returns:
            Created order

        Raises:
            EmptyCartError: If there are no items
            NotFoundError: If a product does not exist
            InsufficientStockError: If a product lacks stock
        """
        lines = merge_lines(order_data.items)
        if not lines:
            raise EmptyCartError("No items in the order")

        products = self.product_repository.get_by_ids(line.product_id for line in lines)
        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                raise NotFoundError("Product", line.product_id)
            if product.stock < line.quantity:
                raise InsufficientStockError(product.id, line.quantity, product.stock)

        items = []
        total = Decimal("0")
        try:
            for line in lines:
                product = products[line.product_id]
                self.product_repository.decrement_stock(product, line.quantity)
                items.append(OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=line.quantity,
                    price=product.price
                ))
                total += product.price * line.quantity

            confirmed = order_data.payment_confirmed
            address = order_data.shipping_address
            order = Order(
                user_id=user.id if user else None,
                status=(OrderStatus.PAGATO if confirmed else OrderStatus.PENDING).value,
                total=total,
                customer_email=order_data.customer_email or (user.email if user else None),
                shipping_address=address.address,
                shipping_city=address.city,
                shipping_post_code=address.post_code,
                shipping_country=address.country,
                payment_method=order_data.payment_method,
                payment_status="paid" if confirmed else "pending"
            )
            order = self.repository.create(order, items)
        except Exception:
            self.db.rollback()
            raise

        logger.info("Order %s created with status %s (total %s)", order.id, order.status, order.total)

        event_data = {
            'order_id': order.id,
            'status': order.status,
            'total': str(order.total),
            'customer_email': order.contact_email,
            'shipping_address': format_shipping_address(order),
            'items': [
                {
                    'product_id': item.product_id,
                    'product_name': item.product_name,
                    'quantity': item.quantity,
                    'price': str(item.price)
                }
                for item in order.items
            ]
        }

        # Try to publish event (non-blocking)
        try:
            self.event_publisher.publish_order_created(event_data)
        except Exception as e:
            # Log error but don't fail the order creation
            logger.warning("Failed to publish OrderCreated event for order %s: %s", order.id, e)

        return OrderResponse.model_validate(order)

    def list_customer_orders(self, user: User) -> List[OrderResponse]:
        """Get the customer's orders, newest first"""
        orders = self.repository.get_by_user(user.id)
        return [OrderResponse.model_validate(o) for o in orders]

    def get_customer_order(self, user: User, order_id: int) -> OrderResponse:
        """
        Get one of the customer's orders

        Raises:
            NotFoundError: If the order does not exist
            PermissionDeniedError: If the order belongs to someone else
        """
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        if order.user_id != user.id:
            raise PermissionDeniedError("You are not allowed to view this order")
        return OrderResponse.model_validate(order)

    def list_orders(self, page: int = 1, limit: int = 10, status: Optional[str] = None) -> OrderListResponse:
        """
        Get a page of orders for the admin area

        Args:
            page: 1-based page number
            limit: Orders per page
            status: Status filter; None or "all" for every status

        Raises:
            InvalidStatusError: If status is not a valid filter
        """
        status_filter = None
        if status and status != "all":
            status_filter = parse_status(status).value

        skip = (page - 1) * limit
        orders = self.repository.get_all(skip=skip, limit=limit, status=status_filter)
        total = self.repository.count(status=status_filter)

        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            pagination=Pagination(
                current_page=page,
                total_pages=math.ceil(total / limit),
                total_items=total,
                items_per_page=limit
            )
        )

    def get_order(self, order_id: int) -> OrderResponse:
        """Get order by ID"""
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        return OrderResponse.model_validate(order)

    def update_order_status(self, order_id: int, new_status: str) -> OrderResponse:
        """
        Apply a status transition to an order

        The status change is committed before the notification is attempted;
        notification failures are logged and never undo the update.

        Args:
            order_id: Order ID
            new_status: Requested status value

        Returns:
            Updated order

        Raises:
            NotFoundError: If the order does not exist
            InvalidStatusError: If new_status is not a status value
            InvalidTransitionError: If new_status is not reachable from the current status
        """
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order", order_id)

        old_status = order.status
        apply_transition(order, new_status)
        order = self.repository.save(order)

        logger.info("Order %s status changed: %s → %s", order.id, old_status, order.status)

        # Publish OrderStatusChanged event
        event_data = {
            'order_id': order.id,
            'old_status': old_status,
            'new_status': order.status,
            'customer_email': order.contact_email,
            'updated_at': order.updated_at.isoformat()
        }

        try:
            self.event_publisher.publish_order_status_changed(event_data)
        except Exception as e:
            logger.warning("Failed to publish OrderStatusChanged event for order %s: %s", order.id, e)

        return OrderResponse.model_validate(order)

    def delete_order(self, order_id: int) -> None:
        """Soft delete an order"""
        if not self.repository.soft_delete(order_id):
            raise NotFoundError("Order", order_id)
        logger.info("Order %s soft-deleted", order_id)
