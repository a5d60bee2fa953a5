"""
Order Repository - Data Access Layer
"""
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from sqlalchemy.orm import Session, selectinload, joinedload, Query
from sqlalchemy import desc, func

from storefront.lifecycle import OrderStatus
from storefront.models.order import Order, OrderItem
from storefront.models.product import Product


class OrderRepository:
    """Repository for Order CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def _active(self) -> Query:
        return self.db.query(Order).options(
            selectinload(Order.items),
            joinedload(Order.user)
        ).filter(Order.is_deleted.is_(False))

    def get_all(self, skip: int = 0, limit: int = 100, status: Optional[str] = None) -> List[Order]:
        """Get orders, newest first, optionally filtered by status"""
        query = self._active()
        if status:
            query = query.filter(Order.status == status)
        return query.order_by(
            desc(Order.created_at), desc(Order.id)
        ).offset(skip).limit(limit).all()

    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get a non-deleted order by ID"""
        return self._active().filter(Order.id == order_id).first()

    def get_by_user(self, user_id: int) -> List[Order]:
        """Get a user's orders, newest first"""
        return self._active().filter(
            Order.user_id == user_id
        ).order_by(desc(Order.created_at), desc(Order.id)).all()

    def create(self, order: Order, items: List[OrderItem]) -> Order:
        """
        Persist an order together with its items in one transaction

        Any pending changes in the session (stock updates) are committed with it.
        """
        order.items = items
        self.db.add(order)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

    def save(self, order: Order) -> Order:
        """Commit changes made to a loaded order"""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

    def soft_delete(self, order_id: int) -> bool:
        """Flag order as deleted"""
        order = self.get_by_id(order_id)
        if not order:
            return False

        order.is_deleted = True
        self.db.commit()
        return True

    def count(self, status: Optional[str] = None) -> int:
        """Get total count of non-deleted orders"""
        query = self.db.query(Order).filter(Order.is_deleted.is_(False))
        if status:
            query = query.filter(Order.status == status)
        return query.count()

    def count_by_status(self) -> Dict[str, int]:
        """Non-deleted order counts per status"""
        rows = self.db.query(
            Order.status, func.count(Order.id)
        ).filter(
            Order.is_deleted.is_(False)
        ).group_by(Order.status).all()
        return {status: count for status, count in rows}

    def revenue_since(self, since: datetime) -> Decimal:
        """Sum of totals of non-cancelled orders created at or after since"""
        total = self.db.query(
            func.coalesce(func.sum(Order.total), 0)
        ).filter(
            Order.created_at >= since,
            Order.status != OrderStatus.ANNULLATO.value,
            Order.is_deleted.is_(False)
        ).scalar()
        return Decimal(total or 0)

    def top_products(self, limit: int = 5) -> List[Tuple[int, str, int, Decimal]]:
        """Best-selling products by quantity, excluding cancelled orders"""
        total_quantity = func.sum(OrderItem.quantity).label("total_quantity")
        total_revenue = func.sum(OrderItem.quantity * OrderItem.price).label("total_revenue")
        return self.db.query(
            Product.id,
            Product.name,
            total_quantity,
            total_revenue
        ).join(
            OrderItem, OrderItem.product_id == Product.id
        ).join(
            Order, Order.id == OrderItem.order_id
        ).filter(
            Order.status != OrderStatus.ANNULLATO.value,
            Order.is_deleted.is_(False)
        ).group_by(
            Product.id, Product.name
        ).order_by(
            desc(total_quantity), Product.id
        ).limit(limit).all()
