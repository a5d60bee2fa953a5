"""
Dashboard Service - admin statistics
"""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session

from storefront.lifecycle import STATUS_VALUES
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.order import DashboardStats, TopProduct


class DashboardService:
    """Aggregates sales figures for the admin dashboard"""

    def __init__(self, db: Session):
        self.repository = OrderRepository(db)

    def get_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        """
        Revenue today and this month (UTC, cancelled orders excluded),
        order counts for every status and the five best-selling products
        """
        now = now or datetime.now(timezone.utc)
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_month = start_of_day.replace(day=1)

        counts = self.repository.count_by_status()
        orders_by_status = {status: counts.get(status, 0) for status in STATUS_VALUES}

        top_products = [
            TopProduct(
                id=product_id,
                name=name,
                total_quantity=int(quantity),
                total_revenue=revenue
            )
            for product_id, name, quantity, revenue in self.repository.top_products(limit=5)
        ]

        return DashboardStats(
            revenue_today=self.repository.revenue_since(start_of_day),
            revenue_month=self.repository.revenue_since(start_of_month),
            orders_by_status=orders_by_status,
            top_products=top_products
        )
