"""
SQLAlchemy Order and OrderItem models
"""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.database import Base
from storefront.models.mixins import SoftDeleteMixin, TimestampMixin
from storefront.lifecycle import OrderStatus, STATUS_VALUES


class Order(TimestampMixin, SoftDeleteMixin, Base):
    """Order database model"""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)  # NULL for guest checkout
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    total = Column(Numeric(10, 2), nullable=False)
    customer_email = Column(String(255), nullable=True, index=True)

    shipping_address = Column(String(500), nullable=False)
    shipping_city = Column(String(100), nullable=False)
    shipping_post_code = Column(String(20), nullable=False)
    shipping_country = Column(String(100), nullable=False)

    payment_method = Column(String(50), nullable=True)
    payment_status = Column(String(50), nullable=True)

    user = relationship("User", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id"
    )

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in STATUS_VALUES)),
            name='check_status_valid'
        ),
        CheckConstraint('total >= 0', name='check_total_non_negative'),
    )

    @property
    def contact_email(self):
        """Address used for customer notifications"""
        if self.customer_email:
            return self.customer_email
        if self.user is not None:
            return self.user.email
        return None

    def __repr__(self):
        return f"<Order(id={self.id}, status='{self.status}', total={self.total})>"


class OrderItem(Base):
    """Line item with the unit price captured at purchase time"""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)  # Denormalized for history
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product")

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )

    @property
    def subtotal(self):
        return self.price * self.quantity

    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
