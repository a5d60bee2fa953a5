"""
Domain exceptions raised by the service layer
"""
from typing import List


class StorefrontError(Exception):
    """Base exception for storefront errors"""
    pass


class NotFoundError(StorefrontError):
    """Referenced entity does not exist or is soft-deleted"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id={entity_id} not found")


class InvalidStatusError(StorefrontError):
    """Requested status is not a member of the order status enumeration"""

    def __init__(self, value, valid_values: List[str]):
        self.value = value
        self.valid_values = valid_values
        super().__init__(
            f"Invalid status value {value!r}. Valid values: {', '.join(valid_values)}"
        )


class InvalidTransitionError(StorefrontError):
    """Requested status is not reachable from the current status"""

    def __init__(self, current_status: str, requested_status: str, allowed: List[str]):
        self.current_status = current_status
        self.requested_status = requested_status
        self.allowed = allowed
        allowed_text = ", ".join(allowed) if allowed else "none"
        super().__init__(
            f"Invalid status transition from {current_status} to {requested_status}. "
            f"Allowed: {allowed_text}"
        )


class InsufficientStockError(StorefrontError):
    """Insufficient stock"""

    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock. Product ID: {product_id}, "
            f"Requested: {requested}, Available: {available}"
        )


class EmptyCartError(StorefrontError):
    """Checkout or quote requested without any items"""
    pass


class PermissionDeniedError(StorefrontError):
    """Caller may not access the requested resource"""
    pass


class DuplicateError(StorefrontError):
    """Unique constraint would be violated"""
    pass
