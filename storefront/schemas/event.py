"""
Schemas for broker event envelopes
"""
from pydantic import BaseModel


class OrderEvent(BaseModel):
    """Envelope for OrderCreated / OrderStatusChanged events"""
    event_type: str
    event_id: str
    event_version: str = "1.0"
    timestamp: str
    source: str = "storefront-service"
    data: dict
