"""
RabbitMQ Event Publisher
"""
import logging
import pika
import uuid
from datetime import datetime, timezone
from typing import Dict

from storefront.config import settings
from storefront.schemas.event import OrderEvent

logger = logging.getLogger(__name__)


class EventPublisher:
    """Publisher for sending order events to RabbitMQ"""

    def __init__(self):
        self.rabbitmq_url = settings.RABBITMQ_URL
        self.exchange = settings.RABBITMQ_EXCHANGE
        self.enabled = settings.EVENTS_ENABLED

    def _build_event(self, event_type: str, data: Dict) -> OrderEvent:
        return OrderEvent(
            event_type=event_type,
            event_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc).isoformat(),
            source=settings.SERVICE_NAME,
            data=data
        )

    def publish(self, event_type: str, routing_key: str, data: Dict, mandatory: bool = False) -> bool:
        """
        Publish an event envelope to the orders exchange

        Args:
            event_type: Event name, e.g. OrderCreated
            routing_key: Topic routing key
            data: JSON-serializable event payload
            mandatory: Fail when no queue is bound for the routing key

        Returns:
            True if published successfully, False otherwise
        """
        if not self.enabled:
            logger.debug("Event publishing disabled, dropping %s", event_type)
            return False

        event = self._build_event(event_type, data)
        try:
            connection = pika.BlockingConnection(
                pika.URLParameters(self.rabbitmq_url)
            )
            try:
                channel = connection.channel()

                channel.exchange_declare(
                    exchange=self.exchange,
                    exchange_type='topic',
                    durable=True
                )

                # Enable publisher confirms
                channel.confirm_delivery()

                channel.basic_publish(
                    exchange=self.exchange,
                    routing_key=routing_key,
                    body=event.model_dump_json(),
                    properties=pika.BasicProperties(
                        delivery_mode=2,  # Persistent message
                        content_type='application/json',
                        correlation_id=event.event_id
                    ),
                    mandatory=mandatory
                )
            finally:
                connection.close()

            logger.info("✓ Event published: %s (ID: %s)", event_type, event.event_id)
            return True

        except pika.exceptions.UnroutableError:
            logger.warning("✗ Event %s could not be routed to any queue", event_type)
            return False
        except Exception as e:
            logger.warning("✗ Error publishing %s event: %s", event_type, e)
            return False

    def publish_order_created(self, order_data: Dict) -> bool:
        """Publish OrderCreated event"""
        return self.publish(
            "OrderCreated",
            settings.RABBITMQ_ORDER_CREATED_KEY,
            order_data,
            mandatory=True
        )

    def publish_order_status_changed(self, order_data: Dict) -> bool:
        """Publish OrderStatusChanged event"""
        return self.publish(
            "OrderStatusChanged",
            settings.RABBITMQ_STATUS_CHANGED_KEY,
            order_data
        )
