"""
RabbitMQ Consumer for OrderCreated and OrderStatusChanged events
"""
import json
import logging
import sys

import pika
from pydantic import ValidationError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log

from storefront.config import settings
from storefront.schemas.event import OrderEvent
from storefront.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def handle_event(event: OrderEvent, notification_service: NotificationService) -> bool:
    """Dispatch an event to the matching notification"""
    if event.event_type == "OrderCreated":
        return notification_service.send_order_created_notification(event.data)
    elif event.event_type == "OrderStatusChanged":
        return notification_service.send_order_status_changed_notification(event.data)

    logger.warning("Unknown event type: %s", event.event_type)
    return False


def callback(ch, method, properties, body):
    """
    Callback function to process order events

    Args:
        ch: Channel
        method: Method
        properties: Properties
        body: Message body (JSON string)
    """
    try:
        event = OrderEvent.model_validate(json.loads(body))
        logger.info("Received event: %s (ID: %s)", event.event_type, event.event_id)

        success = handle_event(event, NotificationService())

        if success:
            # Acknowledge message
            ch.basic_ack(delivery_tag=method.delivery_tag)
            logger.info("✓ Event %s processed successfully", event.event_id)
        else:
            # Reject and don't requeue
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            logger.error("✗ Event %s processing failed", event.event_id)

    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("✗ Invalid event payload: %s", e)
        ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
    except Exception as e:
        logger.exception("✗ Error processing event: %s", e)
        ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)


@retry(
    stop=stop_after_attempt(settings.MAX_RETRIES),
    wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
    retry=retry_if_exception_type(pika.exceptions.AMQPConnectionError),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True
)
def connect() -> pika.BlockingConnection:
    """Open a broker connection, retrying while RabbitMQ starts up"""
    logger.info("Connecting to RabbitMQ: %s", settings.RABBITMQ_URL)
    return pika.BlockingConnection(pika.URLParameters(settings.RABBITMQ_URL))


def setup_channel(connection):
    """Declare exchange and queue and bind both order routing keys"""
    channel = connection.channel()

    channel.exchange_declare(
        exchange=settings.RABBITMQ_EXCHANGE,
        exchange_type='topic',
        durable=True
    )
    logger.info("✓ Exchange declared: %s", settings.RABBITMQ_EXCHANGE)

    channel.queue_declare(queue=settings.RABBITMQ_QUEUE, durable=True)
    logger.info("✓ Queue declared: %s", settings.RABBITMQ_QUEUE)

    for routing_key in (settings.RABBITMQ_ORDER_CREATED_KEY, settings.RABBITMQ_STATUS_CHANGED_KEY):
        channel.queue_bind(
            exchange=settings.RABBITMQ_EXCHANGE,
            queue=settings.RABBITMQ_QUEUE,
            routing_key=routing_key
        )
        logger.info("✓ Queue bound with routing key: %s", routing_key)

    # Set prefetch count (QoS)
    channel.basic_qos(prefetch_count=5)

    channel.basic_consume(
        queue=settings.RABBITMQ_QUEUE,
        on_message_callback=callback,
        auto_ack=False  # Manual acknowledgement
    )
    return channel


def start_consumer():
    """
    Start RabbitMQ consumer

    Connects to RabbitMQ and starts consuming order events
    """
    connection = None
    try:
        connection = connect()
        channel = setup_channel(connection)

        logger.info("✓ %s notification consumer started", settings.SERVICE_NAME)
        logger.info("✓ Waiting for order events on queue: %s", settings.RABBITMQ_QUEUE)

        channel.start_consuming()

    except KeyboardInterrupt:
        logger.info("Consumer stopped by user")
        if connection is not None and connection.is_open:
            connection.close()
        sys.exit(0)
    except Exception as e:
        logger.error("✗ Error starting consumer: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    start_consumer()
