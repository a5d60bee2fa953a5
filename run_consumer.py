#!/usr/bin/env python
"""
Script to run the RabbitMQ notification consumer
"""
from storefront.consumers.order_consumer import start_consumer
from storefront.logging_config import configure_logging

if __name__ == "__main__":
    configure_logging()
    start_consumer()
