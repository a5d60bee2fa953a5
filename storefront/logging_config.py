"""
Logging setup shared by the API and the consumer
"""
import logging

from storefront.config import settings


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
