"""
Notification Service - customer emails for order events
"""
import logging
import smtplib
from email.message import EmailMessage
from typing import Dict, Optional

from storefront.config import settings

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for sending order notifications"""

    def __init__(self, email_service: Optional[str] = None):
        self.email_service = email_service or settings.EMAIL_SERVICE

    def send_order_created_notification(self, order_data: Dict) -> bool:
        """
        Send the order confirmation for an OrderCreated event

        Args:
            order_data: Order data from event

        Returns:
            True if the notification was sent or there is nobody to notify
        """
        order_id = order_data.get("order_id")
        lines = "\n".join(
            f"  {item.get('quantity')} x {item.get('product_name')} @ {item.get('price')} EUR"
            for item in order_data.get("items", [])
        )

        subject = f"{settings.SHOP_NAME} - Order #{order_id} confirmed"
        body = f"""
Hi!

Thank you for your order. Here is a summary of your purchase:

Order ID: {order_id}
Status: {order_data.get("status")}
Shipping address: {order_data.get("shipping_address")}

Items:
{lines}

Total: {order_data.get("total")} EUR

You will receive another email when your order ships.

---
{settings.SHOP_NAME}
        """

        return self._send(order_data.get("customer_email"), subject, body, order_id)

    def send_order_status_changed_notification(self, order_data: Dict) -> bool:
        """
        Send notification for OrderStatusChanged event

        Args:
            order_data: Order status change data

        Returns:
            True if the notification was sent or there is nobody to notify
        """
        order_id = order_data.get("order_id")
        new_status = order_data.get("new_status")

        subject = f"{settings.SHOP_NAME} - Order #{order_id} is now {new_status}"
        body = f"""
Hi!

Your order status has been updated:

Order ID: {order_id}
Previous Status: {order_data.get("old_status")}
New Status: {new_status}

---
{settings.SHOP_NAME}
        """

        return self._send(order_data.get("customer_email"), subject, body, order_id)

    def _send(self, to: Optional[str], subject: str, body: str, order_id) -> bool:
        if not to:
            logger.info("Order #%s has no contact email, skipping notification", order_id)
            return True

        if self.email_service == "console":
            return self._send_console_notification(to, subject, body, order_id)
        elif self.email_service == "smtp":
            return self._send_smtp_notification(to, subject, body)

        logger.error("Unknown email service: %s", self.email_service)
        return False

    def _send_console_notification(self, to: str, subject: str, body: str, order_id) -> bool:
        """
        Simulate email sending by logging it

        This is for development/testing purposes
        """
        logger.info(
            "📧 EMAIL NOTIFICATION (Console Mode)\nTo: %s\nSubject: %s\n%s\n%s",
            to, subject, "-" * 60, body
        )
        logger.info("✓ Notification sent for Order #%s", order_id)
        return True

    def _send_smtp_notification(self, to: str, subject: str, body: str) -> bool:
        """Send email via SMTP"""
        message = EmailMessage()
        message["From"] = settings.MAIL_FROM
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as smtp:
                if settings.SMTP_USE_TLS:
                    smtp.starttls()
                if settings.SMTP_USERNAME:
                    smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("✗ SMTP delivery to %s failed: %s", to, e)
            return False

        logger.info("✓ Email sent via SMTP to %s", to)
        return True
