"""Notification Service Implementations

Provides concrete implementations for delivery confirmation notices.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.app.use_cases.orders.dtos import DeliveryConfirmationDTO

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs confirmations

    Useful for development and testing, or as a fallback.
    """

    async def send_delivery_confirmation(self, confirmation: DeliveryConfirmationDTO) -> bool:
        logger.info(
            f"[DELIVERY CONFIRMATION] Order: {confirmation.order_number}, "
            f"Customer: {confirmation.customer_name} <{confirmation.customer_email or '-'}>, "
            f"Recipient: {confirmation.delivery_recipient}, "
            f"Delivered: {confirmation.delivered_at.isoformat()}, "
            f"Total: {confirmation.total_amount}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that posts confirmations to an HTTP webhook

    The receiving side (e.g., a mail relay) renders and sends the message.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST confirmations to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_delivery_confirmation(self, confirmation: DeliveryConfirmationDTO) -> bool:
        """
        Send delivery confirmation via webhook

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "type": "delivery_confirmation",
            **confirmation.model_dump(mode="json"),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Delivery confirmation for order {confirmation.order_number} "
                    f"sent to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to send delivery confirmation for order {confirmation.order_number}: {e}"
            )
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error sending delivery confirmation for order "
                f"{confirmation.order_number}: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """Delegates to several services; succeeds if any of them does"""

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_delivery_confirmation(self, confirmation: DeliveryConfirmationDTO) -> bool:
        success = False
        for service in self.services:
            try:
                if await service.send_delivery_confirmation(confirmation):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(
    webhook_url: Optional[str] = None, timeout: float = 10.0
) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.
        timeout: Webhook request timeout in seconds

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url, timeout=timeout))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
