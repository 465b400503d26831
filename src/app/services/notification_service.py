"""Notification Service Interface

Defines the contract for delivery confirmation notices. Called by the
API layer after an order reaches delivered; the use cases never send.
"""

from abc import ABC, abstractmethod
from src.app.use_cases.orders.dtos import DeliveryConfirmationDTO


class NotificationService(ABC):
    """
    Abstract notification service for delivery confirmations

    Implementations can send notifications via:
    - Log output
    - Webhook (HTTP POST) to a mail relay
    """

    @abstractmethod
    async def send_delivery_confirmation(self, confirmation: DeliveryConfirmationDTO) -> bool:
        """
        Send delivery confirmation for a delivered order

        Args:
            confirmation: Finalized order payload (customer email, order number, items)

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
