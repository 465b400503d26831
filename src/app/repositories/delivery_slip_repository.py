"""Delivery Slip Repository Interface"""

from abc import ABC, abstractmethod
from typing import Collection, List, Optional
from src.domain.delivery_slip import DeliverySlip, DeliverySlipItem


class DeliverySlipRepository(ABC):

    @abstractmethod
    async def create(self, slip: DeliverySlip, items: List[DeliverySlipItem]) -> DeliverySlip:
        pass

    @abstractmethod
    async def get_by_id(self, slip_id: int, for_update: bool = False) -> Optional[DeliverySlip]:
        pass

    @abstractmethod
    async def get_items(self, slip_id: int) -> List[DeliverySlipItem]:
        pass

    @abstractmethod
    async def list_by_order(self, order_id: int) -> List[DeliverySlip]:
        pass

    @abstractmethod
    async def update(self, slip: DeliverySlip) -> DeliverySlip:
        pass

    @abstractmethod
    async def link_orders_to_invoice(self, order_ids: Collection[int], invoice_id: int) -> int:
        """Point every unlinked slip of the given orders at the invoice"""
        pass

    @abstractmethod
    async def unlink_invoice(self, invoice_id: int) -> int:
        pass

    @abstractmethod
    async def generate_slip_number(self) -> str:
        pass
