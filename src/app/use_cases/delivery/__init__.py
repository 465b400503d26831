"""Delivery slip use cases"""
from .create_delivery_slip import CreateDeliverySlip
from .change_delivery_slip_status import ChangeDeliverySlipStatus

__all__ = [
    "CreateDeliverySlip",
    "ChangeDeliverySlipStatus",
]
