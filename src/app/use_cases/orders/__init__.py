from .create_order import CreateOrder
from .transition_order import TransitionOrder
from .update_order_items import UpdateOrderItems
from .get_order import GetOrder, ListOrders
from .build_delivery_confirmation import BuildDeliveryConfirmation

__all__ = [
    "CreateOrder",
    "TransitionOrder",
    "UpdateOrderItems",
    "GetOrder",
    "ListOrders",
    "BuildDeliveryConfirmation",
]
