"""Order lifecycle rules

Declares which status changes are legal and which milestone timestamp
each target status stamps. Two policies exist:

- strict: only the adjacent step forward (or cancellation) is legal
- lenient: any non-terminal order may skip ahead to any later status (or cancel)

Terminal orders (delivered, cancelled) reject every transition under both
policies.
"""

from datetime import datetime
from typing import Dict, Optional, Set, Union

from src.domain.errors import (
    InvalidStatusError,
    InvalidTransitionError,
    MissingRecipientError,
    OrderLockedError,
)
from src.domain.order import Order, OrderStatus

STRICT_TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.PRODUCTION, OrderStatus.CANCELLED},
    OrderStatus.PRODUCTION: {OrderStatus.PRODUCTION_READY, OrderStatus.CANCELLED},
    OrderStatus.PRODUCTION_READY: {OrderStatus.SHIPPING, OrderStatus.CANCELLED},
    OrderStatus.SHIPPING: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: Set[OrderStatus] = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

ACTIVE_STATES: Set[OrderStatus] = {
    OrderStatus.PENDING,
    OrderStatus.PRODUCTION,
    OrderStatus.PRODUCTION_READY,
    OrderStatus.SHIPPING,
}

EDITABLE_STATES: Set[OrderStatus] = {OrderStatus.PENDING, OrderStatus.PRODUCTION}

SHIPPABLE_STATES: Set[OrderStatus] = {
    OrderStatus.PRODUCTION_READY,
    OrderStatus.SHIPPING,
    OrderStatus.DELIVERED,
}

# Forward order of the lifecycle; cancelled sits outside it
STATUS_RANK: Dict[OrderStatus, int] = {
    OrderStatus.PENDING: 0,
    OrderStatus.PRODUCTION: 1,
    OrderStatus.PRODUCTION_READY: 2,
    OrderStatus.SHIPPING: 3,
    OrderStatus.DELIVERED: 4,
}

MILESTONE_FIELDS: Dict[OrderStatus, str] = {
    OrderStatus.PRODUCTION: "production_started_at",
    OrderStatus.PRODUCTION_READY: "production_completed_at",
    OrderStatus.SHIPPING: "shipped_at",
    OrderStatus.DELIVERED: "delivered_at",
    OrderStatus.CANCELLED: "cancelled_at",
}


def parse_status(value: Union[str, OrderStatus]) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatusError(f"Unknown order status: {value!r}")


class OrderLifecycle:
    """Applies status transitions to Order entities"""

    def __init__(self, strict: bool = True):
        self.strict = strict

    def allowed_targets(self, current: OrderStatus) -> Set[OrderStatus]:
        if current in TERMINAL_STATES:
            return set()
        if self.strict:
            return set(STRICT_TRANSITIONS[current])
        later = {s for s, rank in STATUS_RANK.items() if rank > STATUS_RANK[current]}
        return later | {OrderStatus.CANCELLED}

    def ensure_transition(self, current: OrderStatus, target: OrderStatus) -> None:
        if current in TERMINAL_STATES:
            raise OrderLockedError(
                f"Order is {current.value}; no further status changes are allowed"
            )
        if target not in self.allowed_targets(current):
            raise InvalidTransitionError(
                f"Cannot move order from {current.value} to {target.value}"
            )

    def apply_transition(
        self,
        order: Order,
        target: Union[str, OrderStatus],
        now: datetime,
        delivery_recipient: Optional[str] = None,
        delivery_signature: Optional[str] = None,
    ) -> Order:
        """
        Move the order to the target status and stamp its milestone

        Raises:
            InvalidStatusError: target is not an order status
            OrderLockedError: order is already delivered or cancelled
            InvalidTransitionError: target not reachable under the policy
            MissingRecipientError: delivered without a recipient name
        """
        target_status = parse_status(target)
        self.ensure_transition(order.status, target_status)

        recipient = (delivery_recipient or "").strip()
        if target_status == OrderStatus.DELIVERED and not recipient:
            raise MissingRecipientError("A recipient name is required to mark an order delivered")

        setattr(order, MILESTONE_FIELDS[target_status], self._next_stamp(order, now))
        order.status = target_status

        if target_status == OrderStatus.DELIVERED:
            order.delivery_recipient = recipient
            if delivery_signature:
                order.delivery_signature = delivery_signature

        order.updated_at = now
        return order

    @staticmethod
    def ensure_editable(order: Order) -> None:
        if order.status not in EDITABLE_STATES:
            raise OrderLockedError(
                f"Items of an order in status {order.status.value} cannot be changed"
            )

    @staticmethod
    def _next_stamp(order: Order, now: datetime) -> datetime:
        # Milestones never go backwards even if the clock does
        stamps = [getattr(order, field) for field in MILESTONE_FIELDS.values()]
        stamps = [s for s in stamps if s is not None]
        if stamps and max(stamps) > now:
            return max(stamps)
        return now
