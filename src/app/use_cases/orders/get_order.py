"""Order read use cases"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.domain.errors import ErrorCode
from src.domain.order import OrderStatus
from .dtos import OrderResponseDTO, ListOrdersResponseDTO


class GetOrder:
    """Read one order with its items"""

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    async def execute(self, order_id: int) -> Result[OrderResponseDTO]:
        order = await self.order_repo.get_by_id(order_id)
        if not order:
            return Return.err(
                Error(
                    code=ErrorCode.ORDER_NOT_FOUND,
                    message=f"Order {order_id} not found",
                )
            )

        items = await self.order_repo.get_items(order.id)
        return Return.ok(OrderResponseDTO.from_entity(order, items))


class ListOrders:
    """List orders newest first, optionally filtered by status and sales person"""

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    async def execute(
        self,
        status: Optional[str] = None,
        sales_person_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListOrdersResponseDTO]:
        status_filter = None
        if status:
            try:
                status_filter = OrderStatus(status)
            except ValueError:
                return Return.err(
                    Error(
                        code=ErrorCode.INVALID_STATUS,
                        message=f"Unknown order status: {status!r}",
                    )
                )

        orders = await self.order_repo.list_orders(
            status=status_filter,
            sales_person_id=sales_person_id,
            limit=limit,
            offset=offset,
        )
        items = await self.order_repo.get_items_for_orders([o.id for o in orders])

        items_by_order = {}
        for item in items:
            items_by_order.setdefault(item.order_id, []).append(item)

        return Return.ok(
            ListOrdersResponseDTO(
                orders=[
                    OrderResponseDTO.from_entity(o, items_by_order.get(o.id, []))
                    for o in orders
                ],
                limit=limit,
                offset=offset,
            )
        )
