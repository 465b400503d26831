"""Get Recent Orders Use Case"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.order_repository import OrderRepository
from .dtos import RecentOrderDTO, RecentOrdersResponseDTO


class GetRecentOrders:
    """Newest orders with their customer name, optionally for one sales person"""

    def __init__(self, order_repo: OrderRepository, customer_repo: CustomerRepository):
        self.order_repo = order_repo
        self.customer_repo = customer_repo

    async def execute(
        self, limit: int = 10, user_id: Optional[str] = None
    ) -> Result[RecentOrdersResponseDTO]:
        orders = await self.order_repo.list_orders(sales_person_id=user_id, limit=limit)

        names = {}
        for order in orders:
            if order.customer_id not in names:
                customer = await self.customer_repo.get_by_id(order.customer_id)
                names[order.customer_id] = customer.company_name if customer else f"#{order.customer_id}"

        return Return.ok(
            RecentOrdersResponseDTO(
                orders=[
                    RecentOrderDTO(
                        order_id=o.id,
                        order_number=o.order_number,
                        customer_id=o.customer_id,
                        company_name=names[o.customer_id],
                        sales_person_id=o.sales_person_id,
                        status=o.status.value,
                        total_amount=o.total_amount,
                        created_at=o.created_at,
                    )
                    for o in orders
                ]
            )
        )
