"""GroupDeliveredOrders Use Case

Read-side projection of what could be invoiced right now.
"""

from typing import Dict, List, Optional
from libs.result import Result, Return
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.money import to_money
from src.domain.order import Order
from .aggregation import rollup_products
from .dtos import CustomerOrderGroupDTO, PendingInvoiceGroupsResponseDTO, ProductRollupDTO


class GroupDeliveredOrders:
    """
    Use Case: Group delivered, uninvoiced orders per customer

    Nothing is persisted. Each group carries the order count, the summed
    order totals and the same per-product rollup bulk invoicing would use.
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ):
        self.customer_repo = customer_repo
        self.order_repo = order_repo
        self.product_repo = product_repo

    async def execute(self, customer_id: Optional[int] = None) -> Result[PendingInvoiceGroupsResponseDTO]:
        orders = await self.order_repo.list_delivered_uninvoiced(customer_id=customer_id)

        by_customer: Dict[int, List[Order]] = {}
        for order in orders:
            by_customer.setdefault(order.customer_id, []).append(order)

        items = await self.order_repo.get_items_for_orders([o.id for o in orders])
        product_ids = list({item.product_id for item in items})
        products = {p.id: p for p in await self.product_repo.get_by_ids(product_ids)}

        groups = []
        for cid, customer_orders in by_customer.items():
            customer = await self.customer_repo.get_by_id(cid)
            rollups = rollup_products(customer_orders, items, products)
            groups.append(
                CustomerOrderGroupDTO(
                    customer_id=cid,
                    company_name=customer.company_name if customer else f"#{cid}",
                    order_count=len(customer_orders),
                    total_amount=to_money(sum(o.total_amount for o in customer_orders)),
                    order_ids=[o.id for o in customer_orders],
                    order_numbers=[o.order_number for o in customer_orders],
                    products=[
                        ProductRollupDTO(
                            product_id=r.product_id,
                            product_name=r.product_name,
                            unit=r.unit,
                            total_quantity=r.quantity,
                            total_amount=r.amount,
                            unit_price=r.unit_price,
                        )
                        for r in rollups
                    ],
                )
            )

        return Return.ok(PendingInvoiceGroupsResponseDTO(groups=groups))
