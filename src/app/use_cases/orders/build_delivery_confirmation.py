"""BuildDeliveryConfirmation Use Case

Assembles the notification payload for a delivered order.
"""

from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.errors import ErrorCode
from src.domain.order import OrderStatus
from .dtos import DeliveryConfirmationDTO, DeliveryConfirmationItemDTO


class BuildDeliveryConfirmation:
    """
    Use Case: Build delivery confirmation payload

    Read-only. The caller hands the result to a NotificationService after
    a successful delivered transition; nothing is sent from here.
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

    async def execute(self, order_id: int) -> Result[DeliveryConfirmationDTO]:
        order = await self.order_repo.get_by_id(order_id)
        if not order:
            return Return.err(
                Error(code=ErrorCode.ORDER_NOT_FOUND, message=f"Order {order_id} not found")
            )

        if order.status != OrderStatus.DELIVERED:
            return Return.err(
                Error(
                    code=ErrorCode.ORDER_NOT_DELIVERED,
                    message=f"Order {order.order_number} is {order.status.value}, not delivered",
                )
            )

        customer = await self.customer_repo.get_by_id(order.customer_id)
        if not customer:
            return Return.err(
                Error(
                    code=ErrorCode.CUSTOMER_NOT_FOUND,
                    message=f"Customer {order.customer_id} not found",
                )
            )

        items = await self.order_repo.get_items(order.id)
        products = {
            p.id: p
            for p in await self.product_repo.get_by_ids(list({i.product_id for i in items}))
        }

        lines = []
        for item in items:
            product = products.get(item.product_id)
            lines.append(
                DeliveryConfirmationItemDTO(
                    product_name=product.name if product else f"#{item.product_id}",
                    unit=product.unit if product else "adet",
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                )
            )

        return Return.ok(
            DeliveryConfirmationDTO(
                order_id=order.id,
                order_number=order.order_number,
                customer_id=customer.id,
                customer_name=customer.company_name,
                customer_email=customer.email,
                delivery_recipient=order.delivery_recipient,
                delivered_at=order.delivered_at,
                total_amount=order.total_amount,
                items=lines,
            )
        )
