"""CreateOrder Use Case

Creates a pending order with its item list.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.app.repositories.exceptions import DuplicateOrderNumberError
from src.domain.errors import CustomerNotFoundError, DomainError, ErrorCode
from src.domain.money import to_money
from src.domain.order import Order, OrderStatus
from .dtos import CreateOrderCommandDTO, OrderResponseDTO
from .items import build_order_items

logger = logging.getLogger(__name__)

ORDER_NUMBER_MAX_RETRIES = 5


class CreateOrder:
    """
    Use Case: Create a new order

    Business Rules:
    1. Customer and every product must exist
    2. Order starts in status=pending with no milestone timestamps
    3. total_amount = sum(quantity * unit_price) over the items
    4. Order number is generated and retried on collision

    Flow:
    1. Load customer and products, build items
    2. Generate order number and insert order with items
    3. On order number collision roll back and start over
    4. Commit and return the order
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.order_repo = order_repo
        self.product_repo = product_repo

    async def execute(self, command: CreateOrderCommandDTO) -> Result[OrderResponseDTO]:
        try:
            for attempt in range(1, ORDER_NUMBER_MAX_RETRIES + 1):
                response = await self._attempt(command, attempt)
                if response is not None:
                    await self.uow.commit()
                    logger.info(
                        f"Order {response.order_number} created for customer "
                        f"{response.customer_id} total={response.total_amount}"
                    )
                    return Return.ok(response)

            return Return.err(
                Error(
                    code=ErrorCode.ORDER_NUMBER_EXHAUSTED,
                    message="Could not allocate a unique order number",
                    reason=f"{ORDER_NUMBER_MAX_RETRIES} attempts collided",
                )
            )

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Order creation failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_ORDER_FAILED",
                    message="Failed to create order",
                    reason=str(e),
                )
            )

    async def _attempt(self, command: CreateOrderCommandDTO, attempt: int) -> Optional[OrderResponseDTO]:
        """Returns None when the generated order number was already taken"""
        customer = await self.customer_repo.get_by_id(command.customer_id)
        if not customer:
            raise CustomerNotFoundError(f"Customer {command.customer_id} not found")

        items, total = await build_order_items(self.product_repo, command.items)

        order = Order(
            order_number=await self.order_repo.generate_order_number(),
            customer_id=command.customer_id,
            sales_person_id=command.sales_person_id,
            status=OrderStatus.PENDING,
            total_amount=total,
            tax_amount=to_money(command.tax_amount),
            notes=command.notes,
            delivery_address=command.delivery_address or customer.address,
        )

        try:
            created = await self.order_repo.create(order, items)
        except DuplicateOrderNumberError:
            logger.warning(f"Order number {order.order_number} collided (attempt {attempt})")
            await self.uow.rollback()
            return None

        return OrderResponseDTO.from_entity(created, items)
