"""CreateBulkInvoice Use Case

Bills a selection of delivered orders of one customer with a single
invoice, claiming the orders atomically.
"""

import logging
from decimal import Decimal
from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_transaction_repository import AccountTransactionRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_slip_repository import DeliverySlipRepository
from src.app.repositories.exceptions import DuplicateInvoiceNumberError
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.account_transaction import AccountTransaction, AccountTransactionType
from src.domain.errors import (
    CustomerNotFoundError,
    DomainError,
    ErrorCode,
    OrderAlreadyInvoicedError,
    OrderCustomerMismatchError,
    OrderNotDeliveredError,
    OrderNotFoundError,
)
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.money import tax_for, to_money
from src.domain.order import Order, OrderStatus
from .aggregation import rollup_products, to_invoice_items
from .dtos import CreateBulkInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class CreateBulkInvoice:
    """
    Use Case: Create one invoice for several delivered orders

    Business Rules:
    1. Selection is non-empty and every order belongs to the customer
    2. Every order is delivered (ORDER_NOT_DELIVERED) and uninvoiced
       (ORDER_ALREADY_INVOICED)
    3. subtotal = sum of order totals; tax = round(subtotal * rate / 100);
       total = subtotal + tax
    4. One invoice line per product: quantities and amounts summed,
       unit price from the most recent order
    5. Invoice number is unique; collisions are retried with a new number
    6. Orders are claimed with a conditional update; if any was claimed
       concurrently the whole transaction rolls back
    7. A debit account transaction is appended for the total

    Flow:
    1. Lock and validate the selected orders
    2. Roll up items, compute amounts
    3. Insert invoice with a fresh number (retry on collision)
    4. Claim orders, link delivery slips, append debit
    5. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        invoice_repo: InvoiceRepository,
        slip_repo: DeliverySlipRepository,
        transaction_repo: AccountTransactionRepository,
        default_tax_rate: Decimal = Decimal("20"),
        max_number_retries: int = 5,
        record_transactions: bool = True,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.invoice_repo = invoice_repo
        self.slip_repo = slip_repo
        self.transaction_repo = transaction_repo
        self.default_tax_rate = Decimal(str(default_tax_rate))
        self.max_number_retries = max_number_retries
        self.record_transactions = record_transactions

    async def execute(self, command: CreateBulkInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        order_ids = list(dict.fromkeys(command.order_ids))
        if not order_ids:
            return Return.err(
                Error(
                    code=ErrorCode.EMPTY_ORDER_SELECTION,
                    message="At least one order must be selected for invoicing",
                )
            )

        try:
            for attempt in range(1, self.max_number_retries + 1):
                response = await self._attempt(command, order_ids, attempt)
                if response is not None:
                    await self.uow.commit()
                    logger.info(
                        f"Invoice {response.invoice_number} created for customer "
                        f"{response.customer_id}: {response.order_count} orders, "
                        f"total={response.total_amount}"
                    )
                    return Return.ok(response)

            logger.error(
                f"Invoice number allocation exhausted after {self.max_number_retries} attempts "
                f"(customer {command.customer_id})"
            )
            return Return.err(
                Error(
                    code=ErrorCode.INVOICE_NUMBER_EXHAUSTED,
                    message="Could not allocate a unique invoice number",
                    reason=f"{self.max_number_retries} attempts collided",
                )
            )

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Bulk invoice for customer {command.customer_id} failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_BULK_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

    async def _attempt(
        self, command: CreateBulkInvoiceCommandDTO, order_ids: List[int], attempt: int
    ) -> Optional[InvoiceResponseDTO]:
        """Returns None when the invoice number was taken and the attempt rolled back"""
        # Step 1: Lock and validate selection
        await self.uow.set_lock_timeout()

        customer = await self.customer_repo.get_by_id(command.customer_id)
        if not customer:
            raise CustomerNotFoundError(f"Customer {command.customer_id} not found")

        orders = await self.order_repo.get_by_ids(order_ids, for_update=True)
        self._validate_selection(command.customer_id, order_ids, orders)

        # Step 2: Roll up and compute amounts
        items = await self.order_repo.get_items_for_orders(order_ids)
        products = {
            p.id: p
            for p in await self.product_repo.get_by_ids(list({i.product_id for i in items}))
        }
        invoice_items = to_invoice_items(rollup_products(orders, items, products))

        # Rate is stored at two decimals; tax is computed from the stored value
        tax_rate = to_money(
            command.tax_rate if command.tax_rate is not None else self.default_tax_rate
        )
        subtotal = to_money(sum(o.total_amount for o in orders))
        tax_amount = tax_for(subtotal, tax_rate)

        # Step 3: Insert invoice
        invoice = Invoice(
            invoice_number=await self._invoice_number(command.invoice_number),
            customer_id=command.customer_id,
            status=InvoiceStatus.GENERATED,
            subtotal_amount=subtotal,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            total_amount=subtotal + tax_amount,
            order_count=len(orders),
            description=command.description or self._describe(orders),
            shipping_address=command.shipping_address or customer.address,
        )

        try:
            created = await self.invoice_repo.create(invoice, invoice_items)
        except DuplicateInvoiceNumberError:
            logger.warning(
                f"Invoice number {invoice.invoice_number} collided (attempt {attempt})"
            )
            await self.uow.rollback()
            return None

        # Step 4: Claim orders; a short count means someone else got there first
        claimed = await self.order_repo.attach_to_invoice(order_ids, created.id, command.customer_id)
        if claimed != len(order_ids):
            logger.warning(
                f"Concurrent invoicing detected for customer {command.customer_id}: "
                f"claimed {claimed} of {len(order_ids)} orders"
            )
            raise OrderAlreadyInvoicedError(
                "One or more selected orders were invoiced by another request"
            )

        await self.slip_repo.link_orders_to_invoice(order_ids, created.id)

        if self.record_transactions:
            await self.transaction_repo.create(
                AccountTransaction(
                    customer_id=command.customer_id,
                    transaction_type=AccountTransactionType.DEBIT,
                    amount=created.total_amount,
                    invoice_id=created.id,
                    description=f"Invoice {created.invoice_number}",
                )
            )

        return InvoiceResponseDTO.from_entities(created, invoice_items, order_ids)

    @staticmethod
    def _validate_selection(customer_id: int, order_ids: List[int], orders: List[Order]) -> None:
        found = {o.id for o in orders}
        missing = [oid for oid in order_ids if oid not in found]
        if missing:
            raise OrderNotFoundError(f"Orders not found: {missing}")

        for order in orders:
            if order.customer_id != customer_id:
                raise OrderCustomerMismatchError(
                    f"Order {order.order_number} does not belong to customer {customer_id}"
                )
        for order in orders:
            if order.status != OrderStatus.DELIVERED:
                raise OrderNotDeliveredError(
                    f"Order {order.order_number} is {order.status.value}, not delivered"
                )
        for order in orders:
            if order.invoice_id is not None:
                raise OrderAlreadyInvoicedError(
                    f"Order {order.order_number} is already billed by invoice {order.invoice_id}"
                )

    async def _invoice_number(self, requested: Optional[str]) -> str:
        if not requested:
            return await self.invoice_repo.generate_invoice_number()

        candidate = requested
        suffix = 0
        while await self.invoice_repo.get_by_invoice_number(candidate):
            suffix += 1
            candidate = f"{requested}-{suffix}"
        return candidate

    @staticmethod
    def _describe(orders: List[Order]) -> str:
        numbers = ", ".join(o.order_number for o in orders)
        return f"Bulk invoice for {len(orders)} orders: {numbers}"
