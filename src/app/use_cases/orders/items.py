"""Order item construction shared by CreateOrder and UpdateOrderItems"""

from decimal import Decimal
from typing import List, Tuple

from src.app.repositories.product_repository import ProductRepository
from src.domain.errors import ProductNotFoundError
from src.domain.money import ZERO, line_total, to_money
from src.domain.order_item import OrderItem
from .dtos import OrderItemInputDTO


async def build_order_items(
    product_repo: ProductRepository,
    inputs: List[OrderItemInputDTO],
    order_id: int = None,
) -> Tuple[List[OrderItem], Decimal]:
    """
    Turn requested lines into OrderItem entities and the order total

    Lines without an explicit unit price use the catalog price.

    Raises:
        ProductNotFoundError: a referenced product does not exist
    """
    product_ids = list(dict.fromkeys(line.product_id for line in inputs))
    products = {p.id: p for p in await product_repo.get_by_ids(product_ids)}

    missing = [pid for pid in product_ids if pid not in products]
    if missing:
        raise ProductNotFoundError(f"Products not found: {missing}")

    items: List[OrderItem] = []
    total = ZERO
    for line in inputs:
        unit_price = to_money(
            line.unit_price if line.unit_price is not None else products[line.product_id].price
        )
        line_price = line_total(line.quantity, unit_price)
        items.append(
            OrderItem(
                order_id=order_id,
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=unit_price,
                total_price=line_price,
            )
        )
        total += line_price

    return items, to_money(total)
