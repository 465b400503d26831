"""Per-product rollup of delivered orders

Shared by the pending-invoice projection and bulk invoicing so that
the preview a user sees and the invoice that is issued always agree.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Tuple

from src.domain.invoice_item import InvoiceItem
from src.domain.money import ZERO, to_money
from src.domain.order import Order
from src.domain.order_item import OrderItem
from src.domain.product import Product


@dataclass
class ProductRollup:
    product_id: int
    product_name: str
    unit: str
    quantity: int
    amount: Decimal
    unit_price: Decimal


def recency_key(order: Order) -> Tuple[datetime, datetime, int]:
    """Sort key for "most recent order"; ties fall back to creation time then ID"""
    return (order.delivered_at or order.created_at, order.created_at, order.id or 0)


def rollup_products(
    orders: Iterable[Order],
    items: Iterable[OrderItem],
    products: Mapping[int, Product],
) -> List[ProductRollup]:
    """
    Sum quantity and amount per product across the given orders

    The unit price of each product is the one on its most recent order
    (see recency_key). Products are returned in first-seen order when
    walking orders from oldest to newest.
    """
    ordered = sorted(orders, key=recency_key)
    rank = {order.id: position for position, order in enumerate(ordered)}

    items_by_order: Dict[int, List[OrderItem]] = {}
    for item in items:
        if item.order_id in rank:
            items_by_order.setdefault(item.order_id, []).append(item)

    rollups: Dict[int, ProductRollup] = {}
    latest_rank: Dict[int, int] = {}
    for order in ordered:
        for item in items_by_order.get(order.id, []):
            rollup = rollups.get(item.product_id)
            if rollup is None:
                product = products.get(item.product_id)
                rollup = ProductRollup(
                    product_id=item.product_id,
                    product_name=product.name if product else f"#{item.product_id}",
                    unit=product.unit if product else "adet",
                    quantity=0,
                    amount=ZERO,
                    unit_price=to_money(item.unit_price),
                )
                rollups[item.product_id] = rollup

            rollup.quantity += item.quantity
            rollup.amount = to_money(rollup.amount + to_money(item.total_price))

            if rank[order.id] >= latest_rank.get(item.product_id, -1):
                latest_rank[item.product_id] = rank[order.id]
                rollup.unit_price = to_money(item.unit_price)

    return list(rollups.values())


def to_invoice_items(rollups: Iterable[ProductRollup]) -> List[InvoiceItem]:
    """Snapshot rollups as invoice lines; names are copied, not referenced"""
    return [
        InvoiceItem(
            product_id=r.product_id,
            product_name=r.product_name,
            unit=r.unit,
            quantity=r.quantity,
            unit_price=r.unit_price,
            total_price=r.amount,
        )
        for r in rollups
    ]
