"""
Price snapshot taken when an order is created

Each line copies the product's current name and price so that later catalog
edits never change a placed order or its total.
"""
import asyncio
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence

from order_board.exceptions import ProductNotFoundError
from order_board.schemas.order import OrderLineCreate
from order_board.services.product_client import ProductCatalog


@dataclass(frozen=True)
class PriceSnapshot:
    lines: List[dict]
    total_amount: Decimal


async def snapshot_order_lines(items: Sequence[OrderLineCreate], catalog: ProductCatalog) -> PriceSnapshot:
    """
    Resolve every product of a draft and freeze name and price into its lines

    Args:
        items: Requested products and quantities
        catalog: Live product catalog

    Returns:
        Line dictionaries in request order and the frozen total

    Raises:
        ProductNotFoundError: If any product is missing or unavailable;
            nothing has been written at that point
    """
    product_ids = list(dict.fromkeys(item.product_id for item in items))
    resolved = await asyncio.gather(*(catalog.resolve(pid) for pid in product_ids))
    products = dict(zip(product_ids, resolved))

    for product_id in product_ids:
        product = products[product_id]
        if product is None:
            raise ProductNotFoundError(product_id)
        if not product.is_available:
            raise ProductNotFoundError(product_id, f"Product {product_id} is not available")

    lines = []
    total = Decimal("0")
    for item in items:
        product = products[item.product_id]
        lines.append({
            "product_id": item.product_id,
            "product_name": product.name,
            "price_at_order": product.price,
            "quantity": item.quantity,
        })
        total += product.price * item.quantity

    return PriceSnapshot(lines=lines, total_amount=total)
