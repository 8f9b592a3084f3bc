"""
Cashier-side order assembly

The cart lives only in memory until submission; the order store performs the
price snapshot when the draft is submitted.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from order_board.config import settings
from order_board.exceptions import OrderAssemblyError
from order_board.logging_config import get_logger
from order_board.schemas.order import OrderCreate, OrderLineCreate
from order_board.store.base import OrderStore

logger = get_logger(__name__)


@dataclass
class CartLine:
    product_id: str
    quantity: int
    name: Optional[str] = None
    price: Optional[Decimal] = None  # display hint, the store re-reads the catalog


class OrderAssemblySession:
    """Accumulates a cart, a table and notes, then submits them as one order"""

    def __init__(self, store: OrderStore, table_names: Optional[Sequence[str]] = None):
        self.store = store
        self.table_names = list(settings.TABLE_NAMES if table_names is None else table_names)
        self._lines: Dict[str, CartLine] = {}
        self.table_identifier: Optional[str] = None
        self.notes: str = ""
        self._submitting = False

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def can_submit(self) -> bool:
        return bool(self._lines) and bool(self.table_identifier) and not self._submitting

    def add_product(self, product_id: str, quantity: int = 1, name: str = None, price: Decimal = None) -> CartLine:
        """Add a product to the cart, or raise its quantity if already there"""
        if quantity < 1:
            raise OrderAssemblyError("Quantity to add must be at least 1")
        line = self._lines.get(product_id)
        if line is None:
            line = CartLine(product_id=product_id, quantity=quantity, name=name, price=price)
            self._lines[product_id] = line
        else:
            line.quantity += quantity
            if name is not None:
                line.name = name
            if price is not None:
                line.price = price
        return line

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; anything below 1 removes the line"""
        if quantity < 1:
            self._lines.pop(product_id, None)
            return
        line = self._lines.get(product_id)
        if line is None:
            raise OrderAssemblyError(f"Product {product_id} is not in the cart")
        line.quantity = quantity

    def remove_product(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def set_table(self, table_identifier: str) -> None:
        table_identifier = (table_identifier or "").strip()
        if not table_identifier:
            raise OrderAssemblyError("Table identifier must not be empty")
        if self.table_names and table_identifier not in self.table_names:
            raise OrderAssemblyError(f"Unknown table: {table_identifier}")
        self.table_identifier = table_identifier

    def set_notes(self, notes: str) -> None:
        self.notes = notes or ""

    def preview_total(self) -> Decimal:
        """Cart total from price hints; lines without a hint count as zero"""
        return sum(
            ((line.price or Decimal("0")) * line.quantity for line in self._lines.values()),
            Decimal("0")
        )

    def build_draft(self) -> OrderCreate:
        if not self._lines:
            raise OrderAssemblyError("Cart is empty")
        if not self.table_identifier:
            raise OrderAssemblyError("No table selected")
        return OrderCreate(
            table_identifier=self.table_identifier,
            notes=self.notes.strip() or None,
            items=[
                OrderLineCreate(product_id=line.product_id, quantity=line.quantity)
                for line in self._lines.values()
            ]
        )

    async def submit(self) -> str:
        """
        Submit the cart as a new order

        Returns:
            Id of the created order

        Raises:
            OrderAssemblyError: If the cart is incomplete or already submitting
            ProductNotFoundError: If the store rejects a product; the cart is kept
        """
        if self._submitting:
            raise OrderAssemblyError("Order submission already in progress")
        draft = self.build_draft()

        self._submitting = True
        try:
            order = await self.store.create(draft)
        except Exception as e:
            logger.warning("Order submission for table %s failed: %s", draft.table_identifier, e)
            raise
        finally:
            self._submitting = False

        self.clear()
        return order.id

    def clear(self) -> None:
        self._lines.clear()
        self.table_identifier = None
        self.notes = ""
