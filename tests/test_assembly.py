import asyncio
from decimal import Decimal

import pytest

from order_board.exceptions import OrderAssemblyError, ProductNotFoundError, StoreUnavailableError
from order_board.schemas.order import OrderFilter, OrderStatus
from order_board.services.assembly import OrderAssemblySession


def test_add_product_merges_lines(store):
    session = OrderAssemblySession(store)

    session.add_product("prod-a", name="ProductA", price=Decimal("45.00"))
    session.add_product("prod-a", 2)
    session.add_product("prod-b", name="ProductB", price=Decimal("30.00"))

    assert [(line.product_id, line.quantity) for line in session.lines] == [("prod-a", 3), ("prod-b", 1)]
    assert session.preview_total() == Decimal("165.00")

    with pytest.raises(OrderAssemblyError):
        session.add_product("prod-a", 0)


def test_set_quantity_and_remove(store):
    session = OrderAssemblySession(store)
    session.add_product("prod-a")
    session.add_product("prod-b")

    session.set_quantity("prod-a", 4)
    assert session.lines[0].quantity == 4

    session.set_quantity("prod-a", 0)
    assert [line.product_id for line in session.lines] == ["prod-b"]

    session.remove_product("prod-b")
    assert session.is_empty

    with pytest.raises(OrderAssemblyError):
        session.set_quantity("prod-a", 2)


def test_set_table_validates_against_known_tables(store):
    session = OrderAssemblySession(store, table_names=["1", "2", "Terrace"])

    session.set_table(" Terrace ")
    assert session.table_identifier == "Terrace"

    with pytest.raises(OrderAssemblyError):
        session.set_table("99")
    with pytest.raises(OrderAssemblyError):
        session.set_table("  ")

    free = OrderAssemblySession(store, table_names=[])
    free.set_table("Bar 4")
    assert free.table_identifier == "Bar 4"


def test_cannot_submit_incomplete_cart(store):
    session = OrderAssemblySession(store)
    assert not session.can_submit

    with pytest.raises(OrderAssemblyError):
        session.build_draft()

    session.add_product("prod-a")
    assert not session.can_submit
    with pytest.raises(OrderAssemblyError):
        session.build_draft()

    session.set_table("1")
    assert session.can_submit


async def test_submit_creates_order_and_clears(store, products):
    session = OrderAssemblySession(store)
    session.add_product(products["a"], 2)
    session.add_product(products["b"])
    session.set_table("7")
    session.set_notes("  birthday  ")

    order_id = await session.submit()

    order = await store.get(order_id)
    assert order.status == OrderStatus.PENDING
    assert order.notes == "birthday"
    assert order.total_amount == Decimal("120.00")
    assert session.is_empty
    assert session.table_identifier is None
    assert session.notes == ""


async def test_failed_submit_keeps_cart(store, products):
    session = OrderAssemblySession(store)
    session.add_product(products["a"])
    session.add_product("ghost")
    session.set_table("7")

    with pytest.raises(ProductNotFoundError):
        await session.submit()

    assert len(session.lines) == 2
    assert session.table_identifier == "7"
    assert session.can_submit
    assert await store.list(OrderFilter()) == []


async def test_double_submit_is_rejected(controlled_store, products):
    class SlowCreate:
        def __init__(self, inner):
            self.inner = inner
            self.started = asyncio.Event()
            self.release = asyncio.Event()

        async def create(self, draft):
            self.started.set()
            await self.release.wait()
            return await self.inner.create(draft)

    slow = SlowCreate(controlled_store)
    session = OrderAssemblySession(slow)
    session.add_product(products["a"])
    session.set_table("7")

    first = asyncio.create_task(session.submit())
    await slow.started.wait()

    assert not session.can_submit
    with pytest.raises(OrderAssemblyError):
        await session.submit()

    slow.release.set()
    assert await first


async def test_store_outage_is_propagated(controlled_store, products):
    async def unavailable(draft):
        raise StoreUnavailableError("down")

    controlled_store.create = unavailable
    session = OrderAssemblySession(controlled_store)
    session.add_product(products["a"])
    session.set_table("7")

    with pytest.raises(StoreUnavailableError):
        await session.submit()
    assert not session.is_empty
