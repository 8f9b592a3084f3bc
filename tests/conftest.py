import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from order_board.database import get_db, init_db
from order_board.main import app
from order_board.models.product import Product
from order_board.publishers.event_publisher import EventPublisher
from order_board.repositories import order_repository
from order_board.services.product_client import RepositoryProductCatalog
from order_board.store.base import OrderStore
from order_board.store.local import LocalOrderStore


class FakeClock:
    """Deterministic epoch-ms source, one tick per call"""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(order_repository, "epoch_ms", fake)
    return fake


@pytest.fixture
def engine(tmp_path):
    # File-backed so that worker threads of the local store get their own connections
    engine = create_engine(
        f"sqlite:///{tmp_path / 'orders.db'}",
        connect_args={"check_same_thread": False}
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def products(session_factory):
    """ProductA at 45.00 and ProductB at 30.00, plus one unavailable product"""
    with session_factory() as session:
        rows = [
            Product(id="prod-a", name="ProductA", price=Decimal("45.00"), category="mains"),
            Product(id="prod-b", name="ProductB", price=Decimal("30.00"), category="drinks"),
            Product(id="prod-off", name="Seasonal", price=Decimal("12.50"), is_available=False),
        ]
        session.add_all(rows)
        session.commit()
    return {"a": "prod-a", "b": "prod-b", "unavailable": "prod-off"}


@pytest.fixture
def store(session_factory, products, clock):
    return LocalOrderStore(
        session_factory=session_factory,
        catalog_factory=RepositoryProductCatalog,
        event_publisher=EventPublisher(enabled=False)
    )


@pytest.fixture
def client(session_factory, products, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class ControlledStore(OrderStore):
    """Wraps a store; writes can be made to fail or to wait for a release"""

    def __init__(self, inner: OrderStore):
        self.inner = inner
        self.fail_writes_with = None
        self.fail_reads_with = None
        self.hold_writes = False
        self.write_started = asyncio.Event()
        self.release = asyncio.Event()
        self.update_calls = []

    async def create(self, draft):
        return await self.inner.create(draft)

    async def list(self, order_filter):
        if self.fail_reads_with is not None:
            raise self.fail_reads_with
        return await self.inner.list(order_filter)

    async def get(self, order_id):
        return await self.inner.get(order_id)

    async def update_status(self, order_id, new_status, role=None):
        self.update_calls.append((order_id, new_status, role))
        if self.hold_writes:
            self.write_started.set()
            await self.release.wait()
        if self.fail_writes_with is not None:
            raise self.fail_writes_with
        return await self.inner.update_status(order_id, new_status, role)


@pytest.fixture
def controlled_store(store):
    return ControlledStore(store)
