"""
Order store package
"""
from order_board.config import settings
from order_board.store.base import OrderStore
from order_board.store.local import LocalOrderStore
from order_board.store.remote import RemoteOrderStore


def build_order_store(backend: str = None) -> OrderStore:
    """Create the configured order store ("local" or "remote")"""
    backend = (backend or settings.ORDER_STORE_BACKEND).lower()
    if backend == "local":
        return LocalOrderStore()
    if backend == "remote":
        return RemoteOrderStore()
    raise ValueError(f"Unknown order store backend: {backend}")


__all__ = ["OrderStore", "LocalOrderStore", "RemoteOrderStore", "build_order_store"]
