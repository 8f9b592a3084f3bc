"""
Services package
"""
from order_board.services.order_service import OrderService
from order_board.services.product_client import ProductCatalog, ProductServiceClient, RepositoryProductCatalog

__all__ = ["OrderService", "ProductCatalog", "ProductServiceClient", "RepositoryProductCatalog"]
