"""
Product catalog access used by order creation

Two interchangeable catalogs: the local products table and the remote
Product Service (HTTP client with retry logic).
"""
import httpx
from abc import ABC, abstractmethod
from typing import Optional, Dict
from sqlalchemy.orm import Session
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from order_board.config import settings
from order_board.exceptions import ProductNotFoundError, ProductServiceError, ProductServiceUnavailableError
from order_board.logging_config import get_logger
from order_board.repositories.product_repository import ProductRepository
from order_board.schemas.product import ProductSnapshot

logger = get_logger(__name__)


class ProductCatalog(ABC):
    """Resolves product ids to their current name and price"""

    @abstractmethod
    async def resolve(self, product_id: str) -> Optional[ProductSnapshot]:
        """Return the live product, or None when it does not exist"""


class RepositoryProductCatalog(ProductCatalog):
    """Catalog backed by the local products table"""

    def __init__(self, db: Session):
        self.repository = ProductRepository(db)

    async def resolve(self, product_id: str) -> Optional[ProductSnapshot]:
        product = self.repository.get_by_id(product_id)
        if product is None:
            return None
        return ProductSnapshot.model_validate(product)


class ProductServiceClient(ProductCatalog):
    """Client for communicating with Product Service"""

    def __init__(self, base_url: str = None, transport: httpx.AsyncBaseTransport = None):
        self.base_url = base_url or settings.PRODUCT_SERVICE_URL
        self.timeout = 5.0  # 5 seconds timeout
        self.transport = transport

    @retry(
        stop=stop_after_attempt(settings.MAX_RETRIES),
        wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
        retry=retry_if_exception_type(ProductServiceUnavailableError),
        reraise=True
    )
    async def get_product(self, product_id: str) -> Dict:
        """
        Get product by ID from Product Service

        Args:
            product_id: Product ID

        Returns:
            Product data

        Raises:
            ProductNotFoundError: If product not found
            ProductServiceUnavailableError: If service is unavailable
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(f"{self.base_url}/products/{product_id}")
        except (httpx.TimeoutException, httpx.ConnectError) as e:
            logger.warning("Error calling Product Service: %s", e)
            raise ProductServiceUnavailableError(f"Product Service unavailable: {e}") from e

        if response.status_code == 200:
            return response.json()
        elif response.status_code == 404:
            raise ProductNotFoundError(product_id)
        else:
            raise ProductServiceError(f"Unexpected status code: {response.status_code}")

    async def resolve(self, product_id: str) -> Optional[ProductSnapshot]:
        try:
            data = await self.get_product(product_id)
        except ProductNotFoundError:
            return None
        return ProductSnapshot.model_validate(data)


def build_catalog(db: Session) -> ProductCatalog:
    """Remote Product Service when configured, local table otherwise"""
    if settings.PRODUCT_SERVICE_URL:
        return ProductServiceClient()
    return RepositoryProductCatalog(db)
