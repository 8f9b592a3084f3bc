"""
Order store over the Order Board HTTP service
"""
import httpx
from typing import List, Optional

from order_board.config import settings
from order_board.exceptions import (
    InvalidTransitionError,
    OrderBoardError,
    OrderNotFoundError,
    ProductNotFoundError,
    StoreUnavailableError
)
from order_board.logging_config import get_logger
from order_board.schemas.order import (
    OrderCreate,
    OrderFilter,
    OrderListResponse,
    OrderResponse,
    OrderStatus,
    OrderStatusUpdate,
    StaffRole
)
from order_board.store.base import OrderStore

logger = get_logger(__name__)


def _detail(response: httpx.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text


class RemoteOrderStore(OrderStore):
    """HTTP client for the orders API; failures are raised, never retried"""

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        self.base_url = base_url or settings.ORDER_SERVICE_URL
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.ORDER_SERVICE_TIMEOUT,
            transport=transport
        )

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self.client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.debug("Order service request %s %s failed: %s", method, url, e)
            raise StoreUnavailableError(f"Order service unavailable: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.status_code >= 500:
            raise StoreUnavailableError(f"Order service error {response.status_code}: {_detail(response)}")
        if response.status_code >= 400:
            raise OrderBoardError(f"Order service rejected request ({response.status_code}): {_detail(response)}")

    async def create(self, draft: OrderCreate) -> OrderResponse:
        response = await self._request("POST", "/orders", json=draft.model_dump(mode="json"))
        if response.status_code == 404:
            detail = _detail(response)
            missing = next(
                (item.product_id for item in draft.items if item.product_id in detail),
                None
            )
            raise ProductNotFoundError(missing, detail)
        self._raise_for_status(response)
        return OrderResponse.model_validate(response.json())

    async def list(self, order_filter: OrderFilter) -> List[OrderResponse]:
        params = [("status", status.value) for status in order_filter.statuses]
        if order_filter.table_identifier:
            params.append(("table", order_filter.table_identifier))

        response = await self._request("GET", "/orders", params=params)
        self._raise_for_status(response)
        return OrderListResponse.model_validate(response.json()).orders

    async def get(self, order_id: str) -> OrderResponse:
        response = await self._request("GET", f"/orders/{order_id}")
        if response.status_code == 404:
            raise OrderNotFoundError(order_id, _detail(response))
        self._raise_for_status(response)
        return OrderResponse.model_validate(response.json())

    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        role: Optional[StaffRole] = None
    ) -> OrderResponse:
        body = OrderStatusUpdate(status=new_status, role=role)
        response = await self._request("PATCH", f"/orders/{order_id}/status", json=body.model_dump(mode="json"))
        if response.status_code == 404:
            raise OrderNotFoundError(order_id, _detail(response))
        if response.status_code == 409:
            raise InvalidTransitionError(requested=new_status, role=role, message=_detail(response))
        self._raise_for_status(response)
        return OrderResponse.model_validate(response.json())

    async def aclose(self) -> None:
        await self.client.aclose()
