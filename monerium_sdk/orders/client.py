from typing import List, Optional

from loguru import logger

from ..internal.async_client import AsyncClient
from .types import GetOrderRequest, GetOrdersRequest, Order, PlaceOrderRequest


class Client:
    """Client for order endpoints."""

    def __init__(self, async_client: AsyncClient):
        """
        Initialize the order client.

        Args:
            async_client: The async client for common functionality
        """
        self.async_client = async_client

    async def place_order(self, params: PlaceOrderRequest) -> Order:
        """
        Place a redeem order: a payment to an external SEPA account.

        The payload carries the amount, currency and beneficiary (counterpart).
        SEPA payments require strong customer authentication, implemented as a
        signature of ``message`` by the private key of the address.

        Args:
            params: Order parameters

        Returns:
            Order: The placed order

        Raises:
            RequestValidationError: If required parameters are missing or invalid
        """
        params.validate()
        data = await self.async_client.post("/orders", params.to_payload())
        order = Order.model_validate(data)
        logger.info("placed order {} state={}", order.id, order.state)
        return order

    async def get_orders(self, params: Optional[GetOrdersRequest] = None) -> List[Order]:
        """
        Get all orders accessible by the authenticated user.

        Args:
            params: Optional filters, None applies no filter

        Returns:
            List[Order]: The matching orders
        """
        query = params.to_query() if params is not None else None
        data = await self.async_client.get("/orders", params=query or None)
        return [Order.model_validate(o) for o in data or []]

    async def get_order(self, params: GetOrderRequest) -> Order:
        """
        Get a single order by ID.

        Raises:
            RequestValidationError: If the order ID is empty
        """
        params.validate()
        data = await self.async_client.get(f"/orders/{params.order_id}")
        return Order.model_validate(data)
