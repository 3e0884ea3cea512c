import threading
from typing import List, Optional

from .balances.client import Client as BalancesClient
from .balances.client import EMoneyToken, GetBalancesForProfileRequest, ProfileBalance
from .config import DEFAULT_NOTIFY_TICK, DEFAULT_TIMEOUT, AuthConfig, ClientConfig, Environment
from .files.client import Client as FilesClient
from .files.client import File, UploadFileRequest
from .internal.async_client import AsyncClient
from .internal.token_source import TokenSource
from .orders.client import Client as OrdersClient
from .orders.types import GetOrderRequest, GetOrdersRequest, Order, OrdersNotificationsRequest, PlaceOrderRequest
from .profiles.client import Client as ProfilesClient
from .profiles.types import AddAddressToProfileRequest, AuthContext, GetProfileRequest, Profile, ProfileSummary
from .ws.listener import NotificationListener


class Client:
    """Main Monerium SDK client."""

    def __init__(self, environment: Environment, auth: AuthConfig,
                 notify_tick: float = DEFAULT_NOTIFY_TICK, timeout: float = DEFAULT_TIMEOUT,
                 token_source: Optional[TokenSource] = None):
        """
        Initialize the Monerium SDK client.

        Args:
            environment: Sandbox or production endpoints
            auth: OAuth2 client credentials
            notify_tick: Polling interval of order notifications in seconds
            timeout: Request timeout in seconds
            token_source: Optional token source (defaults to client credentials over auth)
        """
        if token_source is None:
            token_source = TokenSource(auth, timeout=timeout)
        self.environment = environment
        self.token_source = token_source

        self.async_client = AsyncClient(
            base_url=environment.base_url,
            token_source=token_source,
            timeout=timeout
        )

        # Initialize API clients
        self.profiles = ProfilesClient(self.async_client)
        self.balances = BalancesClient(self.async_client)
        self.orders = OrdersClient(self.async_client)
        self.files = FilesClient(self.async_client)
        self.notifications = NotificationListener(
            ws_url=environment.ws_url,
            token_source=token_source,
            tick=notify_tick,
            connect_timeout=timeout
        )

    @classmethod
    def from_config(cls, config: ClientConfig, token_source: Optional[TokenSource] = None) -> "Client":
        return cls(
            environment=config.environment,
            auth=config.auth,
            notify_tick=config.notify_tick,
            timeout=config.timeout,
            token_source=token_source
        )

    async def __aenter__(self):
        """Async context manager entry."""
        await self.async_client._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close the client and cleanup resources."""
        await self.async_client.close()

    async def get_auth_context(self) -> AuthContext:
        """Get the context of the authenticated user."""
        return await self.profiles.get_auth_context()

    async def get_profiles(self) -> List[ProfileSummary]:
        """Get summaries of all profiles."""
        return await self.profiles.get_profiles()

    async def get_profile(self, params: GetProfileRequest) -> Profile:
        """Get a single profile's details."""
        return await self.profiles.get_profile(params)

    async def add_address_to_profile(self, params: AddAddressToProfileRequest) -> Profile:
        """Link a blockchain address to a profile."""
        return await self.profiles.add_address_to_profile(params)

    async def get_balances(self) -> List[ProfileBalance]:
        """Get balances of the default profile."""
        return await self.balances.get_balances()

    async def get_balances_for_profile(self, params: GetBalancesForProfileRequest) -> List[ProfileBalance]:
        """Get balances of a given profile."""
        return await self.balances.get_balances_for_profile(params)

    async def get_tokens(self) -> List[EMoneyToken]:
        """Get the supported e-money tokens."""
        return await self.balances.get_tokens()

    async def place_order(self, params: PlaceOrderRequest) -> Order:
        """Place a redeem order."""
        return await self.orders.place_order(params)

    async def get_orders(self, params: Optional[GetOrdersRequest] = None) -> List[Order]:
        """Get orders, optionally filtered."""
        return await self.orders.get_orders(params)

    async def get_order(self, params: GetOrderRequest) -> Order:
        """Get a single order."""
        return await self.orders.get_order(params)

    async def upload_file(self, params: UploadFileRequest) -> File:
        """Upload a file, e.g. a supporting document."""
        return await self.files.upload_file(params)

    def orders_notifications(self, cancel: threading.Event,
                             params: Optional[OrdersNotificationsRequest], sink) -> threading.Thread:
        """
        Stream order updates into ``sink`` until ``cancel`` is set.

        This call blocks only while connecting; see NotificationListener.subscribe.
        """
        return self.notifications.subscribe(cancel, params, sink)
