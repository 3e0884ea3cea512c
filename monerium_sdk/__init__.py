"""
Monerium Python SDK - A Python SDK for interacting with the Monerium e-money API.
"""

from .client import Client
from .config import (
    SANDBOX,
    PRODUCTION,
    Environment,
    AuthConfig,
    ClientConfig,
    load_config
)
from .common import Chain, Network, Currency, Ticker, Symbol
from .errors import (
    MoneriumError,
    ConfigError,
    RequestValidationError,
    APIError,
    TransportError,
    TokenAcquisitionError,
    NotificationConnectionError,
    ReadError,
    DecodeError,
    CancellationError
)
from .internal.token_source import Token, TokenSource
from .profiles.types import (
    AuthContext,
    ProfileSummary,
    Profile,
    Account,
    KYCState,
    KYCOutcome,
    GetProfileRequest,
    AccountParams,
    AddAddressToProfileRequest
)
from .balances.client import (
    ProfileBalance,
    Balance,
    EMoneyToken,
    GetBalancesForProfileRequest
)
from .orders.types import (
    Order,
    OrderKind,
    OrderState,
    OrderMeta,
    Counterpart,
    Identifier,
    CounterpartDetails,
    PlaceOrderRequest,
    GetOrdersRequest,
    GetOrderRequest,
    OrdersNotificationsRequest
)
from .files.client import File, FileMeta, UploadFileRequest
from .ws.listener import NotificationListener, NotificationResult, OrderUpdate, OrderError

__version__ = "0.1.0"
__all__ = [
    "Client",
    "SANDBOX",
    "PRODUCTION",
    "Environment",
    "AuthConfig",
    "ClientConfig",
    "load_config",
    "Chain",
    "Network",
    "Currency",
    "Ticker",
    "Symbol",
    "MoneriumError",
    "ConfigError",
    "RequestValidationError",
    "APIError",
    "TransportError",
    "TokenAcquisitionError",
    "NotificationConnectionError",
    "ReadError",
    "DecodeError",
    "CancellationError",
    "Token",
    "TokenSource",
    "AuthContext",
    "ProfileSummary",
    "Profile",
    "Account",
    "KYCState",
    "KYCOutcome",
    "GetProfileRequest",
    "AccountParams",
    "AddAddressToProfileRequest",
    "ProfileBalance",
    "Balance",
    "EMoneyToken",
    "GetBalancesForProfileRequest",
    "Order",
    "OrderKind",
    "OrderState",
    "OrderMeta",
    "Counterpart",
    "Identifier",
    "CounterpartDetails",
    "PlaceOrderRequest",
    "GetOrdersRequest",
    "GetOrderRequest",
    "OrdersNotificationsRequest",
    "File",
    "FileMeta",
    "UploadFileRequest",
    "NotificationListener",
    "NotificationResult",
    "OrderUpdate",
    "OrderError"
]
