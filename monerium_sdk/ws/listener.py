import functools
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

import websocket
from loguru import logger
from pydantic import ValidationError

from ..errors import (
    CancellationError,
    DecodeError,
    MoneriumError,
    NotificationConnectionError,
    ReadError,
    TokenAcquisitionError,
)
from ..internal.token_source import TokenSource
from ..orders.types import Order, OrdersNotificationsRequest

DEFAULT_TICK = 0.5
DEFAULT_CONNECT_TIMEOUT = 30.0
CLOSE_REASON = b"stopping connection"


@dataclass(frozen=True)
class OrderUpdate:
    """A successfully decoded order notification."""
    order: Order

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Order:
        return self.order


@dataclass(frozen=True)
class OrderError:
    """A failed read, or the final result after cancellation."""
    error: MoneriumError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Order:
        raise self.error


NotificationResult = Union[OrderUpdate, OrderError]


def dial_websocket(url: str, headers: Dict[str, str], timeout: float,
                   connect_timeout: float = DEFAULT_CONNECT_TIMEOUT):
    """
    Open a websocket-client connection.

    The handshake is bounded by ``connect_timeout``; once connected, reads
    time out after ``timeout`` seconds.
    """
    conn = websocket.create_connection(url, header=headers, timeout=connect_timeout)
    conn.settimeout(timeout)
    return conn


def read_order(conn) -> Order:
    """
    Read one frame from the connection and decode it into an Order.

    Raises:
        websocket.WebSocketTimeoutException: If no frame arrived in time
        ReadError: If the read failed or the frame is not a text frame
        DecodeError: If the frame payload is not a valid order
    """
    try:
        opcode, data = conn.recv_data()
    except websocket.WebSocketTimeoutException:
        raise
    except TimeoutError as e:
        raise websocket.WebSocketTimeoutException(str(e)) from e
    except (websocket.WebSocketException, OSError) as e:
        raise ReadError(f"failed to read order: failed to read from websocket: {str(e)}") from e

    if opcode != websocket.ABNF.OPCODE_TEXT:
        raise ReadError(f"failed to read order: unsupported message type: {opcode}")

    try:
        return Order.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"failed to read order: failed to build order: {str(e)}") from e


class NotificationListener:
    """
    Streams order state changes from the notification WebSocket.

    The server emits the same order up to three times, once per state change:
    placed, pending (optional) and processed. Every frame yields exactly one
    result on the sink, in arrival order.

    Read errors are delivered on the sink and the stream carries on; the
    listener never re-dials. A caller that ignores OrderError results will
    just stop seeing orders after a connection problem, so reconnecting
    (cancel, then subscribe again) is up to the caller.
    """

    def __init__(self, ws_url: str, token_source: TokenSource, tick: float = DEFAULT_TICK,
                 connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
                 dial: Optional[Callable[[str, Dict[str, str], float], Any]] = None):
        """
        Initialize the listener.

        Args:
            ws_url: Base WebSocket URL
            token_source: Source of bearer tokens, borrowed once per subscription
            tick: Seconds between read attempts, also the read timeout
            connect_timeout: Handshake timeout of the default dialer in seconds
            dial: Opens a connection as dial(url, headers, timeout), defaults to websocket-client
        """
        self.ws_url = ws_url.rstrip("/")
        self.token_source = token_source
        self.tick = tick
        self.connect_timeout = connect_timeout
        self.dial = dial or functools.partial(dial_websocket, connect_timeout=connect_timeout)

    def endpoint(self, request: Optional[OrdersNotificationsRequest]) -> str:
        if request is not None and request.profile_id:
            return f"{self.ws_url}/profiles/{request.profile_id}/orders"
        return f"{self.ws_url}/orders"

    def subscribe(self, cancel: threading.Event, request: Optional[OrdersNotificationsRequest], sink) -> threading.Thread:
        """
        Connect and start streaming order results into ``sink``.

        Returns as soon as the connection is open. Results are put on the
        sink from a background thread until ``cancel`` is set, after which a
        final OrderError(CancellationError) is delivered and the thread exits.
        ``sink.put`` may block; nothing is buffered or dropped.

        Args:
            cancel: Set by the caller to stop the stream
            request: Optional scope, None or an empty profile ID means all profiles
            sink: Any object with a put(result) method, e.g. queue.Queue

        Returns:
            threading.Thread: The started listener thread

        Raises:
            TokenAcquisitionError: If no access token could be obtained
            NotificationConnectionError: If the WebSocket could not be opened
        """
        try:
            tok = self.token_source.token()
        except TokenAcquisitionError:
            logger.error("order notifications: failed to get auth token")
            raise

        url = self.endpoint(request)
        headers = {"Authorization": tok.authorization_header()}

        logger.info("Connecting to WebSocket: {}", url)
        try:
            conn = self.dial(url, headers, self.tick)
        except (websocket.WebSocketException, OSError, ValueError) as e:
            logger.error("failed to dial websocket {}: {}", url, e)
            raise NotificationConnectionError(f"failed to dial websocket: {str(e)}") from e
        logger.info("WebSocket connection established")

        thread = threading.Thread(
            target=self._run,
            args=(conn, cancel, sink),
            name=f"order-notifications:{url}",
            daemon=True
        )
        thread.start()
        return thread

    def _run(self, conn, cancel: threading.Event, sink) -> None:
        failures = 0
        while True:
            if cancel.wait(self.tick):
                self._close(conn)
                sink.put(OrderError(CancellationError("order notifications cancelled")))
                logger.info("order notifications stopped")
                return

            try:
                order = read_order(conn)
            except websocket.WebSocketTimeoutException:
                continue
            except ReadError as e:
                failures += 1
                logger.warning("{} (consecutive failures: {})", e, failures)
                sink.put(OrderError(e))
                continue

            failures = 0
            logger.debug("order {} state={}", order.id, order.state)
            sink.put(OrderUpdate(order))

    @staticmethod
    def _close(conn) -> None:
        try:
            conn.close(status=websocket.STATUS_NORMAL, reason=CLOSE_REASON)
        except (websocket.WebSocketException, OSError) as e:
            logger.warning("failed to close websocket: {}", e)
