import asyncio
import json
from typing import Any, BinaryIO, Dict, Optional, Union

import aiohttp
from loguru import logger

from ..errors import APIError, TransportError
from .token_source import TokenSource


class AsyncClient:
    """Async base client with common functionality."""

    def __init__(self, base_url: str, token_source: TokenSource,
                 timeout: float = 30.0, connector_limit: int = 100):
        """
        Initialize the async internal client.

        Args:
            base_url: Base URL for API endpoints
            token_source: Source of bearer tokens for the Authorization header
            timeout: Request timeout in seconds
            connector_limit: Maximum number of connections in the pool
        """
        self.base_url = base_url.rstrip("/")
        self.token_source = token_source

        # Store configuration for later session creation
        self._session = None
        self._timeout = timeout
        self._connector_limit = connector_limit

    async def _ensure_session(self):
        """Ensure the aiohttp session is created."""
        if self._session is None or self._session.closed:
            # Create connector and session when needed (inside event loop)
            timeout_config = aiohttp.ClientTimeout(total=self._timeout)
            connector = aiohttp.TCPConnector(
                limit=self._connector_limit,
                limit_per_host=30,
                keepalive_timeout=30,
                enable_cleanup_closed=True
            )

            self._session = aiohttp.ClientSession(
                timeout=timeout_config,
                connector=connector,
                headers={"Accept": "application/json"}
            )

    async def close(self):
        """Close the HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get the HTTP session, ensuring it's created."""
        if self._session is None or self._session.closed:
            raise RuntimeError("Session not initialized. Use 'async with client:' or call '_ensure_session()'")
        return self._session

    async def _auth_headers(self) -> Dict[str, str]:
        # token source uses blocking requests
        tok = await asyncio.to_thread(self.token_source.token)
        return {"Authorization": tok.authorization_header()}

    async def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        Make an authenticated GET request and return the decoded JSON body.

        Raises:
            APIError: If the response status is not 200
            TransportError: If the request could not be performed
        """
        return await self._request("GET", path, params=params, ok_statuses=(200,))

    async def post(self, path: str, data: Dict[str, Any]) -> Any:
        """
        Make an authenticated POST request with a JSON body.

        Raises:
            APIError: If the response status is neither 200 nor 202
            TransportError: If the request could not be performed
        """
        return await self._request("POST", path, json_body=data, ok_statuses=(200, 202))

    async def upload(self, path: str, filename: str, content: Union[bytes, BinaryIO]) -> Any:
        """
        Upload a file as multipart form data under the ``file`` field.

        Raises:
            APIError: If the response status is not 200
            TransportError: If the request could not be performed
        """
        form = aiohttp.FormData()
        form.add_field("file", content, filename=filename, content_type="application/octet-stream")
        return await self._request("POST", path, form=form, ok_statuses=(200,))

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        form: Optional[aiohttp.FormData] = None,
        ok_statuses: tuple = (200,),
    ) -> Any:
        await self._ensure_session()
        headers = await self._auth_headers()
        url = f"{self.base_url}{path}"

        logger.debug("{} {}", method, path)
        try:
            async with self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                data=form,
                headers=headers
            ) as response:
                body = await response.read()
                if response.status not in ok_statuses:
                    raise new_error_from(path, response.status, body, response.headers)
                if not body:
                    return None
                try:
                    return json.loads(body)
                except ValueError as e:
                    raise TransportError(f"{path}: invalid JSON response: {str(e)}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"HTTP request timed out after {self._timeout}s: {path}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"HTTP request failed: {str(e)}") from e


def new_error_from(call: str, status_code: int, body: bytes, headers) -> APIError:
    """Build an APIError from a failed response body and headers."""
    correlation_id = headers.get("X-Correlation-Id", "") if headers else ""
    try:
        resp = json.loads(body)
    except ValueError:
        resp = None
    if not isinstance(resp, dict):
        text = body.decode("utf-8", errors="replace")
        return APIError(call, status_code, text, correlation_id=correlation_id)

    return APIError(
        call,
        status_code,
        resp.get("message", ""),
        code=resp.get("code"),
        status=resp.get("status", ""),
        correlation_id=correlation_id,
        errors=resp.get("errors"),
        details=resp.get("details"),
    )
