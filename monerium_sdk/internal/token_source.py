import threading
import time
from dataclasses import dataclass
from typing import Optional

import requests
from loguru import logger

from ..config import AuthConfig
from ..errors import TokenAcquisitionError

# Tokens are refreshed this many seconds before they actually expire.
EXPIRY_DELTA = 10.0


@dataclass
class Token:
    """An OAuth2 access token."""
    access_token: str
    token_type: str = "Bearer"
    expires_at: Optional[float] = None  # unix time, None means no expiry
    refresh_token: str = ""

    def valid(self, now: Optional[float] = None) -> bool:
        if not self.access_token:
            return False
        if self.expires_at is None:
            return True
        now = time.time() if now is None else now
        return now < self.expires_at - EXPIRY_DELTA

    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"


class TokenSource:
    """OAuth2 client credentials token source, safe to share across threads."""

    def __init__(self, auth: AuthConfig, session: Optional[requests.Session] = None, timeout: float = 30.0):
        """
        Initialize the token source.

        Args:
            auth: Client credentials and token endpoint
            session: Optional requests session (a new one is created if omitted)
            timeout: Token request timeout in seconds
        """
        self.auth = auth
        self.timeout = timeout
        self.http_client = session or requests.Session()
        self.http_client.headers.update({"Accept": "application/json"})

        self._token: Optional[Token] = None
        self._lock = threading.Lock()

    def token(self) -> Token:
        """
        Return a valid access token, fetching a new one when needed.

        Raises:
            TokenAcquisitionError: If the token endpoint cannot be reached or rejects the request
        """
        with self._lock:
            if self._token is not None and self._token.valid():
                return self._token
            self._token = self._fetch()
            return self._token

    def _fetch(self) -> Token:
        data = {
            "grant_type": "client_credentials",
            "client_id": self.auth.client_id,
            "client_secret": self.auth.client_secret,
        }

        logger.debug("requesting access token from {}", self.auth.token_url)
        try:
            response = self.http_client.post(self.auth.token_url, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise TokenAcquisitionError(f"failed to get auth token: {str(e)}") from e

        if response.status_code != 200:
            raise TokenAcquisitionError(
                f"failed to get auth token: status code {response.status_code}, response: {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TokenAcquisitionError(f"failed to get auth token: invalid response: {str(e)}") from e

        if not isinstance(payload, dict):
            raise TokenAcquisitionError("failed to get auth token: response is not a JSON object")

        access_token = payload.get("access_token")
        if not access_token:
            raise TokenAcquisitionError("failed to get auth token: server response missing access_token")

        expires_at = None
        expires_in = payload.get("expires_in")
        if expires_in:
            expires_at = time.time() + float(expires_in)

        return Token(
            access_token=access_token,
            token_type=payload.get("token_type") or "Bearer",
            expires_at=expires_at,
            refresh_token=payload.get("refresh_token", ""),
        )
