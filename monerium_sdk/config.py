import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from .errors import ConfigError

DEFAULT_NOTIFY_TICK = 0.5
MIN_NOTIFY_TICK = 0.01
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Environment:
    """Endpoints of one Monerium deployment."""
    name: str
    base_url: str
    ws_url: str
    token_url: str


SANDBOX = Environment(
    name="sandbox",
    base_url="https://api.monerium.dev",
    ws_url="wss://api.monerium.dev",
    token_url="https://api.monerium.dev/auth/token",
)

PRODUCTION = Environment(
    name="production",
    base_url="https://api.monerium.app",
    ws_url="wss://api.monerium.app",
    token_url="https://api.monerium.app/auth/token",
)

ENVIRONMENTS = {env.name: env for env in (SANDBOX, PRODUCTION)}


@dataclass(frozen=True)
class AuthConfig:
    """Data for the OAuth2 client credentials flow."""
    client_id: str
    client_secret: str
    token_url: str

    def __repr__(self) -> str:
        return f"AuthConfig(client_id={self.client_id!r}, token_url={self.token_url!r})"


@dataclass(frozen=True)
class ClientConfig:
    """Everything needed to build a Client."""
    environment: Environment
    auth: AuthConfig
    notify_tick: float = DEFAULT_NOTIFY_TICK
    timeout: float = DEFAULT_TIMEOUT


def _read_yaml(path: str) -> Dict[str, Any]:
    # config file is optional
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def _parse_tick(raw: Any) -> float:
    """Parse a tick given in milliseconds, falling back to the default."""
    try:
        tick = float(raw) / 1000.0
    except (TypeError, ValueError):
        logger.warning("invalid notify tick {!r}, using default {}s", raw, DEFAULT_NOTIFY_TICK)
        return DEFAULT_NOTIFY_TICK
    if not math.isfinite(tick):
        logger.warning("invalid notify tick {!r}, using default {}s", raw, DEFAULT_NOTIFY_TICK)
        return DEFAULT_NOTIFY_TICK
    return max(tick, MIN_NOTIFY_TICK)


def _parse_timeout(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT


def load_config(path: str = "configs/monerium.yaml", env: Optional[Dict[str, str]] = None) -> ClientConfig:
    """
    Build a ClientConfig from the environment and an optional YAML file.

    Environment variables (and a .env file, when ``env`` is not given)
    take precedence over values from the YAML file.

    Args:
        path: Path of the YAML config file, ignored if missing
        env: Mapping used instead of os.environ

    Returns:
        ClientConfig: The resolved configuration

    Raises:
        ConfigError: If the environment name is unknown or credentials are missing
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)
    cfg = _read_yaml(path)

    env_name = (env.get("MONERIUM_ENVIRONMENT") or cfg.get("environment") or "sandbox").lower()
    environment = ENVIRONMENTS.get(env_name)
    if environment is None:
        raise ConfigError(f"unknown environment: {env_name}")

    client_id = env.get("MONERIUM_CLIENT_ID") or cfg.get("client_id")
    client_secret = env.get("MONERIUM_CLIENT_SECRET") or cfg.get("client_secret")
    if not client_id:
        raise ConfigError("MONERIUM_CLIENT_ID is not set")
    if not client_secret:
        raise ConfigError("MONERIUM_CLIENT_SECRET is not set")

    tick_raw = env.get("MONERIUM_NOTIFY_TICK_MS") or cfg.get("notify_tick_ms", DEFAULT_NOTIFY_TICK * 1000)
    timeout_raw = env.get("MONERIUM_TIMEOUT_SEC") or cfg.get("timeout_sec", DEFAULT_TIMEOUT)

    return ClientConfig(
        environment=environment,
        auth=AuthConfig(
            client_id=client_id,
            client_secret=client_secret,
            token_url=environment.token_url,
        ),
        notify_tick=_parse_tick(tick_raw),
        timeout=_parse_timeout(timeout_raw),
    )
