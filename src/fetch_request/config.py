"""
Configuration models for the transport collaborator used by RequestBuilder.do().
"""
import logging
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Constants
DEFAULT_SCHEME = "http"
DEFAULT_METHOD = "GET"
DEFAULT_TIMEOUT_CONNECT = 5.0
DEFAULT_TIMEOUT_READ = 30.0
DEFAULT_TIMEOUT_WRITE = 10.0


class TimeoutConfig(BaseModel):
    """Per-phase timeouts, in seconds, for the client that sends built requests."""
    connect: float = DEFAULT_TIMEOUT_CONNECT
    read: float = DEFAULT_TIMEOUT_READ
    write: float = DEFAULT_TIMEOUT_WRITE
    pool: Optional[float] = None


class ClientConfig(BaseModel):
    """Settings for an httpx.Client handed to RequestBuilder.do()."""
    timeout: Optional[Union[float, TimeoutConfig]] = None
    verify_ssl: bool = True
    follow_redirects: bool = False
    trust_env: bool = True


def normalize_timeout(timeout: Optional[Union[float, TimeoutConfig]]) -> Optional[httpx.Timeout]:
    """Turn a configured timeout into an httpx.Timeout (None keeps httpx defaults)."""
    if timeout is None:
        return None
    if isinstance(timeout, (int, float)):
        return httpx.Timeout(float(timeout))
    return httpx.Timeout(
        connect=timeout.connect,
        read=timeout.read,
        write=timeout.write,
        pool=timeout.pool,
    )


def get_client_kwargs(config: ClientConfig) -> Dict[str, Any]:
    """Build kwargs for httpx.Client."""
    kwargs: Dict[str, Any] = {
        "verify": config.verify_ssl,
        "follow_redirects": config.follow_redirects,
        "trust_env": config.trust_env,
    }
    timeout = normalize_timeout(config.timeout)
    if timeout is not None:
        kwargs["timeout"] = timeout
    return kwargs


def create_client(config: Optional[ClientConfig] = None) -> httpx.Client:
    """Create an httpx.Client; the caller owns and closes it."""
    kwargs = get_client_kwargs(config or ClientConfig())
    logger.debug(f"Creating httpx.Client with config: {kwargs}")
    return httpx.Client(**kwargs)
