"""
Factory for an httpx client authenticated with a resolved Credential.
"""
import logging
from typing import Dict, Optional

import httpx

from .auth_headers import build_auth_headers
from .types import Credential

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


def normalize_base_url(host: str) -> str:
    """Prepend ``https://`` when the host has no scheme and drop trailing slashes."""
    host = host.strip()
    if "://" not in host:
        host = f"https://{host}"
    return host.rstrip("/")


def create_client(
    credential: Credential,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create an httpx.Client for the credential's host.

    Args:
        credential: Resolved credential
        timeout: Request timeout in seconds
        headers: Extra default headers; auth headers take precedence
        transport: Optional transport (e.g. httpx.MockTransport in tests)

    Returns:
        Configured httpx.Client; the caller owns and closes it
    """
    base_url = normalize_base_url(credential.host)
    merged_headers = {**(headers or {}), **build_auth_headers(credential)}

    logger.debug(
        f"create_client: base_url={base_url}, timeout={timeout}, "
        f"header_names={list(merged_headers.keys())}"
    )

    kwargs = {
        "base_url": base_url,
        "headers": merged_headers,
        "timeout": timeout,
    }
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.Client(**kwargs)
