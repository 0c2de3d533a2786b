"""
HTTP authentication headers for a resolved Credential.

- token scheme: ``Authorization: Bearer <token>``
- basic scheme: Kimai's ``X-AUTH-USER`` / ``X-AUTH-TOKEN`` header pair
"""
import logging
from typing import Dict

from .types import AuthScheme, Credential, mask_sensitive

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
AUTH_USER_HEADER = "X-AUTH-USER"
AUTH_TOKEN_HEADER = "X-AUTH-TOKEN"


def build_auth_headers(credential: Credential) -> Dict[str, str]:
    """
    Encode a credential into HTTP headers.

    Args:
        credential: Resolved credential

    Returns:
        Dictionary of header name to value
    """
    if credential.scheme is AuthScheme.TOKEN:
        headers = {AUTHORIZATION_HEADER: f"Bearer {credential.secret}"}
    elif credential.scheme is AuthScheme.BASIC:
        headers = {
            AUTH_USER_HEADER: credential.user or "",
            AUTH_TOKEN_HEADER: credential.secret,
        }
    else:
        raise ValueError(f"Unsupported auth scheme: {credential.scheme}")

    logger.debug(
        f"build_auth_headers: scheme={credential.scheme.value} -> "
        f"headers={list(headers.keys())}, secret={mask_sensitive(credential.secret)}"
    )
    return headers
