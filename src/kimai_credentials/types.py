"""
Data model for credential resolution.

RawConfig is the unvalidated configuration as read from a file or the
environment. Credential is the validated, immutable result handed to the
API client.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, SecretStr

logger = logging.getLogger(__name__)


def mask_sensitive(value: Optional[str], visible_chars: int = 4) -> str:
    """Mask sensitive values for safe logging."""
    if value is None:
        return "<None>"
    if not isinstance(value, str):
        return "<invalid-type>"
    visible = min(visible_chars, len(value) // 4)
    return value[:visible] + "*" * (len(value) - visible)


def _non_empty(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return value


def _secret_value(value: Optional[SecretStr]) -> Optional[str]:
    if value is None:
        return None
    return _non_empty(value.get_secret_value())


class AuthScheme(str, Enum):
    """Authentication mode carried by a resolved Credential."""
    TOKEN = "token"
    BASIC = "basic"


class RawConfig(BaseModel):
    """Configuration record before validation.

    Two schemes share this shape:
    - token: ``token`` and/or ``pass_path``
    - user/password: ``user`` plus ``password`` and/or ``pass_path``
    """

    host: Optional[str] = None

    # Token scheme
    token: Optional[SecretStr] = None

    # User/password scheme
    user: Optional[str] = None
    password: Optional[SecretStr] = None

    # Secret-store reference, shared by both schemes
    pass_path: Optional[str] = None

    model_config = {"extra": "ignore"}

    @property
    def host_value(self) -> Optional[str]:
        if self.host is None:
            return None
        return _non_empty(self.host.strip())

    @property
    def token_value(self) -> Optional[str]:
        return _secret_value(self.token)

    @property
    def password_value(self) -> Optional[str]:
        return _secret_value(self.password)

    @property
    def user_value(self) -> Optional[str]:
        return _non_empty(self.user)

    @property
    def pass_path_value(self) -> Optional[str]:
        return _non_empty(self.pass_path)

    def to_dict(self) -> Dict[str, Any]:
        """Summary safe for logging: secrets are reported only by presence."""
        return {
            "host": self.host,
            "user": self.user,
            "has_token": self.token_value is not None,
            "has_password": self.password_value is not None,
            "pass_path": self.pass_path,
        }


@dataclass(frozen=True)
class Credential:
    """
    Resolved credential for one API client session.

    Attributes:
        host: Server address, copied from the configuration
        secret: Plaintext token or password (never shown in repr)
        scheme: AuthScheme.TOKEN or AuthScheme.BASIC
        user: Username, set only for AuthScheme.BASIC
    """

    host: str
    secret: str = field(repr=False)
    scheme: AuthScheme = AuthScheme.TOKEN
    user: Optional[str] = None

    def __post_init__(self) -> None:
        logger.debug(
            f"Credential.__post_init__: host={self.host}, scheme={self.scheme.value}, "
            f"has_user={self.user is not None}"
        )

        if not self.host:
            raise ValueError("Credential.host must be a non-empty string")
        if not isinstance(self.secret, str) or not self.secret:
            raise ValueError("Credential.secret must be a non-empty string")
        if self.scheme is AuthScheme.BASIC and not self.user:
            raise ValueError("Credential.user is required for the basic scheme")
        if self.scheme is AuthScheme.TOKEN and self.user is not None:
            raise ValueError("Credential.user must be None for the token scheme")

    def to_dict(self, include_sensitive: bool = False) -> Dict[str, Any]:
        """
        Convert credential to a dictionary for display.

        Args:
            include_sensitive: If True, include the masked secret

        Returns:
            Dictionary representation of the credential
        """
        result: Dict[str, Any] = {
            "host": self.host,
            "scheme": self.scheme.value,
            "user": self.user,
            "has_secret": bool(self.secret),
        }
        if include_sensitive:
            result["secret_masked"] = mask_sensitive(self.secret)
        return result
