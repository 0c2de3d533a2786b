"""
kimai_credentials - credential resolution for the Kimai API client.

    from kimai_credentials import load_raw_config, resolve_credential, create_client

    raw = load_raw_config()               # $KIMAI_CONFIG or XDG config.toml
    credential = resolve_credential(raw)  # inline secret, else `pass show <pass_path>`
    with create_client(credential) as client:
        client.get("/api/customers")
"""
from .types import AuthScheme, Credential, RawConfig, mask_sensitive
from .errors import (
    KimaiCredentialsError,
    ConfigLoadError,
    SecretLookupError,
    ResolutionError,
    MissingHost,
    AmbiguousScheme,
    MissingUser,
    MissingSecret,
    SecretStoreError,
)
from .secret_store import SecretStore, PassSecretStore, StaticSecretStore, strip_line_terminator
from .resolver import CredentialResolver, resolve_credential
from .config_loader import find_config_file, load_raw_config, parse_raw_config, raw_config_from_env
from .auth_headers import build_auth_headers
from .client import create_client

__all__ = [
    "AuthScheme",
    "Credential",
    "RawConfig",
    "mask_sensitive",
    "KimaiCredentialsError",
    "ConfigLoadError",
    "SecretLookupError",
    "ResolutionError",
    "MissingHost",
    "AmbiguousScheme",
    "MissingUser",
    "MissingSecret",
    "SecretStoreError",
    "SecretStore",
    "PassSecretStore",
    "StaticSecretStore",
    "strip_line_terminator",
    "CredentialResolver",
    "resolve_credential",
    "find_config_file",
    "load_raw_config",
    "parse_raw_config",
    "raw_config_from_env",
    "build_auth_headers",
    "create_client",
]
