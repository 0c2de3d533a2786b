"""
Credential resolution.

Turns a RawConfig into a Credential, consulting a SecretStore only when no
inline secret is configured.

Resolution order for the secret:
1. Inline ``token`` / ``password`` (used verbatim, ``pass_path`` ignored)
2. ``pass_path`` looked up in the SecretStore
3. MissingSecret
"""
import logging
from typing import Optional

from .errors import (
    AmbiguousScheme,
    MissingHost,
    MissingSecret,
    MissingUser,
    SecretLookupError,
    SecretStoreError,
)
from .secret_store import PassSecretStore, SecretStore
from .types import AuthScheme, Credential, RawConfig, mask_sensitive

logger = logging.getLogger(__name__)


class CredentialResolver:
    """
    Validates a RawConfig and produces a Credential.

    The resolver keeps no state between calls: every resolve() starts from
    scratch and may invoke the store again.
    """

    def _detect_scheme(self, config: RawConfig) -> AuthScheme:
        token_fields = ["token"] if config.token_value is not None else []
        basic_fields = [
            name for name, value in (("user", config.user_value), ("password", config.password_value))
            if value is not None
        ]

        logger.debug(
            f"CredentialResolver._detect_scheme: token_fields={token_fields}, "
            f"basic_fields={basic_fields}"
        )

        if token_fields and basic_fields:
            logger.error(
                f"CredentialResolver._detect_scheme: Conflicting schemes "
                f"token_fields={token_fields}, basic_fields={basic_fields}"
            )
            raise AmbiguousScheme(token_fields, basic_fields)

        if basic_fields:
            return AuthScheme.BASIC
        return AuthScheme.TOKEN

    def _resolve_secret(
        self,
        inline: Optional[str],
        secret_field: str,
        pass_path: Optional[str],
        store: SecretStore,
    ) -> str:
        if inline is not None:
            if pass_path is not None:
                logger.info(
                    f"CredentialResolver._resolve_secret: Inline '{secret_field}' is set, "
                    f"ignoring pass_path='{pass_path}'"
                )
            logger.debug(
                f"CredentialResolver._resolve_secret: Using inline '{secret_field}' "
                f"(masked={mask_sensitive(inline)})"
            )
            return inline

        if pass_path is None:
            logger.debug(
                f"CredentialResolver._resolve_secret: No '{secret_field}' and no pass_path configured"
            )
            raise MissingSecret(secret_field)

        logger.debug(f"CredentialResolver._resolve_secret: Looking up pass_path='{pass_path}'")
        try:
            secret = store.lookup(pass_path)
        except SecretLookupError as e:
            logger.error(f"CredentialResolver._resolve_secret: Secret store lookup failed: {e}")
            raise SecretStoreError(pass_path, e) from e
        except Exception as e:
            logger.error(
                f"CredentialResolver._resolve_secret: Secret store raised "
                f"{type(e).__name__} for pass_path='{pass_path}'"
            )
            raise SecretStoreError(pass_path, e, reason=f"{type(e).__name__}: {e}") from e

        if not secret:
            logger.error(
                f"CredentialResolver._resolve_secret: Secret store returned an empty value "
                f"for pass_path='{pass_path}'"
            )
            raise SecretStoreError(pass_path)

        logger.debug(
            f"CredentialResolver._resolve_secret: Resolved '{secret_field}' from pass_path "
            f"(length={len(secret)}, masked={mask_sensitive(secret)})"
        )
        return secret

    def resolve(self, config: RawConfig, store: SecretStore) -> Credential:
        """
        Resolve a configuration into a Credential.

        Args:
            config: Parsed, unvalidated configuration
            store: Secret store used when only ``pass_path`` is configured

        Returns:
            The resolved Credential

        Raises:
            MissingHost: ``host`` is empty or absent
            AmbiguousScheme: token and user/password fields are both set
            MissingUser: ``password`` is set without ``user``
            MissingSecret: neither an inline secret nor ``pass_path`` is set
            SecretStoreError: the store lookup failed or returned nothing
        """
        logger.debug(f"CredentialResolver.resolve: Resolving config={config.to_dict()}")

        if config.host_value is None:
            logger.error("CredentialResolver.resolve: No host configured")
            raise MissingHost()

        scheme = self._detect_scheme(config)

        if scheme is AuthScheme.BASIC:
            user = config.user_value
            if user is None:
                logger.error("CredentialResolver.resolve: Basic scheme without user")
                raise MissingUser()
            secret = self._resolve_secret(config.password_value, "password", config.pass_path_value, store)
        else:
            user = None
            secret = self._resolve_secret(config.token_value, "token", config.pass_path_value, store)

        credential = Credential(host=config.host, secret=secret, scheme=scheme, user=user)
        logger.info(
            f"CredentialResolver.resolve: Resolved credential host={config.host}, "
            f"scheme={scheme.value}, user={user}"
        )
        return credential


def resolve_credential(config: RawConfig, store: Optional[SecretStore] = None) -> Credential:
    """Resolve ``config`` with ``store``, defaulting to the ``pass`` command."""
    if store is None:
        store = PassSecretStore()
    return CredentialResolver().resolve(config, store)
