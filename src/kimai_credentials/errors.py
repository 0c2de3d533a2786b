"""
Exception hierarchy for credential loading and resolution.

Every error message names the failure kind and the offending field or path.
Secret values are never included.
"""
from typing import List, Optional, Sequence


class KimaiCredentialsError(Exception):
    """Base class for all kimai_credentials errors."""
    pass


class ConfigLoadError(KimaiCredentialsError):
    """Raised when the configuration file cannot be located, read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        if path:
            message = f"{message}: {path}"
        super().__init__(message)


class SecretLookupError(KimaiCredentialsError):
    """Raised by a SecretStore when a path cannot be looked up."""

    def __init__(self, path: str, cause: Optional[BaseException] = None, reason: Optional[str] = None) -> None:
        self.path = path
        self.cause = cause
        if reason is None:
            reason = f"{type(cause).__name__}: {cause}" if cause is not None else "lookup failed"
        self.reason = reason
        super().__init__(f"Secret lookup failed for '{path}': {reason}")


class ResolutionError(KimaiCredentialsError):
    """Base class for failures of CredentialResolver.resolve."""

    kind = "ResolutionError"

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        self.fields: List[str] = list(fields)
        super().__init__(f"{self.kind}: {message}")

    @property
    def field(self) -> Optional[str]:
        return self.fields[0] if self.fields else None


class MissingHost(ResolutionError):
    kind = "MissingHost"

    def __init__(self) -> None:
        super().__init__("no server address configured in 'host'", fields=["host"])


class AmbiguousScheme(ResolutionError):
    kind = "AmbiguousScheme"

    def __init__(self, token_fields: Sequence[str], basic_fields: Sequence[str]) -> None:
        self.token_fields = list(token_fields)
        self.basic_fields = list(basic_fields)
        super().__init__(
            f"both token fields {self.token_fields} and user/password fields "
            f"{self.basic_fields} are set; configure exactly one scheme",
            fields=[*self.token_fields, *self.basic_fields],
        )


class MissingUser(ResolutionError):
    kind = "MissingUser"

    def __init__(self) -> None:
        super().__init__("user/password scheme selected but 'user' is empty", fields=["user"])


class MissingSecret(ResolutionError):
    kind = "MissingSecret"

    def __init__(self, secret_field: str) -> None:
        self.secret_field = secret_field
        super().__init__(
            f"neither '{secret_field}' nor 'pass_path' is configured",
            fields=[secret_field, "pass_path"],
        )


class SecretStoreError(ResolutionError):
    """Wraps any secret store failure (or an empty store result) for the 'pass_path' field."""

    kind = "SecretStoreError"

    def __init__(self, path: str, cause: Optional[BaseException] = None, reason: Optional[str] = None) -> None:
        self.path = path
        self.cause = cause
        if reason is None:
            reason = str(cause) if cause is not None else "secret store returned no value"
        super().__init__(f"pass_path '{path}': {reason}", fields=["pass_path"])
