"""
Secret store implementations.

A SecretStore turns a path taken verbatim from the configuration into a
secret string. Every failure is raised as SecretLookupError.
"""
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Sequence

from .errors import SecretLookupError
from .types import mask_sensitive

logger = logging.getLogger(__name__)


def strip_line_terminator(value: str) -> str:
    """Remove a single trailing ``\\n`` or ``\\r\\n``, nothing else."""
    if value.endswith("\r\n"):
        return value[:-2]
    if value.endswith("\n"):
        return value[:-1]
    return value


class SecretStore(ABC):
    """Secret store interface."""

    @abstractmethod
    def lookup(self, path: str) -> str:
        """
        Look up the secret stored at ``path``.

        Raises:
            SecretLookupError: If the secret cannot be retrieved
        """
        ...


class PassSecretStore(SecretStore):
    """
    Looks secrets up with the ``pass`` password manager.

    Runs ``<command> show <path>`` and returns its standard output with one
    trailing line terminator removed. With ``first_line_only`` only the
    first line of a multi-line entry is returned.
    """

    def __init__(
        self,
        command: str = "pass",
        timeout: Optional[float] = None,
        first_line_only: bool = False,
    ) -> None:
        self.command = command
        self.timeout = timeout
        self.first_line_only = first_line_only

    def _build_args(self, path: str) -> List[str]:
        return [self.command, "show", path]

    def lookup(self, path: str) -> str:
        if "\x00" in path:
            raise SecretLookupError(path, reason="invalid path (contains NUL byte)")

        args = self._build_args(path)
        logger.debug(
            f"PassSecretStore.lookup: Running '{self.command} show' for path='{path}' "
            f"timeout={self.timeout}"
        )

        try:
            result = subprocess.run(
                args,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise SecretLookupError(path, e, reason=f"command '{self.command}' not found") from e
        except subprocess.TimeoutExpired as e:
            raise SecretLookupError(path, e, reason=f"timed out after {self.timeout}s") from e
        except OSError as e:
            raise SecretLookupError(path, e) from e
        except ValueError as e:
            raise SecretLookupError(path, e, reason="invalid path") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            reason = f"'{self.command}' exited with status {result.returncode}"
            if stderr:
                reason = f"{reason}: {stderr}"
            cause = subprocess.CalledProcessError(result.returncode, args)
            raise SecretLookupError(path, cause, reason=reason)

        try:
            output = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SecretLookupError(path, e, reason="output is not valid UTF-8") from e

        if self.first_line_only:
            first, newline, _ = output.partition("\n")
            output = first + newline
        secret = strip_line_terminator(output)

        logger.debug(
            f"PassSecretStore.lookup: Retrieved secret for path='{path}' "
            f"(length={len(secret)}, masked={mask_sensitive(secret)})"
        )
        return secret


class StaticSecretStore(SecretStore):
    """
    In-memory secret store backed by a mapping.

    Each lookup is recorded in ``calls``; a path missing from the mapping
    raises SecretLookupError.
    """

    def __init__(self, secrets: Optional[Mapping[str, str]] = None) -> None:
        self._secrets: Dict[str, str] = dict(secrets or {})
        self.calls: List[str] = []

    @property
    def paths(self) -> Sequence[str]:
        return sorted(self._secrets)

    def set(self, path: str, secret: str) -> None:
        self._secrets[path] = secret

    def lookup(self, path: str) -> str:
        self.calls.append(path)
        if path not in self._secrets:
            logger.debug(f"StaticSecretStore.lookup: path='{path}' not found")
            raise SecretLookupError(path, KeyError(path), reason="path not found")
        return strip_line_terminator(self._secrets[path])
