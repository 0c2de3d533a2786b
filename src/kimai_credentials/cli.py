"""
kimai-credentials

Loads the Kimai client configuration, resolves its credential and prints a
masked summary.

Usage:
    kimai-credentials [--config_path PATH] [--from-env] [--env-file PATH]
                      [--timeout SECONDS] [--show-secret] [-v]
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config_loader import load_raw_config, raw_config_from_env
from .errors import KimaiCredentialsError
from .resolver import CredentialResolver
from .secret_store import PassSecretStore
from .types import Credential, mask_sensitive


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kimai-credentials",
        description="Resolve and display the Kimai API credential",
    )
    parser.add_argument(
        "--config_path",
        help="Path to a config file (default: $KIMAI_CONFIG or XDG config dirs)",
    )
    parser.add_argument(
        "--from-env",
        action="store_true",
        help="Read KIMAI_* environment variables instead of a config file",
    )
    parser.add_argument(
        "--env-file",
        help="Optional .env file read together with --from-env",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for the pass lookup",
    )
    parser.add_argument(
        "--show-secret",
        action="store_true",
        help="Print the secret unmasked",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def render_credential(credential: Credential, show_secret: bool = False) -> Table:
    table = Table(title="Kimai credential", show_header=True)
    table.add_column("Field")
    table.add_column("Value")
    secret = credential.secret if show_secret else mask_sensitive(credential.secret)
    for name, value in (
        ("host", credential.host),
        ("scheme", credential.scheme.value),
        ("user", credential.user or ""),
        ("secret", secret),
    ):
        table.add_row(name, Text(value))
    return table


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    console = Console()
    err_console = Console(stderr=True)

    try:
        if args.from_env:
            raw_config = raw_config_from_env(env_file=args.env_file)
        else:
            raw_config = load_raw_config(args.config_path)
        credential = CredentialResolver().resolve(raw_config, PassSecretStore(timeout=args.timeout))
    except KimaiCredentialsError as e:
        err_console.print(Text.assemble(("[ERROR] ", "red"), str(e)))
        return 1

    console.print(render_credential(credential, show_secret=args.show_secret))
    return 0


if __name__ == "__main__":
    sys.exit(main())
