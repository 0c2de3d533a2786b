"""
Configuration loading.

Builds a RawConfig from a TOML file or from environment variables. File
location resolution order:

1. Explicit path (``--config_path``)
2. ``KIMAI_CONFIG`` environment variable
3. ``$XDG_CONFIG_HOME/kimai/config.toml`` (default ``~/.config``)
4. ``<dir>/kimai/config.toml`` for each entry of ``$XDG_CONFIG_DIRS`` (default ``/etc/xdg``)
"""
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from dotenv import dotenv_values
from pydantic import ValidationError

from .errors import ConfigLoadError
from .types import RawConfig

logger = logging.getLogger(__name__)

APP_NAME = "kimai"
CONFIG_FILE_NAME = "config.toml"
CONFIG_PATH_ENV = "KIMAI_CONFIG"
ENV_PREFIX = "KIMAI_"

# RawConfig field -> environment variable suffix
ENV_FIELDS = {
    "host": "HOST",
    "token": "TOKEN",
    "user": "USER",
    "password": "PASSWORD",
    "pass_path": "PASS_PATH",
}


def _xdg_config_dirs(environ: Mapping[str, str]) -> List[Path]:
    """Candidate config directories in XDG priority order."""
    config_home = environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    config_dirs = environ.get("XDG_CONFIG_DIRS") or "/etc/xdg"

    dirs = [Path(config_home)]
    dirs.extend(Path(d) for d in config_dirs.split(os.pathsep) if d)
    return dirs


def find_config_file(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Locate the configuration file.

    Args:
        path: Explicit file path; takes priority over everything else
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Path to an existing configuration file

    Raises:
        ConfigLoadError: If an explicit path does not exist or no file is found
    """
    environ = os.environ if environ is None else environ

    explicit = path or environ.get(CONFIG_PATH_ENV)
    if explicit:
        candidate = Path(explicit).expanduser()
        source = "argument" if path else CONFIG_PATH_ENV
        logger.debug(f"find_config_file: Using config path from {source}: {candidate}")
        if not candidate.is_file():
            raise ConfigLoadError("config file not found", str(candidate))
        return candidate

    searched = []
    for config_dir in _xdg_config_dirs(environ):
        candidate = config_dir / APP_NAME / CONFIG_FILE_NAME
        searched.append(str(candidate))
        if candidate.is_file():
            logger.info(f"find_config_file: Found config file: {candidate}")
            return candidate
        logger.debug(f"find_config_file: Not found: {candidate}")

    raise ConfigLoadError("config file not found", ", ".join(searched))


def parse_raw_config(data: Mapping[str, Any], source: Optional[str] = None) -> RawConfig:
    """
    Validate a parsed mapping into a RawConfig.

    Raises:
        ConfigLoadError: If a field has the wrong type
    """
    try:
        return RawConfig.model_validate(dict(data))
    except ValidationError as e:
        # Only field locations are reported; pydantic's message would echo input values.
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigLoadError(f"invalid configuration fields {fields}", source) from e


def load_raw_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RawConfig:
    """
    Locate, read and parse the TOML configuration file.

    Args:
        path: Explicit file path (see module docstring for the fallback order)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        RawConfig read from the file

    Raises:
        ConfigLoadError: If the file is missing, unreadable or invalid
    """
    config_path = find_config_file(path, environ)

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigLoadError(f"invalid TOML ({e})", str(config_path)) from e
    except OSError as e:
        raise ConfigLoadError(f"cannot read config file ({e.strerror})", str(config_path)) from e

    logger.debug(f"load_raw_config: Loaded keys {sorted(data.keys())} from {config_path}")
    return parse_raw_config(data, str(config_path))


def raw_config_from_env(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Union[str, Path]] = None,
    prefix: str = ENV_PREFIX,
) -> RawConfig:
    """
    Build a RawConfig from ``KIMAI_*`` environment variables.

    Args:
        environ: Environment mapping (defaults to os.environ)
        env_file: Optional .env file; process environment wins over its values
        prefix: Variable name prefix

    Returns:
        RawConfig built from the environment

    Raises:
        ConfigLoadError: If ``env_file`` does not exist
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Optional[str]] = {}

    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.is_file():
            raise ConfigLoadError("env file not found", str(env_path))
        logger.info(f"raw_config_from_env: Loading env file: {env_path}")
        values.update(dotenv_values(env_path))

    values.update(environ)

    data: Dict[str, str] = {}
    for field_name, suffix in ENV_FIELDS.items():
        value = values.get(f"{prefix}{suffix}")
        if value is not None:
            data[field_name] = value

    logger.debug(f"raw_config_from_env: Found fields {sorted(data.keys())} with prefix '{prefix}'")
    return parse_raw_config(data, f"environment ({prefix}*)")
