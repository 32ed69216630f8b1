"""
Configuration management for DO DDNS Updater.

This module handles the ".env" record settings, which are re-read at the
start of every update cycle, and the process options given on the command
line. The ".env" file is line oriented:

    digital_ocean_token=<token>
    domain_name=example.com
    sub_domain_name=www
    record_type=A
    ttl=3600

Blank lines and lines starting with "#" are skipped, unknown keys are
ignored and missing keys keep their zero values.
"""

from __future__ import annotations

import argparse
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from do_ddns.exceptions import ConfigError
from do_ddns.models import RecordType

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any, Final


logger = logging.getLogger(__name__)

DEFAULT_ENV_PATH: Final[Path] = Path(".env")

PLACEHOLDER_TOKEN: Final[str] = "YOUR_DIGITAL_OCEAN_TOKEN"

# Contents written on first run
DEFAULT_ENV_CONTENT: Final[str] = (
    f"digital_ocean_token={PLACEHOLDER_TOKEN}\n"
    "domain_name=example.com\n"
    "sub_domain_name=www\n"
    "record_type=A\n"
    "ttl=3600\n"
)

# File key -> Config field
ENV_KEYS: Final[dict[str, str]] = {
    "digital_ocean_token": "api_token",
    "domain_name": "domain",
    "sub_domain_name": "subdomain",
    "record_type": "record_type",
    "ttl": "ttl",
    "skip_unchanged": "skip_unchanged",
}

_INT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"", "0", "false", "no", "off"})


class Config(BaseModel):
    """
    Record settings read from the ".env" file.

    Attributes
    ----------
    api_token : str
        DigitalOcean API token.
    domain : str
        The managed domain (e.g., "example.com").
    subdomain : str
        The record name relative to the domain (e.g., "www").
    record_type : str
        The record type (e.g., "A").
    ttl : int
        Time to live in seconds.
    skip_unchanged : bool
        Skip the update request when the record already holds the value.
    """

    model_config = ConfigDict(frozen=True)

    api_token: str = ""
    domain: str = ""
    subdomain: str = ""
    record_type: str = ""
    ttl: int = 0
    skip_unchanged: bool = False

    @property
    def has_placeholder_token(self) -> bool:
        """Check whether the token is still the first-run placeholder."""
        return self.api_token == PLACEHOLDER_TOKEN

    @property
    def has_known_record_type(self) -> bool:
        """Check whether the record type is one of the common DNS record types."""
        return self.record_type in {t.value for t in RecordType}


def _parse_int(key: str, value: str) -> int:
    """
    Parse the leading decimal integer of a value, falling back to zero.

    Parameters
    ----------
    key : str
        The file key (for the diagnostic).
    value : str
        The raw value.

    Returns
    -------
    int
        The leading integer of the value, or 0 if there is none.
    """
    match = _INT_PATTERN.match(value)
    if match is not None:
        try:
            number = int(match.group())
        except ValueError:
            # Longer than the interpreter's integer string conversion limit
            logger.warning('Integer too long for "%s". Using 0.', key)
            return 0
        if match.end() != len(value):
            logger.warning('Ignoring trailing characters in "%s": "%s".', key, value)
        return number
    logger.warning('Invalid integer for "%s": "%s". Using 0.', key, value)
    return 0


def _parse_bool(key: str, value: str) -> bool:
    """
    Parse a boolean value, falling back to False.

    Parameters
    ----------
    key : str
        The file key (for the diagnostic).
    value : str
        The raw value.

    Returns
    -------
    bool
        The parsed value.
    """
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered not in _FALSE_VALUES:
        logger.warning('Invalid boolean for "%s": "%s". Using false.', key, value)
    return False


def parse_config_lines(lines: Iterable[str]) -> Config:
    """
    Build a Config from "key=value" lines.

    Parameters
    ----------
    lines : Iterable[str]
        Lines of the configuration file.

    Returns
    -------
    Config
        Parsed configuration. Later lines override earlier ones.
    """
    fields: dict[str, Any] = {}

    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            logger.debug('Skipping malformed configuration line: "%s".', line)
            continue

        key = key.strip()
        value = value.strip()
        field = ENV_KEYS.get(key)
        if field is None:
            continue

        if field == "ttl":
            fields[field] = _parse_int(key, value)
        elif field == "skip_unchanged":
            fields[field] = _parse_bool(key, value)
        else:
            fields[field] = value

    return Config(**fields)


def read_config_file(config_path: Path) -> list[str]:
    """
    Read the lines of the configuration file.

    Parameters
    ----------
    config_path : Path
        Path to the configuration file.

    Returns
    -------
    list[str]
        Lines of the file.

    Raises
    ------
    ConfigError
        If the file cannot be read.
    """
    try:
        with config_path.open(encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError as e:
        msg = f'Failed to read configuration file "{config_path}": {e}'
        raise ConfigError(msg) from e


def load_config(config_path: Path = DEFAULT_ENV_PATH) -> Config:
    """
    Load the record settings.

    A file that cannot be read yields an all-empty configuration, which
    the update loop treats as a missing token.

    Parameters
    ----------
    config_path : Path, optional
        Path to the configuration file.

    Returns
    -------
    Config
        Loaded configuration.
    """
    try:
        lines = read_config_file(config_path)
    except ConfigError as e:
        logger.error("%s", e)  # noqa: TRY400
        return Config()
    return parse_config_lines(lines)


def ensure_config(config_path: Path = DEFAULT_ENV_PATH) -> bool:
    """
    Create the configuration file with placeholder values if it is absent.

    Parameters
    ----------
    config_path : Path, optional
        Path to the configuration file.

    Returns
    -------
    bool
        True if the file was created.
    """
    if config_path.exists():
        return False

    try:
        with config_path.open("x", encoding="utf-8") as f:
            f.write(DEFAULT_ENV_CONTENT)
    except FileExistsError:
        return False
    except OSError as e:
        logger.error('Failed to create configuration file "%s": %s', config_path, e)  # noqa: TRY400
        return False

    logger.info('Configuration file "%s" created with placeholder values.', config_path)
    return True


# Process options (command line)


class LoggingConfig(BaseModel):
    """
    Logging configuration.

    Attributes
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    file_enabled : bool
        Whether to log to file.
    file_path : str
        Path to the log file.
    """

    level: str = "INFO"
    file_enabled: bool = False
    file_path: str = "do-ddns.log"

    @property
    def file_path_as_path(self) -> Path:
        """
        Get the log file path as a Path object.

        Returns
        -------
        Path
            The log file path.
        """
        return Path(self.file_path)


class AgentOptions(BaseModel):
    """
    Process options.

    Attributes
    ----------
    env_file : Path
        Path to the ".env" configuration file.
    once : bool
        Run a single update cycle and exit.
    logging : LoggingConfig
        Logging configuration.
    """

    env_file: Path = DEFAULT_ENV_PATH
    once: bool = False
    logging: LoggingConfig = LoggingConfig()


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Parameters
    ----------
    args : list[str] | None, optional
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="do-ddns",
        description="DO DDNS Updater - keep a DigitalOcean DNS record on the current public IP",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        dest="env_file",
        default=None,
        help="Path to the configuration file (default: .env)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        default=False,
        help="Run a single update cycle and exit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        dest="log_file",
        default=None,
        help="Also write log lines to this file",
    )

    return parser.parse_args(args)


def options_from_args(args: argparse.Namespace) -> AgentOptions:
    """
    Convert parsed arguments to AgentOptions.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments.

    Returns
    -------
    AgentOptions
        Process options.
    """
    data: dict[str, Any] = {"once": args.once}
    logging_data: dict[str, Any] = {}

    if args.env_file is not None:
        data["env_file"] = args.env_file.expanduser()
    if args.log_level is not None:
        logging_data["level"] = args.log_level
    if args.log_file is not None:
        logging_data["file_enabled"] = True
        logging_data["file_path"] = str(args.log_file.expanduser())

    data["logging"] = LoggingConfig(**logging_data)
    return AgentOptions.model_validate(data)
