"""Utility functions for application configuration management.

Every setting has a built-in default, can be overridden by an environment
variable, and can be overridden again by a command-line flag:

    flag                  env                     default
    --api-address         GURL_API_ADDRESS        :7070
    --redirect-address    GURL_REDIRECT_ADDRESS   :8090
    --database            GURL_DATABASE           links.db
    --write-timeout       GURL_WRITE_TIMEOUT      1.0
    --log-level           LOG_LEVEL               INFO

Addresses are written as `host:port`. An empty host binds all interfaces.

Example:
    >>> from gurl.utils.config import load_config
    >>> config = load_config(['--api-address', '127.0.0.1:7071'])
    >>> config.api_address
    Address(host='127.0.0.1', port=7071)
    >>> config.redirect_address
    Address(host='0.0.0.0', port=8090)
"""

import os
import argparse
from dataclasses import dataclass
from collections.abc import Sequence

from gurl.constants import ENV, Defaults
from gurl.exceptions import BadConfigurationError


ALL_INTERFACES = '0.0.0.0'


@dataclass(frozen=True)
class Address:
    host: str
    port: int

    def __str__(self) -> str:
        return f'{self.host}:{self.port}'


# fmt: off
@dataclass(frozen=True)
class Config:
    api_address: Address       # Management surface bind address
    redirect_address: Address  # Redirect surface bind address
    database: str              # Store file path
    write_timeout: float       # Seconds to wait for the store-wide writer lock
    log_level: str
# fmt: on


def parse_address(value: str) -> Address:
    """Parse a `host:port` bind address.

    Args:
        value (str):
            Address such as ':7070', '127.0.0.1:7070' or '[::1]:7070'.

    Returns:
        Address: host (all interfaces when empty) and port.

    Raises:
        BadConfigurationError:
            If the address has no port or the port is not in 1..65535.

    Example:
        >>> parse_address(':7070')
        Address(host='0.0.0.0', port=7070)
    """
    host, sep, port = value.rpartition(':')
    if not sep or not port.isdigit():
        raise BadConfigurationError(f"Bad address '{value}' (expected 'host:port').")
    if not 0 < int(port) < 65536:
        raise BadConfigurationError(f"Bad port in address '{value}'.")

    host = host.strip('[]') or ALL_INTERFACES
    return Address(host=host, port=int(port))


def parse_timeout(value: str | float) -> float:
    try:
        timeout = float(value)
    except ValueError as e:
        raise BadConfigurationError(f"Bad write timeout '{value}' (expected seconds).") from e
    if timeout <= 0:
        raise BadConfigurationError(f'Write timeout must be positive (given value: {timeout}).')
    return timeout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='gurl', description='Hash-addressed URL shortener.')
    # fmt: off
    parser.add_argument('--api-address', default=os.getenv(ENV.App.API_ADDRESS, Defaults.API_ADDRESS),
                        help='Control server bind address')
    parser.add_argument('--redirect-address', default=os.getenv(ENV.App.REDIRECT_ADDRESS, Defaults.REDIRECT_ADDRESS),
                        help='Redirect server bind address')
    parser.add_argument('--database', default=os.getenv(ENV.App.DATABASE, Defaults.DATABASE),
                        help='Database file path')
    parser.add_argument('--write-timeout', default=os.getenv(ENV.App.WRITE_TIMEOUT, str(Defaults.WRITE_TIMEOUT)),
                        help='Seconds to wait for the database writer lock')
    parser.add_argument('--log-level', default=os.getenv(ENV.App.LOG_LEVEL, Defaults.LOG_LEVEL),
                        help='Logging level (DEBUG, INFO, WARNING, ERROR)')
    # fmt: on
    return parser


def load_config(argv: Sequence[str] | None = None) -> Config:
    """Load configuration from defaults, environment and command-line flags.

    Args:
        argv (Sequence[str] | None):
            Command-line arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        Config: validated application configuration.

    Raises:
        BadConfigurationError:
            If an address or the write timeout is malformed.
    """
    args = build_parser().parse_args(argv)

    if not args.database:
        raise BadConfigurationError('Database file path must not be empty.')

    return Config(
        api_address=parse_address(args.api_address),
        redirect_address=parse_address(args.redirect_address),
        database=args.database,
        write_timeout=parse_timeout(args.write_timeout),
        log_level=args.log_level.upper(),
    )
