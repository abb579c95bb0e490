"""Serial feed configuration sourced from environment variables."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from gpsfeed.errors import ConfigError

__all__ = ["DEFAULT_BAUDRATE", "DEFAULT_MAX_READ_FAILURES", "SerialConfig"]

# --- defaults -----------------------------------------------------------------

DEFAULT_BAUDRATE = 9600
DEFAULT_MAX_READ_FAILURES = 3

# --- environment variables ----------------------------------------------------

_ENV_PORT = "GPS_SERIAL_PORT"
_ENV_BAUDRATE = "GPS_BAUD_RATE"
_ENV_MAX_READ_FAILURES = "GPS_MAX_READ_FAILURES"


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}.")
    return value


@dataclass(frozen=True)
class SerialConfig:
    """Connection settings for one GNSS receiver.

    Attributes:
        port: Serial port identifier (e.g. ``/dev/ttyUSB0`` or ``COM3``).
        baudrate: Line speed in baud. NMEA 0183 receivers default to 9600.
        max_read_failures: Consecutive failed reads tolerated on an open
            port before the device is considered gone.
    """

    port: str
    baudrate: int = DEFAULT_BAUDRATE
    max_read_failures: int = DEFAULT_MAX_READ_FAILURES

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SerialConfig":
        """Build a configuration from ``GPS_SERIAL_PORT`` and friends.

        Args:
            environ: Mapping to read from (default: ``os.environ``).

        Raises:
            ConfigError: If the port is unset or a numeric value is invalid.
        """
        if environ is None:
            environ = os.environ
        port = environ.get(_ENV_PORT, "").strip()
        if not port:
            raise ConfigError(f"{_ENV_PORT} is not set.")
        return cls(
            port=port,
            baudrate=_positive_int(environ, _ENV_BAUDRATE, DEFAULT_BAUDRATE),
            max_read_failures=_positive_int(
                environ, _ENV_MAX_READ_FAILURES, DEFAULT_MAX_READ_FAILURES
            ),
        )
