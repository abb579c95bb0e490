"""Exception hierarchy for the GNSS serial feed.

Only ``SerialPortDevice.open`` and ``SerialConfig.from_env`` let these
escape to callers. Everything raised inside the acquisition loop is
recovered there and reported through logging.
"""

__all__ = [
    "ConfigError",
    "ConnectionOpenError",
    "ConnectionReadError",
    "DecodeError",
    "DeviceStateError",
    "GPSFeedError",
]


class GPSFeedError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(GPSFeedError):
    """Configuration is missing or invalid."""


class DeviceStateError(GPSFeedError):
    """An operation was requested in a state that does not allow it."""


class ConnectionOpenError(GPSFeedError):
    """The serial port could not be opened.

    Attributes:
        port: Port identifier that failed to open.
        reason: Human-readable cause reported by the serial driver.
    """

    def __init__(self, port: str, reason: str) -> None:
        super().__init__(f"Cannot open serial port {port!r}: {reason}")
        self.port = port
        self.reason = reason


class ConnectionReadError(GPSFeedError):
    """A read failed while the serial port was still open."""

    def __init__(self, port: str, reason: str) -> None:
        super().__init__(f"Read from serial port {port!r} failed: {reason}")
        self.port = port
        self.reason = reason


class DecodeError(GPSFeedError, ValueError):
    """A line could not be decoded into a sentence.

    Attributes:
        line: The offending text, exactly as it was read.
        reason: Human-readable cause.
    """

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason
