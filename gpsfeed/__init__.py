"""Serial GNSS receiver feed: NMEA acquisition, decoding and fan-out."""

from gpsfeed.config import SerialConfig
from gpsfeed.device import DeviceState, SerialConnection, SerialPortDevice
from gpsfeed.errors import (
    ConfigError,
    ConnectionOpenError,
    ConnectionReadError,
    DecodeError,
    DeviceStateError,
    GPSFeedError,
)
from gpsfeed.nmea import PositionFix, Sentence, decode
from gpsfeed.subscribers import PositionPrinter, format_position

__all__ = [
    "ConfigError",
    "ConnectionOpenError",
    "ConnectionReadError",
    "DecodeError",
    "DeviceState",
    "DeviceStateError",
    "GPSFeedError",
    "PositionFix",
    "PositionPrinter",
    "Sentence",
    "SerialConfig",
    "SerialConnection",
    "SerialPortDevice",
    "decode",
    "format_position",
]
