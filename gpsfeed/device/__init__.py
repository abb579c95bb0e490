"""Serial device access: the connection and the acquisition loop."""

from gpsfeed.device.adapter import DeviceState, SentenceHandler, SerialPortDevice
from gpsfeed.device.connection import SerialConnection

__all__ = ["DeviceState", "SentenceHandler", "SerialConnection", "SerialPortDevice"]
