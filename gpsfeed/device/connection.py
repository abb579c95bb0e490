"""SerialConnection: line-oriented access to a GNSS receiver's serial port.

Reads block without a timeout. ``close()`` may be called from any thread:
it first cancels a pending read (pyserial ``cancel_read``) and then closes
the port, so a reader blocked in ``readline()`` wakes up and sees
``EOFError`` instead of hanging until the receiver sends another byte.
"""

import contextlib
import logging
import threading

import serial

from gpsfeed.config import DEFAULT_BAUDRATE
from gpsfeed.errors import ConnectionOpenError, ConnectionReadError, DeviceStateError

__all__ = ["SerialConnection"]

logger = logging.getLogger(__name__)

_ENCODING = "ascii"


class SerialConnection:
    """Owns one pyserial port for its whole lifetime.

    The connection is created closed, opened once, and closed exactly once.
    A failed ``open()`` leaves it unopened so the caller may try again;
    ``close()`` is idempotent and safe before ``open()``.

    Args:
        port: Serial port identifier (e.g. ``"/dev/ttyUSB0"``).
        baudrate: Line speed in baud (default: ``9600``).
    """

    def __init__(self, port: str, baudrate: int = DEFAULT_BAUDRATE) -> None:
        """Store port settings; the port itself is opened in ``open()``."""
        self.port = port
        self.baudrate = baudrate
        self._serial: serial.Serial | None = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        """True between a successful ``open()`` and the first ``close()``."""
        with self._lock:
            return self._serial is not None and not self._closed

    def open(self) -> None:
        """Open the port.

        Raises:
            DeviceStateError: If the connection is already open or was closed.
            ConnectionOpenError: If the driver refuses to open the port
                (device absent, permission denied, port busy).
        """
        with self._lock:
            if self._closed:
                raise DeviceStateError(f"Connection to {self.port!r} is closed.")
            if self._serial is not None:
                raise DeviceStateError(f"Connection to {self.port!r} is already open.")
            handle = serial.Serial()
            handle.port = self.port
            handle.baudrate = self.baudrate
            handle.timeout = None
            try:
                handle.open()
            except (serial.SerialException, OSError, ValueError) as e:
                raise ConnectionOpenError(self.port, str(e)) from e
            self._serial = handle
        logger.debug("Serial port %s open at %d baud", self.port, self.baudrate)

    def close(self) -> None:
        """Cancel any pending read and close the port. Safe to call repeatedly."""
        with self._lock:
            if self._closed or self._serial is None:
                return
            self._closed = True
            handle = self._serial
        cancel_read = getattr(handle, "cancel_read", None)
        if cancel_read is not None:
            with contextlib.suppress(serial.SerialException, OSError):
                cancel_read()
        with contextlib.suppress(serial.SerialException, OSError):
            handle.close()
        logger.debug("Serial port %s closed", self.port)

    def readline(self) -> str | None:
        """Block until one line arrives and return it with the terminator stripped.

        Returns:
            The decoded line, or ``None`` if the read returned without data
            while the port is still open (nothing to process, try again).

        Raises:
            EOFError: If the connection is closed, or was closed while the
                read was in progress.
            ConnectionReadError: If the read failed on a port that is still
                open.
        """
        handle = self._serial
        if handle is None or self._closed:
            raise EOFError(f"Connection to {self.port!r} is not open.")
        try:
            raw: bytes = handle.readline()
        # TypeError: pyserial's posix reader finds its fd torn down by close()
        except (serial.SerialException, OSError, TypeError) as e:
            if self._closed:
                raise EOFError(f"Connection to {self.port!r} closed.") from e
            raise ConnectionReadError(self.port, str(e)) from e
        if self._closed:
            raise EOFError(f"Connection to {self.port!r} closed.")
        if not raw:
            return None
        return raw.decode(_ENCODING, errors="replace").rstrip("\r\n")
