"""Process entry point: print position fixes from the configured receiver.

Environment:
    GPS_SERIAL_PORT: Serial port of the receiver (required).
    GPS_BAUD_RATE: Line speed (default: 9600).
    GPS_MAX_READ_FAILURES: Consecutive read errors before giving up (default: 3).
    GPS_LOG_LEVEL: Diagnostic verbosity on stderr (default: INFO).

Runs until SIGINT/SIGTERM or until the receiver disappears.
"""

import logging
import os
import signal
import sys
import threading
from collections.abc import Sequence
from types import FrameType

from gpsfeed.config import SerialConfig
from gpsfeed.device import SerialPortDevice
from gpsfeed.errors import ConfigError, ConnectionOpenError
from gpsfeed.subscribers import PositionPrinter

__all__ = ["configure_logging", "main", "run"]

logger = logging.getLogger(__name__)

_ENV_LOG_LEVEL = "GPS_LOG_LEVEL"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def configure_logging(level: str | None = None) -> None:
    """Send diagnostics to stderr; stdout is reserved for position lines."""
    name = (level or os.environ.get(_ENV_LOG_LEVEL) or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


def run(config: SerialConfig, stopped: threading.Event) -> None:
    """Open the receiver, print fixes until *stopped* is set, then close.

    The device sets *stopped* itself if the port becomes unusable, so the
    wait also ends when the receiver is unplugged.

    Raises:
        ConnectionOpenError: If the port cannot be opened.
    """
    device = SerialPortDevice.from_config(config, stopped=stopped)
    device.subscribe(PositionPrinter())
    device.open()
    try:
        stopped.wait()
    finally:
        device.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the feed until interrupted. Returns the process exit code."""
    del argv  # no command-line options; configuration comes from the environment
    configure_logging()
    try:
        config = SerialConfig.from_env()
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    stopped = threading.Event()

    def _request_stop(signum: int, _frame: FrameType | None) -> None:
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        stopped.set()

    previous = {sig: signal.signal(sig, _request_stop) for sig in _SHUTDOWN_SIGNALS}
    try:
        run(config, stopped)
    except ConnectionOpenError as e:
        logger.error("%s", e)
        return 1
    finally:
        for sig, handler in previous.items():
            if handler is not None:
                signal.signal(sig, handler)
    return 0
