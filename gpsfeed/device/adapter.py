"""SerialPortDevice: acquisition loop and subscriber fan-out.

Lifecycle::

    CREATED --open()--> OPEN --close() / device gone--> CLOSED

A failed ``open()`` stays in CREATED. CLOSED is terminal; reconnecting
means building a new device.

Reading strategy:
    A daemon thread blocks in ``SerialConnection.readline()``. Each line is
    decoded and the resulting sentence is handed to every subscriber in
    registration order, on that same thread, before the next line is read.
    Decode failures and subscriber exceptions are logged and skipped so a
    single bad line or buggy handler never stops the stream. Closing the
    connection is the only way to stop the thread: the blocked read then
    raises ``EOFError`` and the loop exits without reporting anything.
"""

import enum
import logging
import threading
from collections.abc import Callable
from types import TracebackType

from gpsfeed.config import DEFAULT_MAX_READ_FAILURES, SerialConfig
from gpsfeed.device.connection import SerialConnection
from gpsfeed.errors import ConnectionReadError, DecodeError, DeviceStateError
from gpsfeed.nmea import Sentence, decode

__all__ = ["DeviceState", "SentenceHandler", "SerialPortDevice"]

logger = logging.getLogger(__name__)

SentenceHandler = Callable[[Sentence], object]

_JOIN_TIMEOUT = 2.0  # seconds to wait for the loop thread in close()


class DeviceState(enum.Enum):
    CREATED = "created"
    OPEN = "open"
    CLOSED = "closed"


class SerialPortDevice:
    """Reads NMEA sentences from a serial connection and notifies subscribers.

    Usage::

        device = SerialPortDevice(SerialConnection("/dev/ttyUSB0"))
        device.subscribe(print)
        device.open()
        ...
        device.close()

    or as a context manager::

        with SerialPortDevice.from_config(config) as device:
            ...

    Args:
        connection: Unopened connection the device takes ownership of.
        stopped: Optional event set once the device reaches CLOSED, whether
            through ``close()`` or because the port became unusable. The
            process entry point blocks on it.
        max_read_failures: Consecutive failed reads tolerated on a port that
            still reports itself open before the device gives up and closes.
    """

    def __init__(
        self,
        connection: SerialConnection,
        stopped: threading.Event | None = None,
        max_read_failures: int = DEFAULT_MAX_READ_FAILURES,
    ) -> None:
        self._connection = connection
        self._stopped = stopped if stopped is not None else threading.Event()
        self._max_read_failures = max_read_failures
        self._handlers: list[SentenceHandler] = []
        self._handlers_lock = threading.Lock()
        self._lock = threading.Lock()
        self._state = DeviceState.CREATED
        self._closing = threading.Event()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config(
        cls,
        config: SerialConfig,
        stopped: threading.Event | None = None,
    ) -> "SerialPortDevice":
        """Build a device and its connection from a ``SerialConfig``."""
        return cls(
            SerialConnection(config.port, config.baudrate),
            stopped=stopped,
            max_read_failures=config.max_read_failures,
        )

    # --- lifecycle ------------------------------------------------------------

    @property
    def state(self) -> DeviceState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is DeviceState.OPEN

    @property
    def stopped(self) -> threading.Event:
        """Event set when the device reaches CLOSED."""
        return self._stopped

    @property
    def port(self) -> str:
        return self._connection.port

    def open(self) -> None:
        """Open the connection and start the acquisition thread.

        Returns as soon as the thread is running.

        Raises:
            DeviceStateError: If the device is not in CREATED state.
            ConnectionOpenError: If the port cannot be opened. The device
                stays in CREATED and ``open()`` may be retried.
        """
        with self._lock:
            if self._state is not DeviceState.CREATED:
                raise DeviceStateError(
                    f"Cannot open device on {self.port!r} in state {self._state.value}."
                )
            self._connection.open()
            self._state = DeviceState.OPEN
            self._thread = threading.Thread(
                target=self._run,
                name=f"gpsfeed-{self.port}",
                daemon=True,
            )
            self._thread.start()
        logger.info(
            "Reading NMEA from %s at %d baud",
            self.port,
            self._connection.baudrate,
        )

    def close(self) -> None:
        """Stop the acquisition thread and close the connection.

        Idempotent, and a no-op on a device that was never opened. Once this
        returns no subscriber invocation will start. When called from a
        subscriber (i.e. on the acquisition thread) it does not wait for the
        thread, which exits after the current handler returns.
        """
        with self._lock:
            if self._state is not DeviceState.OPEN:
                return
            self._closing.set()
            self._state = DeviceState.CLOSED
            thread = self._thread
        self._connection.close()
        if thread is not None and thread is not threading.current_thread():
            thread.join(_JOIN_TIMEOUT)
            if thread.is_alive():
                logger.warning("Reader thread for %s did not exit in time", self.port)
        self._stopped.set()
        logger.info("Closed %s", self.port)

    def __enter__(self) -> "SerialPortDevice":
        """Open the device."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the device."""
        self.close()

    # --- subscriptions ----------------------------------------------------------

    def subscribe(self, handler: SentenceHandler) -> SentenceHandler:
        """Register *handler* to be called with every decoded sentence.

        Registrations are additive and not de-duplicated. Handlers run on the
        acquisition thread, in registration order, and must return promptly;
        slow work belongs on another thread or event loop.

        Returns:
            *handler*, so this can be used as a decorator.
        """
        with self._handlers_lock:
            self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: SentenceHandler) -> None:
        """Remove the first registration of *handler*.

        Raises:
            ValueError: If *handler* is not registered.
        """
        with self._handlers_lock:
            self._handlers.remove(handler)

    # --- acquisition loop -------------------------------------------------------

    def _dispatch(self, sentence: Sentence) -> None:
        with self._handlers_lock:
            handlers = list(self._handlers)
        for handler in handlers:
            if self._closing.is_set():
                return
            try:
                handler(sentence)
            except Exception:
                logger.exception(
                    "Subscriber %r failed on %s sentence", handler, sentence.sentence_type
                )

    def _process_line(self, line: str) -> None:
        try:
            sentence = decode(line)
        except DecodeError as e:
            logger.warning("Discarding malformed line %r: %s", e.line, e.reason)
            return
        self._dispatch(sentence)

    def _read_failed(self, error: ConnectionReadError, failures: int) -> bool:
        """Log a failed read; return True if the port should be abandoned."""
        if failures >= self._max_read_failures:
            logger.error(
                "Giving up on %s after %d consecutive read failures: %s",
                self.port,
                failures,
                error.reason,
            )
            return True
        logger.warning(
            "Read from %s failed (%d/%d): %s",
            self.port,
            failures,
            self._max_read_failures,
            error.reason,
        )
        return False

    def _run(self) -> None:
        failures = 0
        try:
            while not self._closing.is_set():
                try:
                    line = self._connection.readline()
                except EOFError:
                    return
                except ConnectionReadError as e:
                    failures += 1
                    if self._read_failed(e, failures):
                        return
                    continue
                failures = 0
                if line is not None:
                    self._process_line(line)
        finally:
            self._finish()

    def _finish(self) -> None:
        """Move to CLOSED after the loop exits on its own."""
        with self._lock:
            if self._state is not DeviceState.OPEN:
                return
            self._closing.set()
            self._state = DeviceState.CLOSED
        self._connection.close()
        self._stopped.set()
        logger.info("Stopped reading %s", self.port)
