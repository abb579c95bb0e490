"""Shared test doubles and sentence builders."""

import collections
import functools
import operator
import threading
from collections.abc import Callable
from typing import Any

# Reference RMC sentence: 48°07.038' N, 11°31.000' E
RMC_LINE = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"
# Satellites-in-view, carries no position
GSV_LINE = "$GPGSV,3,1,11,03,03,111,00,04,15,270,00,06,01,010,00,13,06,292,00*74"

_CANCELLED = object()


def with_checksum(body: str) -> str:
    """Frame *body* as ``$<body>*HH`` with a correct XOR checksum."""
    checksum = functools.reduce(operator.xor, (ord(c) for c in body), 0)
    return f"${body}*{checksum:02X}"


def rmc(utc_time: str = "123519", lat: str = "4807.038", lat_dir: str = "N",
        lon: str = "01131.000", lon_dir: str = "E", status: str = "A") -> str:
    return with_checksum(
        f"GPRMC,{utc_time},{status},{lat},{lat_dir},{lon},{lon_dir},"
        "022.4,084.4,230394,003.1,W"
    )


class FakeSerial:
    """In-memory stand-in for ``serial.Serial``.

    ``feed()`` queues items for ``readline()``: ``str`` lines (a CRLF
    terminator is appended), raw ``bytes``, exception instances (raised),
    or zero-argument callables (called, their result returned).
    ``readline()`` blocks while nothing is queued, like a receiver between
    sentences. ``wait_idle()`` returns once every queued item has been
    consumed and the reader is blocked again.
    """

    def __init__(self) -> None:
        self.port: str | None = None
        self.baudrate: int | None = None
        self.timeout: Any = "unset"
        self.is_open = False
        self.open_error: Exception | None = None
        self.open_calls = 0
        self.close_calls = 0
        self.cancel_calls = 0
        self._items: collections.deque[Any] = collections.deque()
        self._condition = threading.Condition()
        self._waiting = False

    def open(self) -> None:
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        self.is_open = True

    def close(self) -> None:
        self.close_calls += 1
        self.is_open = False

    def cancel_read(self) -> None:
        self.cancel_calls += 1
        with self._condition:
            self._items.appendleft(_CANCELLED)
            self._condition.notify_all()

    def feed(self, *items: str | bytes | BaseException | Callable[[], bytes]) -> None:
        with self._condition:
            self._items.extend(items)
            self._condition.notify_all()

    def wait_idle(self, timeout: float = 2.0) -> bool:
        with self._condition:
            return self._condition.wait_for(
                lambda: self._waiting and not self._items, timeout
            )

    def readline(self) -> bytes:
        with self._condition:
            while not self._items:
                self._waiting = True
                self._condition.notify_all()
                self._condition.wait()
            self._waiting = False
            item = self._items.popleft()
        if item is _CANCELLED:
            return b""
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, str):
            return (item + "\r\n").encode("ascii")
        if isinstance(item, bytes):
            return item
        return item()
