"""Pytest fixtures replacing the serial port with an in-memory fake."""

import pytest
import serial

from tests.helpers import FakeSerial


@pytest.fixture
def fake_serial(monkeypatch: pytest.MonkeyPatch) -> FakeSerial:
    """Patch ``serial.Serial`` so every connection opens the same fake port."""
    port = FakeSerial()
    monkeypatch.setattr(serial, "Serial", lambda *args, **kwargs: port)
    return port
