"""Fan-out of JSON messages from the acquisition thread to WebSocket clients."""

import asyncio
import logging

__all__ = ["ClientHub"]

logger = logging.getLogger(__name__)


class ClientHub:
    """Bounded per-client outboxes owned by one event loop.

    ``publish`` may be called from any thread: it makes a single hop onto
    the loop, and delivery to every outbox happens there. A full outbox
    loses its oldest message, so one slow client never holds up the others
    or the serial reader.

    Args:
        loop: Event loop that serves the WebSocket connections.
        outbox_size: Messages buffered per client before the oldest is dropped.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, outbox_size: int) -> None:
        self._loop = loop
        self._outbox_size = outbox_size
        self._outboxes: set[asyncio.Queue[str]] = set()
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._outboxes)

    def connect(self) -> asyncio.Queue[str]:
        """Create and register the outbox for a new client. Loop thread only."""
        outbox: asyncio.Queue[str] = asyncio.Queue(maxsize=self._outbox_size)
        self._outboxes.add(outbox)
        return outbox

    def disconnect(self, outbox: asyncio.Queue[str]) -> None:
        """Forget a client's outbox. Unknown outboxes are ignored."""
        self._outboxes.discard(outbox)

    def publish(self, message: str) -> None:
        """Queue *message* for every connected client. Thread-safe."""
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self.deliver, message)

    def deliver(self, message: str) -> None:
        """Put *message* in every outbox. Runs on the loop thread."""
        for outbox in self._outboxes:
            if outbox.full():
                outbox.get_nowait()
                self.dropped += 1
                logger.debug("Client outbox full, dropped its oldest message")
            outbox.put_nowait(message)
