"""FastAPI web server streaming live position fixes over WebSocket.

Start with::

    GPS_SERIAL_PORT=/dev/ttyUSB0 uvicorn server.main:app --host 0.0.0.0 --port 8000

WebSocket clients connect to ``ws://<host>:8000/ws`` and receive one JSON
message with ``type="position"`` per RMC sentence (typically 1 Hz).
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from gpsfeed.config import SerialConfig
from gpsfeed.device import SerialPortDevice
from server.feed import forward_position_fixes
from server.hub import ClientHub

_QUEUE_MAX_SIZE = 10
_TIMEOUT_SECONDS = 5.0


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    loop = asyncio.get_running_loop()
    hub = ClientHub(loop, _QUEUE_MAX_SIZE)
    application.state.hub = hub
    device = SerialPortDevice.from_config(SerialConfig.from_env())
    device.subscribe(forward_position_fixes(hub))
    device.open()
    try:
        yield
    finally:
        # close() joins the reader thread; keep that off the event loop
        await loop.run_in_executor(None, device.close)


app = FastAPI(lifespan=_lifespan)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream position fix JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages).
    The oldest message is dropped when the queue is full so slow clients do
    not stall the feed. The connection closes with code 1001, and the client
    should reconnect, if no fix arrives within ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    hub: ClientHub = websocket.app.state.hub
    queue = hub.connect()
    try:
        await websocket.accept()
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        hub.disconnect(queue)
