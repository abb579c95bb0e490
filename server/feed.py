"""Bridge from the device's acquisition thread to the WebSocket clients."""

from gpsfeed.device import SentenceHandler
from gpsfeed.nmea import PositionFix, Sentence
from server.formatters import format_position_message
from server.hub import ClientHub

__all__ = ["forward_position_fixes"]


def forward_position_fixes(hub: ClientHub) -> SentenceHandler:
    """Build a subscriber that publishes every position fix to *hub*.

    The subscriber only formats the fix and hands it to the hub's event
    loop, so the acquisition thread is never held up by a slow client.
    """

    def _forward(sentence: Sentence) -> None:
        if isinstance(sentence, PositionFix):
            hub.publish(format_position_message(sentence))

    return _forward
