"""Reference subscriber: print RMC position fixes as text lines."""

import logging
import sys
from typing import TextIO

from gpsfeed.nmea import PositionFix, Sentence

__all__ = ["PositionPrinter", "format_position"]

logger = logging.getLogger(__name__)


def _degrees_text(value: float | None) -> str:
    # exponent marker in upper case (1.5E-05), as the receiver tooling prints it
    return repr(value).replace("e", "E")


def format_position(fix: PositionFix) -> str:
    """Render a fix as ``Latitude::<lat>\\tLongitude::<lon>``.

    Coordinates use the shortest text that parses back to the same float,
    so consumers reading this line recover the decoder's values exactly.
    Values close to zero switch to exponent notation with an upper-case
    marker, e.g. ``Latitude::1.6666666666666667E-05``.
    """
    latitude = _degrees_text(fix.latitude_degrees)
    longitude = _degrees_text(fix.longitude_degrees)
    return f"Latitude::{latitude}\tLongitude::{longitude}"


class PositionPrinter:
    """Subscriber that writes one line per position fix to a text stream.

    Every sentence kind other than RMC is ignored, as are fixes whose
    coordinates are empty (receiver without a fix).

    Args:
        stream: Destination (default: ``sys.stdout`` at call time).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def __call__(self, sentence: Sentence) -> None:
        if not isinstance(sentence, PositionFix):
            return
        if not sentence.has_position:
            logger.debug(
                "Skipping %s%s without coordinates",
                sentence.talker,
                sentence.sentence_type,
            )
            return
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(format_position(sentence) + "\n")
        stream.flush()
