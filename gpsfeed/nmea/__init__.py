"""NMEA 0183 sentence decoding."""

from gpsfeed.nmea.decoder import decode
from gpsfeed.nmea.types import PositionFix, Sentence

__all__ = [
    "PositionFix",
    "Sentence",
    "decode",
]
