"""Decoded NMEA sentence records.

Design Decisions:
    1. One generic record plus one specialised kind: every sentence the
       decoder recognises becomes a ``Sentence``; only RMC carries data this
       package acts on, so only RMC gets its own type (``PositionFix``).
       Subscribers filter with ``isinstance``.

    2. Frozen dataclasses: a sentence is handed to several subscribers in
       turn, and none of them may change what the next one sees.

    3. Optional fields (float | None): NMEA fields may be empty, indicated by
       consecutive commas. None distinguishes "no data received" from
       "measured zero". A receiver without a fix typically sends RMC with
       status 'V' and empty coordinates.
"""

from dataclasses import dataclass

__all__ = ["PositionFix", "Sentence"]


@dataclass(frozen=True)
class Sentence:
    """One decoded NMEA sentence of any kind.

    Attributes:
        talker: Two-letter talker ID (e.g. ``"GP"``, ``"GN"``), or None for
            proprietary sentences, which carry a manufacturer code instead.

        sentence_type: Sentence formatter (e.g. ``"RMC"``, ``"GSV"``). For
            proprietary sentences this is ``"P"`` followed by the
            manufacturer code.

        fields: Raw comma-separated data fields, checksum excluded.

        raw: The line the sentence was decoded from, whitespace stripped.
    """

    talker: str | None
    sentence_type: str
    fields: tuple[str, ...]
    raw: str


@dataclass(frozen=True)
class PositionFix(Sentence):
    """Decoded RMC (Recommended Minimum Specific GNSS Data) sentence.

    RMC Sentence Format:
        $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
               |      | |        | |         | |     |     |      |     |
               |      | |        | |         | |     |     |      +-----+-- Magnetic variation
               |      | |        | |         | |     |     +-- Date (DDMMYY)
               |      | |        | |         | |     +-- Track made good (degrees true)
               |      | |        | |         | +-- Speed over ground (knots)
               |      | |        | +---------+-- Longitude + E/W
               |      | +--------+-- Latitude + N/S
               |      +-- Status (A=active, V=void)
               +-- UTC time (HHMMSS.ss)

    Attributes:
        latitude_degrees: Signed decimal degrees, positive=North, as computed
            by the decoder. None if the field was empty.

        longitude_degrees: Signed decimal degrees, positive=East. None if the
            field was empty.

        utc_time: UTC timestamp in HHMMSS.ss format. None if empty.

        utc_date: UTC date in DDMMYY format. None if empty.

        status: ``"A"`` (data valid) or ``"V"`` (navigation receiver
            warning). None if empty.

        speed_knots: Speed over ground in knots. None if empty.

        true_course_degrees: Track made good relative to true north.
            None when stationary or empty.

        valid: Navigation validity flag, True only when status is ``"A"``.

    Example:
        >>> fix = decode("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A")
        >>> fix.latitude_degrees
        48.1173
        >>> fix.valid
        True
    """

    latitude_degrees: float | None
    longitude_degrees: float | None
    utc_time: str | None
    utc_date: str | None
    status: str | None
    speed_knots: float | None
    true_course_degrees: float | None
    valid: bool

    @property
    def has_position(self) -> bool:
        """True when both coordinates are present."""
        return self.latitude_degrees is not None and self.longitude_degrees is not None
