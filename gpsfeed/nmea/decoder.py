"""Sentence decoder: one line of text in, one typed sentence out.

The NMEA grammar itself (framing, checksum, per-kind field layout) is
delegated to ``pynmea2``. This module is the boundary around it: it
enforces strict checksum checking, turns every failure into a single
``DecodeError`` and maps the library's objects onto the package's own
immutable records.
"""

import pynmea2

from gpsfeed.errors import DecodeError
from gpsfeed.nmea.types import PositionFix, Sentence

__all__ = ["decode"]

_LATITUDE_HEMISPHERES = ("N", "S")
_LONGITUDE_HEMISPHERES = ("E", "W")
_STATUS_ACTIVE = "A"


def _raw_field(message: pynmea2.NMEASentence, name: str) -> str | None:
    """Return the text of a named field, or None when it is empty or absent.

    pynmea2's typed attributes hand back the raw string when a conversion
    fails and 0.0 for an empty coordinate, so fields are read by position
    from the sentence class's table instead. Receivers built against older
    NMEA revisions omit trailing fields (such as the RMC mode indicator);
    those read as absent.
    """
    index = type(message).name_to_idx[name]
    if index >= len(message.data):
        return None
    return message.data[index] or None


def _measurement(message: pynmea2.NMEASentence, name: str) -> float | None:
    text = _raw_field(message, name)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        # speed and course are optional; garbage reads as "not reported"
        return None


def _coordinate(
    message: pynmea2.NMEASentence,
    value_name: str,
    direction_name: str,
    hemispheres: tuple[str, str],
    signed: str,
) -> float | None:
    """Return the library's signed decimal degrees, or None if the field is empty.

    Raises:
        ValueError: If the hemisphere indicator is not one of *hemispheres*
            or the coordinate is not in DDDMM.MMMM form.
    """
    value = _raw_field(message, value_name)
    direction = _raw_field(message, direction_name)
    if value is None or direction is None:
        return None
    if direction not in hemispheres:
        raise ValueError(f"invalid hemisphere {direction!r} for {value_name}")
    return float(getattr(message, signed))


def _sentence_identity(message: pynmea2.NMEASentence) -> tuple[str | None, str]:
    talker = getattr(message, "talker", None)
    sentence_type = getattr(message, "sentence_type", None)
    if sentence_type:
        return talker, sentence_type
    # Proprietary sentences ($P<manufacturer>...) have no talker or formatter
    return None, "P" + getattr(message, "manufacturer", "")


def _build_position_fix(message: pynmea2.types.talker.RMC, raw: str) -> PositionFix:
    status = _raw_field(message, "status")
    return PositionFix(
        talker=message.talker,
        sentence_type=message.sentence_type,
        fields=tuple(message.data),
        raw=raw,
        latitude_degrees=_coordinate(
            message, "lat", "lat_dir", _LATITUDE_HEMISPHERES, "latitude"
        ),
        longitude_degrees=_coordinate(
            message, "lon", "lon_dir", _LONGITUDE_HEMISPHERES, "longitude"
        ),
        utc_time=_raw_field(message, "timestamp"),
        utc_date=_raw_field(message, "datestamp"),
        status=status,
        speed_knots=_measurement(message, "spd_over_grnd"),
        true_course_degrees=_measurement(message, "true_course"),
        valid=status == _STATUS_ACTIVE,
    )


def decode(line: str) -> Sentence:
    """Decode one NMEA line.

    Checksums are mandatory: a sentence without one is rejected, because a
    line torn by a mid-stream port open looks well-formed up to the point
    where it was cut.

    Args:
        line: One line from the receiver, with or without its terminator.

    Returns:
        A ``PositionFix`` for RMC sentences, otherwise a ``Sentence``.

    Raises:
        DecodeError: If the line is not a valid sentence of a known kind,
            its checksum is missing or wrong, or an RMC coordinate is
            malformed. No other exception escapes for string input.

    Example:
        >>> decode("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A")
        PositionFix(talker='GP', sentence_type='RMC', ...)
        >>> decode("not a sentence")
        Traceback (most recent call last):
        gpsfeed.errors.DecodeError: could not parse data: 'not a sentence'
    """
    text = line.strip()
    try:
        message = pynmea2.parse(text, check=True)
    except pynmea2.ParseError as e:
        raise DecodeError(line, str(e.args[0]) if e.args else "parse error") from e

    try:
        if isinstance(message, pynmea2.types.talker.RMC):
            return _build_position_fix(message, text)
        talker, sentence_type = _sentence_identity(message)
        return Sentence(
            talker=talker,
            sentence_type=sentence_type,
            fields=tuple(message.data),
            raw=text,
        )
    # older pynmea2 releases report a bad coordinate as AttributeError
    except (ValueError, TypeError, AttributeError) as e:
        raise DecodeError(line, f"invalid field: {e}") from e
