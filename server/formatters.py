"""JSON formatting of position fixes for WebSocket clients."""

import json

from gpsfeed.nmea import PositionFix

__all__ = ["format_position_message"]


def format_position_message(fix: PositionFix) -> str:
    """Serialize a position fix into a JSON string for WebSocket transmission."""
    return json.dumps({
        "type": "position",
        "lat": fix.latitude_degrees,
        "lon": fix.longitude_degrees,
        "utc_time": fix.utc_time,
        "utc_date": fix.utc_date,
        "speed_knots": fix.speed_knots,
        "track_degrees": fix.true_course_degrees,
        "valid": fix.valid,
    })
