"""Tests for the NMEA sentence decoder."""

import pytest

from gpsfeed import DecodeError, PositionFix, Sentence, decode
from tests.helpers import GSV_LINE, RMC_LINE, rmc, with_checksum


class TestDecodePositionFix:
    """RMC sentences decode to PositionFix."""

    def test_reference_rmc(self):
        fix = decode(RMC_LINE)
        assert isinstance(fix, PositionFix)
        assert fix.talker == "GP"
        assert fix.sentence_type == "RMC"
        assert fix.latitude_degrees == pytest.approx(48.1173, rel=1e-6)
        assert fix.longitude_degrees == pytest.approx(11.5166667, rel=1e-6)
        assert fix.utc_time == "123519"
        assert fix.utc_date == "230394"
        assert fix.status == "A"
        assert fix.speed_knots == pytest.approx(22.4)
        assert fix.true_course_degrees == pytest.approx(84.4)
        assert fix.valid is True
        assert fix.has_position is True

    def test_raw_keeps_line_without_terminator(self):
        fix = decode(RMC_LINE + "\r\n")
        assert fix.raw == RMC_LINE

    def test_fields_are_raw_data(self):
        fix = decode(RMC_LINE)
        assert fix.fields[:4] == ("123519", "A", "4807.038", "N")

    def test_southern_and_western_hemispheres_are_negative(self):
        fix = decode(rmc(lat="3356.123", lat_dir="S", lon="15112.456", lon_dir="W"))
        assert fix.latitude_degrees == pytest.approx(-33.93538333, rel=1e-6)
        assert fix.longitude_degrees == pytest.approx(-151.2076, rel=1e-6)

    def test_void_fix_without_coordinates(self):
        fix = decode(rmc(status="V", lat="", lat_dir="", lon="", lon_dir=""))
        assert isinstance(fix, PositionFix)
        assert fix.latitude_degrees is None
        assert fix.longitude_degrees is None
        assert fix.has_position is False
        assert fix.valid is False

    def test_unreadable_speed_and_empty_course_read_as_missing(self):
        fix = decode(with_checksum("GPRMC,123519,A,4807.038,N,01131.000,E,fast,,230394,003.1,W"))
        assert fix.speed_knots is None
        assert fix.true_course_degrees is None
        assert fix.latitude_degrees == pytest.approx(48.1173, rel=1e-6)

    def test_truncated_sentence_reads_trailing_fields_as_missing(self):
        fix = decode(with_checksum("GPRMC,123519,A,4807.038,N,01131.000,E"))
        assert fix.has_position is True
        assert fix.speed_knots is None
        assert fix.utc_date is None

    def test_multi_constellation_talker(self):
        line = with_checksum("GNRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W")
        fix = decode(line)
        assert isinstance(fix, PositionFix)
        assert fix.talker == "GN"

    def test_position_fix_is_immutable(self):
        fix = decode(RMC_LINE)
        with pytest.raises(AttributeError):
            fix.latitude_degrees = 0.0  # type: ignore[misc]


class TestDecodeOtherSentences:
    """Non-RMC sentences decode to plain Sentence records."""

    def test_gsv_is_not_a_position_fix(self):
        sentence = decode(GSV_LINE)
        assert isinstance(sentence, Sentence)
        assert not isinstance(sentence, PositionFix)
        assert sentence.talker == "GP"
        assert sentence.sentence_type == "GSV"
        assert sentence.fields[:3] == ("3", "1", "11")

    def test_gga_is_not_a_position_fix(self):
        line = with_checksum("GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,")
        sentence = decode(line)
        assert sentence.sentence_type == "GGA"
        assert not isinstance(sentence, PositionFix)


class TestDecodeFailures:
    """Malformed input raises DecodeError and nothing else."""

    @pytest.mark.parametrize(
        "line",
        [
            "not a sentence",
            "",
            "$GPRMC,123519,A,4807.038,N",
            RMC_LINE[:-2] + "00",
            with_checksum("GPXYZ,1,2,3"),
        ],
        ids=["garbage", "empty", "truncated", "bad-checksum", "unknown-type"],
    )
    def test_malformed_lines(self, line):
        with pytest.raises(DecodeError) as exc_info:
            decode(line)
        assert exc_info.value.line == line
        assert exc_info.value.reason

    def test_decode_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            decode("not a sentence")

    def test_invalid_hemisphere(self):
        with pytest.raises(DecodeError, match="hemisphere"):
            decode(rmc(lat_dir="X"))

    def test_invalid_coordinate_text(self):
        with pytest.raises(DecodeError):
            decode(rmc(lat="48x7.038"))
