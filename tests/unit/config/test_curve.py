"""Tests for Curve reading and writing."""

import io
import logging

import pytest
from pydantic import ValidationError

from fanconf import Curve, Point


class TestCurveDecode:
    """Test reading curves line by line."""

    def test_decode_keeps_file_order(self):
        curve = Curve.decode("30:0%\n50:1200\n70;255\n")

        assert curve.count() == 3
        assert [point.temp for point in curve] == [30, 50, 70]
        assert curve.valid()

    def test_decode_skips_malformed_line(self, caplog):
        """Test a bad line is logged and the rest of the curve kept."""
        with caplog.at_level(logging.ERROR):
            curve = Curve.decode(["30:600", "50", "70:1800"])

        assert len(curve) == 2
        assert [point.rpm for point in curve] == [600, 1800]
        assert len(caplog.records) == 1
        assert "Invalid point: 50" in caplog.text

    def test_decode_skips_blank_lines_silently(self, caplog):
        with caplog.at_level(logging.DEBUG):
            curve = Curve.decode("\n30;100\n\n   \n60;200\n")

        assert curve.count() == 2
        assert caplog.records == []

    def test_decode_does_not_reorder(self):
        """Test ordering is left to the control loop."""
        curve = Curve.decode("70;255\n30;10\n30;10\n")

        assert [point.temp for point in curve] == [70, 30, 30]

    def test_read_from_stream(self):
        curve = Curve.read(io.StringIO("40:1000\r\n60:2000\r\n"))

        assert [point.rpm for point in curve] == [1000, 2000]

    def test_decode_empty_invalid(self):
        curve = Curve.decode("")

        assert curve.count() == 0
        assert not curve.valid()

    def test_decode_oversized_values_keep_curve(self):
        """Test huge numbers don't abort the read or drop other points."""
        huge_fahrenheit = "9" * 400 + "f;10"
        huge_rpm = "40:" + "9" * 5000
        curve = Curve.decode(
            ["30;10", huge_fahrenheit, huge_rpm, "60;20"]
        )

        assert curve.count() == 3
        assert curve.points[0] == Point(temp=30, pwm=10)
        assert curve.points[1].pwm == 10
        assert curve.points[1].temp == Point.fahrenheit_to_celsius(
            int("9" * 400)
        )
        assert curve.points[2] == Point(temp=60, pwm=20)

    def test_decode_all_malformed_invalid(self, caplog):
        with caplog.at_level(logging.ERROR):
            curve = Curve.decode("a\nb\n")

        assert not curve.valid()
        assert len(caplog.records) == 2


class TestCurveEncode:
    """Test writing curves."""

    def test_encode_one_point_per_line(self):
        curve = Curve(
            points=[
                Point(temp=30, rpm=0, is_rpm_percent=True),
                Point(temp=50, rpm=1200),
                Point(temp=70, pwm=255),
            ]
        )

        assert curve.encode() == "30:0%\n50:1200\n70;255\n"

    def test_write_to_stream(self):
        stream = io.StringIO()
        Curve(points=[Point(temp=40, pwm=64)]).write(stream)

        assert stream.getvalue() == "40;64\n"

    def test_round_trip(self):
        text = "20;0\n45:900\n60:75%\n80;255\n"

        assert Curve.decode(text).encode() == text

    def test_empty_curve_encodes_empty(self):
        assert Curve().encode() == ""


class TestCurveModel:
    def test_immutability(self):
        curve = Curve()

        with pytest.raises(ValidationError):
            curve.points = [Point(temp=1, pwm=1)]
