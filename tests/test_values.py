"""Tests for typed spec values, unit parsers and part-number value codes."""

import pytest

from partmatch.values import (
    SpecValue,
    to_number,
    unwrap,
    parse_voltage,
    parse_current,
    parse_power,
    parse_resistance,
    parse_capacitance,
    parse_inductance,
    parse_tolerance,
    parse_frequency,
    coerce_specs,
    normalize_package,
    parse_value_code,
)
from partmatch.component_types import MOSFET, RESISTOR
from partmatch.scoring import score


class TestSpecValue:
    """Tests for the immutable SpecValue holder."""

    def test_structural_equality(self):
        assert SpecValue(25.0, "V") == SpecValue(25.0, "V")
        assert SpecValue(25.0, "V") != SpecValue(25.0, "A")

    def test_frozen(self):
        value = SpecValue(1.0, "A")
        with pytest.raises(AttributeError):
            value.value = 2.0

    def test_min_greater_than_max_raises(self):
        with pytest.raises(ValueError):
            SpecValue(5.0, "V", min=6.0, max=4.0)

    def test_in_range(self):
        value = SpecValue(3.3, "V", min=3.0, max=3.6)
        assert value.in_range(3.3)
        assert not value.in_range(2.9)
        assert not value.in_range(3.7)

    def test_open_bounds(self):
        assert SpecValue(1.0, min=0.5).in_range(1000)
        assert SpecValue(1.0, max=2.0).in_range(-1000)

    def test_str(self):
        assert str(SpecValue(100, "nF")) == "100nF"


class TestToNumber:
    """Tests for to_number coercion."""

    @pytest.mark.parametrize("value,expected", [
        (5, 5.0),
        (2.5, 2.5),
        ("10", 10.0),
        (" 4.7 ", 4.7),
        (SpecValue(16, "V"), 16.0),
    ])
    def test_numeric(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [None, True, False, "X7R", "25V", float("nan"), [1]])
    def test_not_numeric(self, value):
        assert to_number(value) is None

    def test_unwrap(self):
        assert unwrap(SpecValue("X7R")) == "X7R"
        assert unwrap("X5R") == "X5R"


class TestUnitParsers:
    """Tests for datasheet-style unit parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("25V", 25.0),
        ("6.3V", 6.3),
        ("500mV", 0.5),
        ("1kV", 1000.0),
    ])
    def test_voltage(self, text, expected):
        assert parse_voltage(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text,expected", [
        ("2A", 2.0),
        ("500mA", 0.5),
        ("100uA", 1e-4),
    ])
    def test_current(self, text, expected):
        assert parse_current(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text,expected", [
        ("1/4W", 0.25),
        ("100mW", 0.1),
        ("0.25W", 0.25),
    ])
    def test_power(self, text, expected):
        assert parse_power(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text,expected", [
        ("10kΩ", 10000.0),
        ("4.7M", 4.7e6),
        ("100mΩ", 0.1),
        ("470", 470.0),
    ])
    def test_resistance(self, text, expected):
        assert parse_resistance(text) == pytest.approx(expected)

    def test_capacitance(self):
        assert parse_capacitance("100nF") == pytest.approx(100e-9)
        assert parse_capacitance("10uF") == pytest.approx(10e-6)
        assert parse_capacitance("10µF") == pytest.approx(10e-6)
        assert parse_capacitance("22pF") == pytest.approx(22e-12)

    def test_inductance(self):
        assert parse_inductance("100nH") == pytest.approx(100e-9)
        assert parse_inductance("4.7uH") == pytest.approx(4.7e-6)

    def test_tolerance(self):
        assert parse_tolerance("±1%") == pytest.approx(1.0)
        assert parse_tolerance("10%") == pytest.approx(10.0)

    def test_frequency(self):
        assert parse_frequency("8MHz") == pytest.approx(8e6)
        assert parse_frequency("32.768kHz") == pytest.approx(32768.0)

    @pytest.mark.parametrize("parser", [
        parse_voltage, parse_current, parse_power, parse_resistance,
        parse_capacitance, parse_inductance, parse_tolerance, parse_frequency,
    ])
    def test_empty_input(self, parser):
        assert parser("") is None
        assert parser(None) is None


class TestCoerceSpecs:
    """Tests for coerce_specs."""

    def test_converts_unit_strings(self):
        result = coerce_specs({"voltage": "25V", "capacitance": "100nF", "dielectric": "X7R"})
        assert result["voltage"] == pytest.approx(25.0)
        assert result["capacitance"] == pytest.approx(100e-9)
        assert result["dielectric"] == "X7R"

    def test_drops_none(self):
        assert coerce_specs({"voltage": None, "package": "0603"}) == {"package": "0603"}

    def test_numeric_strings_pass_through(self):
        assert coerce_specs({"resistance": "10000"}) == {"resistance": "10000"}

    def test_unparseable_kept(self):
        assert coerce_specs({"voltage": "unknown"}) == {"voltage": "unknown"}

    def test_package_normalized(self):
        assert coerce_specs({"package": "1608M"}) == {"package": "0603"}
        assert coerce_specs({"package": "so-8"}) == {"package": "SOIC-8"}

    def test_package_spellings_score_as_equal(self):
        resistor = {"resistance": "10k", "tolerance": "1%"}
        imperial = coerce_specs({**resistor, "package": "0603"})
        metric = coerce_specs({**resistor, "package": "1608M"})
        assert score(RESISTOR, imperial, metric) == 1.0

        mosfet = {"channel": "N", "voltageRating": "30V", "currentRating": "5A"}
        soic = coerce_specs({**mosfet, "package": "SOIC-8"})
        so = coerce_specs({**mosfet, "package": "SO-8"})
        assert score(MOSFET, soic, so) == 1.0


class TestNormalizePackage:
    """Tests for package name normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("SO-8", "SOIC-8"),
        ("SOIC8", "SOIC-8"),
        ("soic-8", "SOIC-8"),
        ("1608M", "0603"),
        ("1005 metric", "0402"),
        ("0603", "0603"),
        ("1608", "1608"),
        ("SOT23", "SOT-23"),
        ("SOT-23-5", "SOT-23-5"),
        ("SOT-23-3", "SOT-23"),
        ("TO220", "TO-220"),
        ("TO-252", "DPAK"),
        ("DO-214AC", "SMA"),
        ("QFN32", "QFN-32"),
        ("  lqfp 48 ", "LQFP-48"),
        ("BGA", "BGA"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_package(raw) == expected

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty(self, raw):
        assert normalize_package(raw) == ""

    def test_unknown_metric_size_kept(self):
        assert normalize_package("9999M") == "9999M"


class TestParseValueCode:
    """Tests for value codes embedded in part numbers."""

    @pytest.mark.parametrize("code,expected", [
        ("4K7", 4700.0),
        ("10K", 10000.0),
        ("10K0", 10000.0),
        ("100R", 100.0),
        ("2R2", 2.2),
        ("R47", 0.47),
        ("1M", 1e6),
        ("104", 100000.0),
        ("1002", 10000.0),
        ("220", 22.0),
    ])
    def test_codes(self, code, expected):
        assert parse_value_code(code) == pytest.approx(expected)

    def test_base_scaling(self):
        assert parse_value_code("104", 1e-12) == pytest.approx(100e-9)
        assert parse_value_code("10N", 1e-9) == pytest.approx(10e-9)

    @pytest.mark.parametrize("code", ["", None, "R", "ABC", "1"])
    def test_invalid(self, code):
        assert parse_value_code(code) is None
