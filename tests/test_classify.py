"""Tests for normalization, manufacturer detection and type classification."""

import re

import pytest

from partmatch.classify import (
    normalize,
    classify,
    classify_manufacturer,
    classify_type,
    matching_types,
    possible_manufacturers,
    extract_series,
)
from partmatch.component_types import (
    TypeTag, RESISTOR, CAPACITOR, INDUCTOR, DIODE, LED, TRANSISTOR, MOSFET, OPAMP,
    VOLTAGE_REGULATOR, LOGIC_IC, MEMORY, MICROCONTROLLER, SENSOR, CONNECTOR, IC,
)
from partmatch.manufacturers import (
    MANUFACTURERS, UNKNOWN, Manufacturer, ManufacturerHandler, UnknownHandler,
    get_manufacturer, validate_manufacturers, build_pattern_registry, _entry,
)


class TestNormalize:
    """Tests for identifier normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("rc0603fr-0710kl", "RC0603FR0710KL"),
        ("MCP6002-I/SN", "MCP6002ISN"),
        ("  LM358 N ", "LM358N"),
        ("AMS1117-3.3", "AMS111733"),
        ("ESP32-S3-WROOM-1-N8R2", "ESP32S3WROOM1N8R2"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "-/.", 42])
    def test_empty_or_invalid(self, raw):
        assert normalize(raw) == ""

    def test_idempotent(self):
        once = normalize("b4b-xh-a (lf)(sn)")
        assert normalize(once) == once


class TestClassify:
    """Tests for classify() across the manufacturer table."""

    @pytest.mark.parametrize("mpn,manufacturer,type_tag", [
        ("RC0603FR-0710KL", "YAGEO", RESISTOR.subtype("CHIP_YAGEO")),
        ("CRCW060310K0FKEA", "VISHAY", RESISTOR.subtype("CHIP_VISHAY")),
        ("ERJ-3EKF1002V", "PANASONIC", RESISTOR.subtype("CHIP_PANASONIC")),
        ("GRM188R71H104KA93D", "MURATA", CAPACITOR.subtype("CERAMIC_MURATA")),
        ("CL10B104KB8NNNC", "SAMSUNG", CAPACITOR.subtype("CERAMIC_SAMSUNG")),
        ("C0603C104K5RACTU", "KEMET", CAPACITOR.subtype("CERAMIC_KEMET")),
        ("T491A106K016AT", "KEMET", CAPACITOR.subtype("TANTALUM_KEMET")),
        ("LQG15HS10NJ02D", "MURATA", INDUCTOR.subtype("MURATA")),
        ("XAL4020-222MEB", "COILCRAFT", INDUCTOR),
        ("1N4007", "VISHAY", DIODE),
        ("1N4728A", "ON_SEMI", DIODE),
        ("BAT54S", "VISHAY", DIODE),
        ("APT1608SGC", "KINGBRIGHT", LED),
        ("150060RS75000", "WURTH", LED),
        ("IRF540NPBF", "INFINEON", MOSFET.subtype("INFINEON")),
        ("STP55NF06", "ST", MOSFET.subtype("ST")),
        ("2N7002", "VISHAY", MOSFET),
        ("AO3400", "ALPHA_OMEGA", MOSFET),
        ("2N3904", "VISHAY", TRANSISTOR),
        ("MMBT3904", "ON_SEMI", TRANSISTOR),
        ("BC547B", "NEXPERIA", TRANSISTOR),
        ("LM358N", "TI", OPAMP),
        ("TL072CP", "TI", OPAMP),
        ("MCP6002-I/SN", "MICROCHIP", OPAMP),
        ("LM7805CT", "TI", VOLTAGE_REGULATOR),
        ("AMS1117-3.3", "ADVANCED_MONOLITHIC", VOLTAGE_REGULATOR),
        ("LM317T", "TI", VOLTAGE_REGULATOR),
        ("SN74HC595N", "TI", LOGIC_IC),
        ("CD4051BE", "LOGIC_IC", LOGIC_IC),
        ("W25Q128JVSIQ", "WINBOND", MEMORY),
        ("24LC256", "MICROCHIP", MEMORY),
        ("STM32F103C8T6", "ST", MICROCONTROLLER),
        ("ATMEGA328P-AU", "MICROCHIP", MICROCONTROLLER),
        ("ESP32-S3-WROOM-1-N8R2", "ESPRESSIF", MICROCONTROLLER),
        ("BME280", "BOSCH", SENSOR),
        ("SHT31-DIS", "SENSIRION", SENSOR),
        ("LM35DZ", "TI", SENSOR),
        ("B4B-XH-A", "JST", CONNECTOR),
        ("53047-0410", "MOLEX", CONNECTOR),
        ("61300411121", "WURTH", CONNECTOR),
        ("NE555P", "TI", IC),
        ("RL207", "DIODES_INC", DIODE),
        ("TLHR5400", "VISHAY", LED),
        ("LM301B", "SAMSUNG", LED),
        ("XPERED-L1-0000-00801", "CREE", LED),
        ("NCSW170", "NICHIA", LED),
        ("L130-5580001400001", "LUMILEDS", LED),
        ("LCW E6SF", "OSRAM", LED),
        ("22-23-2021", "MOLEX", CONNECTOR),
        ("TPS54331DR", "TI", VOLTAGE_REGULATOR),
        ("XMC1100-T016F0064", "INFINEON", MICROCONTROLLER),
    ])
    def test_classify(self, mpn, manufacturer, type_tag):
        result = classify(mpn)
        assert result.manufacturer.key == manufacturer
        assert result.type_tag == type_tag

    @pytest.mark.parametrize("mpn", [None, "", "   ", "ZZZ-NOT-A-PART", "!!!"])
    def test_unmatched_resolves_to_unknown(self, mpn):
        result = classify(mpn)
        assert result.manufacturer is UNKNOWN
        assert result.type_tag is None
        assert result.base_type is None

    def test_known_manufacturer_without_type(self):
        # TI prefix, but no TI type pattern covers it
        result = classify("LM999XYZ")
        assert result.manufacturer.key == "TI"
        assert result.type_tag is None

    def test_deterministic(self):
        first = [classify(m) for m in ("LM358N", "RC0603FR-0710KL", "2N7002", "")]
        classify("GRM188R71H104KA93D")
        second = [classify(m) for m in ("LM358N", "RC0603FR-0710KL", "2N7002", "")]
        assert first == second

    def test_identifier_is_normalized(self):
        assert classify("rc0603fr-0710kl").identifier == "RC0603FR0710KL"

    def test_to_dict(self):
        data = classify("RC0603FR-0710KL").to_dict()
        assert data == {
            "identifier": "RC0603FR0710KL",
            "manufacturer": "Yageo",
            "manufacturer_key": "YAGEO",
            "type": "RESISTOR_CHIP_YAGEO",
            "base_type": "RESISTOR",
        }

    def test_first_manufacturer_wins(self):
        # Both ON Semi (1N47) and Vishay (1N) prefixes match; ON Semi is declared first
        assert classify_manufacturer("1N4728A").key == "ON_SEMI"
        assert [m.key for m in possible_manufacturers("1N4728A")] == ["ON_SEMI", "VISHAY"]


class TestClassifyType:
    """Tests for type resolution under a given manufacturer."""

    def test_subtype_preferred_over_base(self):
        yageo = get_manufacturer("YAGEO")
        assert matching_types("RC0603FR0710KL", yageo) == [RESISTOR.subtype("CHIP_YAGEO"), RESISTOR]
        assert classify_type("RC0603FR0710KL", yageo) == RESISTOR.subtype("CHIP_YAGEO")

    def test_concrete_type_preferred_over_generic(self):
        ti = get_manufacturer("TI")
        assert classify_type("LM358N", ti) == OPAMP

    def test_equal_specificity_keeps_declaration_order(self):
        # Both patterns match; MOSFET is declared first
        dual = _entry("DUAL", "Q", "Dual", (MOSFET, (r"Q\d+",)), (TRANSISTOR, (r"Q\d+",)))
        registry = build_pattern_registry((dual, UNKNOWN))
        assert matching_types("Q100", dual, registry) == [MOSFET, TRANSISTOR]
        assert classify_type("Q100", dual, registry) == MOSFET

    def test_undecodable_type_numbers_left_untyped(self):
        # 2N7002 is a MOSFET, not one of the known BJT type numbers
        vishay = get_manufacturer("VISHAY")
        assert matching_types("2N7002", vishay) == [MOSFET]
        assert classify("2N1234").type_tag is None
        assert classify("TPS-XYZ").type_tag is None
        assert classify("BC599").type_tag is None

    def test_wrong_manufacturer_gives_no_type(self):
        assert classify_type("RC0603FR0710KL", get_manufacturer("MURATA")) is None

    def test_unknown_manufacturer_never_matches(self):
        assert matching_types("RC0603FR0710KL", UNKNOWN) == []

    def test_empty_identifier(self):
        assert classify_type("", get_manufacturer("TI")) is None
        assert matching_types(None, get_manufacturer("TI")) == []


class TestManufacturers:
    """Tests for the ordered manufacturer table."""

    def test_unknown_is_last_and_unique(self):
        assert MANUFACTURERS[-1] is UNKNOWN
        assert sum(1 for m in MANUFACTURERS if m.is_unknown) == 1

    def test_keys_unique(self):
        keys = [m.key for m in MANUFACTURERS]
        assert len(keys) == len(set(keys))

    def test_handler_factory_is_stateless(self):
        ti = get_manufacturer("TI")
        first, second = ti.create_handler(), ti.create_handler()
        assert first is not second
        assert first.supported_types() == second.supported_types()
        assert isinstance(UNKNOWN.create_handler(), UnknownHandler)

    def test_get_manufacturer(self):
        assert get_manufacturer("ti").key == "TI"
        assert get_manufacturer("NOPE") is UNKNOWN
        with pytest.raises(ValueError):
            get_manufacturer(None)

    def test_validate_requires_unknown_last(self):
        with pytest.raises(ValueError):
            validate_manufacturers(MANUFACTURERS[:-1])
        with pytest.raises(ValueError):
            validate_manufacturers((UNKNOWN,) + MANUFACTURERS)

    def test_validate_rejects_duplicate_keys(self):
        duplicate = Manufacturer("TI", re.compile("X"), "Duplicate", lambda: ManufacturerHandler("TI"))
        with pytest.raises(ValueError, match="Duplicate"):
            validate_manufacturers((duplicate,) + MANUFACTURERS)

    def test_custom_table_order(self):
        first = Manufacturer("FIRST", re.compile("LM"), "First", lambda: ManufacturerHandler("FIRST"))
        table = (first,) + MANUFACTURERS
        assert classify_manufacturer("LM358N", table).key == "FIRST"
        # FIRST declares no types, so the part is no longer typed
        assert classify("LM358N", table).type_tag is None

    def test_display_name(self):
        assert str(get_manufacturer("MURATA")) == "Murata Manufacturing"


class TestExtractSeries:
    """Tests for extract_series."""

    @pytest.mark.parametrize("mpn,expected", [
        ("LM358N", "LM358"),
        ("GRM188R71H104KA93D", "GRM188"),
        ("1N4148", "1"),
        ("lm-358", "LM358"),
        ("", ""),
        (None, ""),
    ])
    def test_extract_series(self, mpn, expected):
        assert extract_series(mpn) == expected

    def test_type_tag_field(self):
        assert isinstance(classify("LM358N").type_tag, TypeTag)
