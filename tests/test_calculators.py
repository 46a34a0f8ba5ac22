"""Tests for the calculator list, dispatch order and shadowing detection."""

import pytest

from partmatch.calculators import (
    DEFAULT_CALCULATOR,
    DefaultSimilarityCalculator,
    SimilarityCalculator,
    SpecCalculator,
    build_calculators,
    find_calculator,
    get_calculators,
    legacy_similarity,
    reset_calculators,
    shadowing_violations,
)
from partmatch.calculators import part_metadata
from partmatch.classify import classify, normalize
from partmatch.component_types import RESISTOR, CAPACITOR, TRANSISTOR, MOSFET, OPAMP, CONNECTOR, CRYSTAL, IC
from partmatch.extractors import extract_opamp
from partmatch.importance import Importance
from partmatch.manufacturers import MANUFACTURERS, PATTERNS
from partmatch.matching import similarity
from partmatch.metadata import (
    ComponentTypeMetadata, MetadataRegistry, build_default_registry, get_registry,
    register_type_metadata, reset_registry,
)
from partmatch.tolerance import percentage_tolerance

# One valid part number for every classifier pattern of a type some calculator claims;
# TestShadowing checks the coverage against the manufacturer table
SHADOWING_SAMPLES = [
    # Microchip
    "PIC16F877A-I/P", "ATMEGA328P-AU", "AT24C256C-SSHL-T", "AT25SF041B", "AT25010B",
    "24LC256-I/SN", "MCP6002-I/SN", "MCP1700T-3302E/TT", "MCP9700A-E/TO",
    # ST
    "STM32F103C8T6", "L7805CV", "LD1117S33TR", "LD39015M33R", "STP55NF06", "TSV912IDT",
    "M24C02-WMN6TP",
    # Espressif, Nordic, GigaDevice
    "ESP32-WROOM-32E", "NRF52832-QFAA", "GD25Q128ESIG", "GD32F303RCT6",
    # Samsung
    "CL10B104KB8NNNC", "LM301B",
    # TI
    "LM358N", "TL072CP", "OPA2134PA", "TLV9002IDR", "NE5532P", "UA7805CKCS", "LM7905CT",
    "LM317T", "LM1117IMPX-3.3", "LM2596S-5.0", "TLV1117-33IDCYR", "TPS54331DR",
    "MSP430G2553IPW20R", "SN74HC595N", "TMP117AIDRVR", "LM35DZ", "LM75BDP", "HDC1080DMBR",
    # Analog Devices
    "AD8605ARTZ", "ADA4841-1YRJZ", "LTC6081HMS8", "ADP3338AKCZ-3.3", "LT1763CS8", "LTC3780EG",
    # Infineon
    "IRF540NPBF", "IPD50N06S4L-08", "IPP60R190C6", "BSC016N06NS", "BSS84",
    "XMC1100-T016F0064", "TLE4275G",
    # Alpha and Omega
    "AO3400A",
    # onsemi
    "NCP1117ST33T3G", "MC7805CTG", "NCP167AMX330TBG", "NTD5867NLT4G", "FQP30N06L", "FDN337N",
    "MMBT3904LT1G", "MUR120G", "MBR0520LT1G", "1N4728A", "MC74HC595ADR2G",
    # Nexperia
    "PMBT3904", "PBSS4041NX", "BC547B", "BC807-40", "BZX84C5V1", "PESD5V0S1BA", "BAV99",
    # Vishay
    "CRCW060310K0FKEA", "1N4007", "BAT54S", "SS34", "SI2302CDS", "2N7002", "2N3904", "TLHR5400",
    # Diodes Incorporated, AMS
    "DMN3404L-7", "AP7361C-33E", "AZ1117CH-3.3", "RL207", "AMS1117-3.3",
    # Multi-source logic
    "74HC595D", "CD4051BE",
    # Passives
    "RC0603FR-0710KL", "RC1608J103CS", "CC0603KRX7R9BB104", "ERJ-3EKF1002V", "EEE-FK1V101P",
    "ECA-1HM100", "CR0603-FX-1002ELF", "SRR1260-100M", "GRM188R71H104KA93D", "LQG15HS10NJ02D",
    "C1608X7R1H104K080AA", "MLF1608A1R0K", "C0603C104K5RACTU", "T491A106K016AT",
    "XAL4020-222MEB", "DO3316P-103MLB",
    # Memory
    "MT25QL128ABA1EW9", "MT29F4G08ABADAWP", "MT48LC16M16A2P-6A", "N25Q128A13ESE40",
    "M25P16-VMN6TP", "W25Q128JVSIQ", "W9825G6KH-6", "IS25LP128-JBLE", "IS42S16320D-7TL",
    "IS61WV25616BLL-10TLI", "MX25L12835FM2I-10G",
    # Sensors
    "BME280", "SHT31-DIS", "MPU-6050", "ACS712ELCTR-05B-T",
    # LEDs
    "APT1608SGC", "LS R976", "LCW E6SF", "XPERED-L1-0000-00801", "L130-5580001400001",
    "NCSW170", "150060RS75000",
    # Connectors
    "61300411121", "53047-0410", "22-23-2021", "B4B-XH-A",
    # WCH
    "CH32V003F4P6",
]


def _group_by_type(mpns):
    grouped = {}
    for mpn in mpns:
        grouped.setdefault(classify(mpn).type_tag, []).append(mpn)
    return grouped


# Samples keyed by classified type, plus an IC no calculator claims
SAMPLE_PARTS = _group_by_type([*SHADOWING_SAMPLES, "NE555P"])


EXPECTED_ORDER = [
    "VoltageRegulator", "LED", "OpAmp", "LogicIC", "Memory", "Diode", "Sensor", "Mosfet",
    "Transistor", "Microcontroller", "Resistor", "Capacitor", "Inductor", "Connector",
]


@pytest.fixture(autouse=True)
def fresh_state():
    reset_registry()
    reset_calculators()
    yield
    reset_registry()
    reset_calculators()


def _by_name(name):
    return next(c for c in get_calculators() if c.name == name)


class ZeroCalculator(SimilarityCalculator):
    """Claims resistors and scores everything 0.0."""

    name = "zero"
    claims = frozenset({"RESISTOR"})

    def similarity(self, mpn_a, mpn_b, profile=None):
        return 0.0


class TestCalculatorList:
    """Tests for build_calculators() and the cached list."""

    def test_order(self):
        assert [c.name for c in get_calculators()] == EXPECTED_ORDER

    def test_each_calculator_claims_its_own_type(self):
        claimed = [next(iter(c.claims)) for c in get_calculators()]
        assert all(len(c.claims) == 1 for c in get_calculators())
        assert len(set(claimed)) == len(claimed)
        assert IC.base not in claimed
        assert CRYSTAL.base not in claimed

    def test_symmetric_flags(self):
        symmetric = {c.name for c in get_calculators() if c.symmetric}
        assert symmetric == {"LED", "OpAmp", "LogicIC", "Sensor", "Inductor", "Connector"}

    def test_cached(self):
        assert get_calculators() is get_calculators()

    def test_registry_metadata_for_passives(self):
        registry = get_registry()
        assert _by_name("Resistor").metadata is registry.lookup(RESISTOR)
        assert _by_name("Capacitor").metadata is registry.lookup(CAPACITOR)
        assert _by_name("OpAmp").metadata is part_metadata.OPAMP_PART

    def test_part_metadata_uses_default_profile(self):
        for calculator in get_calculators():
            assert calculator.metadata.default_profile.name == "REPLACEMENT"

    def test_requires_passive_metadata(self):
        with pytest.raises(ValueError):
            build_calculators(MetadataRegistry())
        resistor_only = MetadataRegistry({RESISTOR: build_default_registry().lookup(RESISTOR)})
        with pytest.raises(ValueError, match="CAPACITOR"):
            build_calculators(resistor_only)

    def test_reset_picks_up_registered_metadata(self):
        custom = (
            ComponentTypeMetadata.builder(RESISTOR)
            .add_spec("resistance", Importance.CRITICAL, percentage_tolerance(5.0))
            .build()
        )
        register_type_metadata(RESISTOR, custom)
        # The cached list predates the registration until it is rebuilt
        reset_calculators()
        assert _by_name("Resistor").metadata is custom
        assert similarity("RC0603FR-0710KL", "RC0603JR-0710KL") == 1.0

    def test_spec_calculator_requires_metadata(self):
        with pytest.raises(ValueError):
            SpecCalculator("broken", OPAMP, None, extract_opamp)

    def test_base_calculator_is_abstract(self):
        with pytest.raises(NotImplementedError):
            SimilarityCalculator().similarity("A", "B")


class TestFindCalculator:
    """Tests for first-applicable dispatch."""

    def test_single_type(self):
        assert find_calculator(RESISTOR, None).name == "Resistor"
        assert find_calculator(None, CONNECTOR).name == "Connector"

    def test_subtype_dispatches_on_base(self):
        assert find_calculator(CAPACITOR.subtype("CERAMIC_MURATA"), None).name == "Capacitor"

    def test_either_side_first_in_order(self):
        assert find_calculator(CAPACITOR, RESISTOR).name == "Resistor"
        assert find_calculator(TRANSISTOR, MOSFET).name == "Mosfet"

    @pytest.mark.parametrize("type_a,type_b", [(None, None), (IC, None), (CRYSTAL, IC)])
    def test_nothing_applicable(self, type_a, type_b):
        assert find_calculator(type_a, type_b) is None

    def test_explicit_list(self):
        assert find_calculator(RESISTOR, None, [ZeroCalculator()]).name == "zero"
        assert find_calculator(RESISTOR, None, []) is None

    def test_is_applicable_none(self):
        assert not _by_name("Resistor").is_applicable(None)


class TestShadowing:
    """Tests that no calculator claims types it cannot score."""

    def test_samples_cover_every_claimed_pattern(self):
        claimed = set().union(*(c.claims for c in get_calculators()))
        identifiers = [normalize(mpn) for mpn in SHADOWING_SAMPLES]
        uncovered = []
        for manufacturer in MANUFACTURERS:
            for tag, patterns in manufacturer.create_handler().type_patterns:
                if tag.base not in claimed:
                    continue
                for pattern in PATTERNS.patterns_for(tag, manufacturer.key):
                    if not any(pattern.fullmatch(identifier) for identifier in identifiers):
                        uncovered.append((manufacturer.key, str(tag), pattern.pattern))
        assert uncovered == []

    def test_samples_classify_as_claimed_types(self):
        claimed = set().union(*(c.claims for c in get_calculators()))
        unclaimed = [mpn for mpn in SHADOWING_SAMPLES if classify(mpn).base_type is None]
        assert unclaimed == []
        assert all(classify(mpn).type_tag.base in claimed for mpn in SHADOWING_SAMPLES)

    def test_builtin_list_has_no_violations(self):
        assert shadowing_violations(get_calculators(), SAMPLE_PARTS) == []

    @pytest.mark.parametrize("mpn", [
        "TPS54331DR", "TPS62130RGT", "ADP3338AKCZ", "LT1763CS8", "LTC3780EG", "TLE4275G",
        "AP7361C", "LD39015M33R", "NTD5867NL", "FDS6680A", "IPD50N06S4", "XMC1100",
        "ADA4841", "LTC6081", "MLF2012A1R0K", "PBSS4041", "BC807",
    ])
    def test_claimed_parts_score_against_themselves(self, mpn):
        calculator = find_calculator(classify(mpn).type_tag, None)
        assert calculator is not None
        assert calculator.similarity(mpn, mpn) > 0.0

    def test_base_number_matches_ordering_code(self):
        assert similarity("TPS54331", "TPS54331DR") == pytest.approx(1.0)
        assert similarity("LT1763CS8", "LT1763CS8-3.3") < 1.0

    def test_over_claiming_calculator_detected(self, caplog):
        over_claimer = SpecCalculator(
            "OverClaim", OPAMP, part_metadata.OPAMP_PART, extract_opamp, claims=frozenset({"OPAMP", "IC"}),
        )
        violations = shadowing_violations([over_claimer], SAMPLE_PARTS)
        assert violations == [(over_claimer, IC, "NE555P")]
        assert "NE555P" in caplog.text

    def test_over_claimer_hides_default_scoring(self):
        over_claimer = SpecCalculator(
            "OverClaim", OPAMP, part_metadata.OPAMP_PART, extract_opamp, claims=frozenset({"OPAMP", "IC"}),
        )
        assert similarity("NE555P", "NE555DR") == pytest.approx(0.8)
        assert similarity("NE555P", "NE555DR", calculators=(over_claimer, *get_calculators())) == 0.0

    def test_zero_score_is_final(self):
        calculators = (ZeroCalculator(), *get_calculators())
        assert similarity("RC0603FR-0710KL", "CRCW060310K0FKEA") == 1.0
        assert similarity("RC0603FR-0710KL", "CRCW060310K0FKEA", calculators=calculators) == 0.0


class TestSpecCalculator:
    """Tests for extractor + metadata scoring."""

    VALUES = {"XA": 100.0, "XB": 112.0}

    @pytest.fixture
    def calculator(self):
        metadata = (
            ComponentTypeMetadata.builder(CRYSTAL)
            .add_spec("frequency", Importance.CRITICAL, percentage_tolerance(10.0))
            .build()
        )

        def extract(identifier):
            value = self.VALUES.get(identifier)
            return {"frequency": value} if value is not None else {}

        return SpecCalculator("Crystal", CRYSTAL, metadata, extract)

    def test_claims_default_to_base(self, calculator):
        assert calculator.claims == frozenset({"CRYSTAL"})
        assert calculator.is_applicable(CRYSTAL.subtype("EPSON"))
        assert calculator.symmetric

    def test_symmetric_takes_the_lower_direction(self, calculator):
        # 100 -> 112 is 12% off (0.6); 112 -> 100 is about 10.7% off (about 0.86)
        assert calculator.similarity("XA", "XB") == pytest.approx(0.6)
        assert calculator.similarity("XB", "XA") == pytest.approx(0.6)

    def test_undecodable_scores_zero(self, calculator):
        assert calculator.similarity("XA", "XC") == 0.0
        assert calculator.similarity("", "XA") == 0.0

    def test_specs_normalizes(self, calculator):
        assert calculator.specs("x-a") == {"frequency": 100.0}
        assert calculator.specs(None) == {}

    def test_resistor_equivalents(self):
        assert _by_name("Resistor").similarity("RC0603FR-0710KL", "CRCW060310K0FKEA") == 1.0

    def test_resistor_value_mismatch(self):
        result = _by_name("Resistor").similarity("RC0603FR-0710KL", "RC0603FR-0722KL")
        # resistance (critical) fails; tolerance, package, power and composition match
        assert result == pytest.approx(1.69 / 2.69)

    def test_capacitor_direction(self):
        capacitor = _by_name("Capacitor")
        assert capacitor.similarity("GRM188R71C104KA01D", "GRM188R71H104KA93D") == 1.0
        assert capacitor.similarity("GRM188R71H104KA93D", "GRM188R71C104KA01D") == pytest.approx(2.81 / 3.81)

    def test_cross_type_pair_scores_zero(self):
        assert _by_name("Resistor").similarity("RC0603FR-0710KL", "GRM188R71H104KA93D") == 0.0

    def test_transistor_family_equivalents(self):
        transistor = _by_name("Transistor")
        through_hole_vs_smd = transistor.similarity("2N3904", "MMBT3904")
        assert 0.9 < through_hole_vs_smd < 1.0
        # A mismatched critical spec scores zero for that spec, not for the pair
        assert transistor.similarity("2N3904", "2N3906") < 0.75

    def test_led_color_mismatch(self):
        assert _by_name("LED").similarity("APT1608SGC", "APT1608SRC") < 0.75
        assert _by_name("LED").similarity("APT1608SRC", "150060RS75000") < 1.0

    def test_repr(self):
        assert repr(_by_name("Resistor")) == "<SpecCalculator Resistor>"


class TestDefaultCalculator:
    """Tests for the prefix/number/suffix scorer."""

    @pytest.mark.parametrize("a,b,expected", [
        ("XYZ123A", "XYZ123B", 0.8),
        ("ABC100", "ABC200", 0.75),
        ("NE555P", "NE555DR", 0.8),
    ])
    def test_scores(self, a, b, expected):
        assert DEFAULT_CALCULATOR.similarity(a, b) == pytest.approx(expected)

    def test_identical_and_empty(self):
        assert DEFAULT_CALCULATOR.similarity("NE555P", "ne555-p") == 1.0
        assert DEFAULT_CALCULATOR.similarity("", "NE555P") == 0.0
        assert DEFAULT_CALCULATOR.similarity(None, None) == 0.0

    def test_prefix_mismatch(self):
        assert DEFAULT_CALCULATOR.similarity("ABC100", "XYZ100") < DEFAULT_CALCULATOR.similarity("ABC100", "ABD100")

    def test_large_numbers_on_log_scale(self):
        assert DEFAULT_CALCULATOR.similarity("X10000", "X10100") > 0.7

    def test_claims_nothing(self):
        assert isinstance(DEFAULT_CALCULATOR, DefaultSimilarityCalculator)
        assert not DEFAULT_CALCULATOR.is_applicable(IC)
        assert DEFAULT_CALCULATOR.name == "default"


class TestLegacySimilarity:
    """Tests for the classification-based heuristic."""

    def test_same_type_manufacturer_series(self):
        assert legacy_similarity("LM358N", "LM358DR") == pytest.approx(0.9)

    def test_same_type_only(self):
        assert legacy_similarity("RC0603FR-0710KL", "CRCW060310K0FKEA") == pytest.approx(0.4)

    def test_identical_and_empty(self):
        assert legacy_similarity("LM358N", "lm358-n") == 1.0
        assert legacy_similarity("", "LM358N") == 0.0

    def test_unknown_parts(self):
        assert legacy_similarity("ZZZ1", "QQQ2") == 0.0
