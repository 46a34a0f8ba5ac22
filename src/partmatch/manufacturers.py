"""Manufacturer identities and their stateless type handlers.

MANUFACTURERS is an ordered, closed tuple. Declaration order is significant: the first
entry whose prefix pattern matches a normalized part identifier owns it. UNKNOWN is
always last and matches everything, so every identifier resolves to exactly one entry.

Each entry carries a factory producing a ManufacturerHandler. Handlers declare which
component types the manufacturer's part numbers encode (as full-match regexes) and
register those patterns in the shared PatternRegistry.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import partial
from typing import Callable

from .component_types import (
    TypeTag, RESISTOR, CAPACITOR, INDUCTOR, DIODE, LED, TRANSISTOR, MOSFET,
    OPAMP, VOLTAGE_REGULATOR, LOGIC_IC, MEMORY, MICROCONTROLLER, SENSOR,
    CRYSTAL, CONNECTOR, ANALOG_IC, DIGITAL_IC, IC,
)
from .patterns import PatternRegistry, PatternRegistryBuilder

logger = logging.getLogger(__name__)

TypePatterns = tuple[tuple[TypeTag, tuple[str, ...]], ...]


class ManufacturerHandler:
    """Declares the (type tag, patterns) table for one manufacturer.

    Table order matters: when two tags of equal specificity match, the one
    declared first wins. The default matches() defers to the shared registry.
    """

    def __init__(self, key: str, type_patterns: TypePatterns = ()):
        self.key = key
        self.type_patterns = type_patterns

    def supported_types(self) -> tuple[TypeTag, ...]:
        seen: dict[TypeTag, None] = {}
        for tag, _ in self.type_patterns:
            seen.setdefault(tag, None)
        return tuple(seen)

    def register_patterns(self, builder: PatternRegistryBuilder) -> None:
        for tag, patterns in self.type_patterns:
            for pattern in patterns:
                builder.add_pattern(tag, self.key, pattern)

    def matches(self, identifier: str, tag: TypeTag, registry: PatternRegistry) -> bool:
        return registry.matches(identifier, tag, self.key)


class UnknownHandler(ManufacturerHandler):
    """Handler for the catch-all entry: supports no types and never matches."""

    def __init__(self, key: str = "UNKNOWN", type_patterns: TypePatterns = ()):
        super().__init__(key, ())

    def matches(self, identifier: str, tag: TypeTag, registry: PatternRegistry) -> bool:
        return False


@dataclass(frozen=True)
class Manufacturer:
    """One manufacturer identity: prefix pattern, display name, handler factory."""
    key: str
    pattern: re.Pattern
    display_name: str
    handler_factory: Callable[[], ManufacturerHandler] = field(compare=False, repr=False)

    def matches(self, identifier: str) -> bool:
        return self.pattern.match(identifier) is not None

    def create_handler(self) -> ManufacturerHandler:
        return self.handler_factory()

    @property
    def is_unknown(self) -> bool:
        return self.key == UNKNOWN_KEY

    def __str__(self) -> str:
        return self.display_name


UNKNOWN_KEY = "UNKNOWN"


def _entry(
    key: str,
    pattern: str,
    display_name: str,
    *type_patterns: tuple[TypeTag, tuple[str, ...]],
    handler_cls: type[ManufacturerHandler] = ManufacturerHandler,
) -> Manufacturer:
    return Manufacturer(
        key=key,
        pattern=re.compile(f"(?:{pattern})", re.IGNORECASE),
        display_name=display_name,
        handler_factory=partial(handler_cls, key, tuple(type_patterns)),
    )


def _subtyped(base: TypeTag, variant: str, *patterns: str) -> tuple[tuple[TypeTag, tuple[str, ...]], ...]:
    """Register the same patterns under a manufacturer subtype and its base type."""
    return ((base.subtype(variant), patterns), (base, patterns))


# =============================================================================
# ORDERING-CODE FRAGMENTS
# =============================================================================
# Patterns of a type a similarity calculator scores only match numbers whose specs
# the matching decoder can read, so the fragments below mirror the decoder tables.

# JEDEC small-signal and power BJT type numbers with known ratings
_JEDEC_BJT = (
    r"(?:390[3-6]|2222|2907|2219|2905|440[0-3]|412[46]|508[6-9]|2369|2484|555[01]|540[01]|3055|2955)"
)
# BC5xx/BC8xx/BC3xx type digits with known ratings
_BC_TYPES = r"(?:0[78]|1[78]|2[78]|3[78]|4[6-9]|50|5[6-9]|60)"
# JIS/EIA rated-voltage codes
_JIS_VOLTAGE = r"(?:0[EGJ]|1[ACEVHJK]|2[ACDEFVGHWJ]|3A)"
# Capacitance and resistance value codes
_PF_CODE = r"(?:\d{3}|\dR\d)"
_OHM_CODE = r"(?:\d{3,4}|\d*R\d+)"
_TOLERANCE = r"[BCDFGJK]"
# Kingbright color codes, found anywhere after the size digits
_KINGBRIGHT_COLOR = (
    r"(?:SURC|SYKC|ZGKC|SECK|SGC|ZGC|CGK|SEC|SRC|SYC|QBC|VBC|PBC|QBD|PWC|QWF|CWC|SRD|SGD|SYD|LGD|EC|ID|HD|YC|GD)"
)
# Connector headers with a zero circuit count do not exist
_NONZERO2 = r"(?!00)\d{2}"


# =============================================================================
# MANUFACTURER TABLE (ORDER IS SIGNIFICANT)
# =============================================================================
# Microcontroller and memory houses first, then analog/power, discrete semiconductors,
# multi-source logic, passives, memory, sensors, optoelectronics, interconnect, timing.
# Samsung sits ahead of TI so its LM301B/LM281B LEDs are not read as TI linear parts.

MANUFACTURERS: tuple[Manufacturer, ...] = (
    _entry(
        "MICROCHIP", r"PIC\d|DSPIC|ATMEGA|ATTINY|AT2[45]|24(?:AA|LC|FC)|MCP", "Microchip Technology",
        (MICROCONTROLLER, (r"(?:PIC|DSPIC)\d{2}[A-Z]+\d+.*", r"AT(?:MEGA|TINY)\d+.*")),
        (MEMORY, (
            r"AT24C?\d{2,}.*", r"AT25(?:SF|DF|XE)\d+.*", r"AT25C?\d{2,}.*", r"24(?:AA|LC|FC)\d{2,}.*",
        )),
        (OPAMP, (r"MCP6\d{2,3}.*",)),
        (VOLTAGE_REGULATOR, (r"MCP1[67]\d{2}.*",)),
        (SENSOR, (r"MCP9[78]\d{2}.*",)),
    ),
    _entry(
        "ST", r"STM(?:32|8)|L7[89]|LD1117|LD39|TSV\d|ST[PFDBW]\d|M24C", "STMicroelectronics",
        (MICROCONTROLLER, (r"STM(?:32|8)[A-Z]\d+.*",)),
        (VOLTAGE_REGULATOR, (r"L7[89](?:L|M)?\d{2}.*", r"LD1117.*", r"LD39\d{3}.*")),
        *_subtyped(MOSFET, "ST", r"ST[PFDBW]\d+[NP].*"),
        (OPAMP, (r"TSV\d{3}.*",)),
        (MEMORY, (r"M24C\d{2,}.*",)),
    ),
    _entry(
        "ESPRESSIF", r"ESP(?:32|8266)", "Espressif Systems",
        (MICROCONTROLLER, (r"ESP(?:32|8266).*",)),
    ),
    _entry(
        "NORDIC", r"NRF\d", "Nordic Semiconductor",
        (MICROCONTROLLER, (r"NRF5\d{4}.*",)),
    ),
    _entry(
        "GIGADEVICE", r"GD(?:25|32)", "GigaDevice",
        (MEMORY, (r"GD25[A-Z]+\d+.*",)),
        (MICROCONTROLLER, (r"GD32[A-Z]\d+.*",)),
    ),
    _entry(
        "SAMSUNG", r"CL(?:03|05|10|21|31|32|43)[A-Z]|LM(?:301|281)B", "Samsung Electro-Mechanics",
        *_subtyped(
            CAPACITOR, "CERAMIC_SAMSUNG",
            rf"CL\d{{2}}[CBAXF]{_PF_CODE}[BCDFGJKMZ][RQPOALBCDEGHI].*",
        ),
        (LED, (r"LM(?:301|281)B.*",)),
    ),
    _entry(
        "TI", r"TPS|TLV|TL0[78]|TL43|LM|SN(?:74|54)|MSP430|OPA|INA|UA78|NE5|TMP|HDC|CD74", "Texas Instruments",
        (OPAMP, (
            r"LM(?:358|324|741|833|2902|2904|4562)[A-Z0-9]*", r"TL0[78][124][A-Z0-9]*",
            r"OPA\d{3,4}[A-Z0-9]*", r"TLV9\d{2,3}[A-Z0-9]*", r"NE553[24][A-Z0-9]*",
        )),
        (VOLTAGE_REGULATOR, (
            r"(?:LM|UA)78(?:L|M)?\d{2}.*", r"LM79\d{2}.*", r"LM3[13]7.*", r"LM1117.*",
            r"LM2596.*", r"TLV1117.*", r"TPS[567][A-Z]?\d{3}.*",
        )),
        (MICROCONTROLLER, (r"MSP430.*",)),
        (LOGIC_IC, (r"(?:SN|CD)(?:74|54)[A-Z]*(?:[123]G)?\d{2}.*",)),
        (SENSOR, (r"TMP\d{2,3}.*", r"LM35(?:[A-Z].*)?", r"LM75(?:[A-Z].*)?", r"HDC\d{4}.*")),
        (ANALOG_IC, (r"INA\d{3}.*", r"TL431.*")),
        (IC, (r"(?:NE|LM|TLC)555.*", r"NE556.*")),
    ),
    _entry(
        "ANALOG_DEVICES", r"ADA4|ADP|AD\d|LTC?\d", "Analog Devices",
        (OPAMP, (r"AD8\d{2,3}[A-Z0-9]*", r"ADA4\d{3}[A-Z0-9]*", r"LTC6\d{3}[A-Z0-9]*")),
        (VOLTAGE_REGULATOR, (r"ADP\d{3,4}.*", r"LT1\d{3}.*", r"LTC?3\d{3}.*")),
        (ANALOG_IC, (r"AD\d{4}.*",)),
    ),
    _entry(
        "INFINEON", r"IR[FL]|IP[DPBAW]\d|BSC\d|BSS\d|TLE\d|XMC\d", "Infineon Technologies",
        *_subtyped(
            MOSFET, "INFINEON",
            r"IR[FL][A-Z]*\d+.*", r"IP[DPBAW]\d{1,4}[NP]\d{2}.*", r"IP[DPBAW]\d{2}R\d{3}.*",
            r"BSC\d{1,4}N\d{2}.*", r"BSS\d+.*",
        ),
        (MICROCONTROLLER, (r"XMC\d{4}.*",)),
        (VOLTAGE_REGULATOR, (r"TLE4\d{3}.*",)),
    ),
    _entry(
        "ALPHA_OMEGA", r"AO[DNIT]?\d{4}", "Alpha and Omega Semiconductor",
        (MOSFET, (r"AO[DNIT]?\d{4}.*",)),
    ),
    _entry(
        "ON_SEMI", r"NCP|NCV|MC7[489]|NT[DR]\d|FQ[PNDUAB]\d|FD[SNC]\d|MMBT|MUR\d|MBR\d|1N47", "ON Semiconductor",
        (VOLTAGE_REGULATOR, (r"NC[PV]1117.*", r"MC7[89](?:L|M)?\d{2}.*", r"NCP\d{3,4}.*")),
        (MOSFET, (r"NT[DR]\d+[NP].*", r"FQ[PNDUAB]\d+[NP]\d+.*", r"FD[SNC]\d+.*")),
        (TRANSISTOR, (rf"MMBT{_JEDEC_BJT}.*",)),
        (DIODE, (r"MUR\d{3,4}.*", r"MBR\d{3,4}.*", r"1N47\d{2}.*")),
        (LOGIC_IC, (r"MC74[A-Z]*(?:[123]G)?\d{2}.*",)),
    ),
    _entry(
        "NEXPERIA", r"PMBT|PBSS|BZX|BC[358]\d{2}|PESD|BA[SV]\d", "Nexperia",
        (TRANSISTOR, (rf"PMBT{_JEDEC_BJT}.*", r"PBSS[45]\d{3}.*", rf"BC[358]{_BC_TYPES}.*")),
        (DIODE, (r"BZX\d{2}.*", r"PESD.*", r"BA[SV]\d{2}.*")),
    ),
    _entry(
        "VISHAY", r"CRCW|1N\d|BAT\d|SIR?\d|SS\d|2N\d|TLH[RGB]\d", "Vishay",
        *_subtyped(RESISTOR, "CHIP_VISHAY", rf"CRCW\d{{4}}(?:\d+[RKM]\d*|\d{{3,4}}){_TOLERANCE}.*"),
        (DIODE, (
            r"1N(?:400[1-7]|540[0-8]|4148|914|4448|58(?:1[789]|2[012])|52\d{2}|5711|6263).*",
            r"BAT\d{2}.*", r"SS\d{2,3}.*",
        )),
        (MOSFET, (r"SIR?\d{4}.*", r"2N700[02].*")),
        (TRANSISTOR, (rf"2N{_JEDEC_BJT}.*",)),
        (LED, (r"TLH(?:R540|G580|B580).*",)),
    ),
    _entry(
        "DIODES_INC", r"DM[NPG]\d|AP\d{4}|AZ1117|ZXCT|RL20\d", "Diodes Incorporated",
        (MOSFET, (r"DM[NPG]\d{2,}.*",)),
        (VOLTAGE_REGULATOR, (r"AP\d{4}.*", r"AZ1117.*")),
        (DIODE, (r"RL20[1-7].*",)),
        (ANALOG_IC, (r"ZXCT\d+.*",)),
    ),
    _entry(
        "ADVANCED_MONOLITHIC", r"AMS1[01]\d{2}", "Advanced Monolithic Systems",
        (VOLTAGE_REGULATOR, (r"AMS1(?:117|08[456]).*",)),
    ),
    _entry(
        "LOGIC_IC", r"(?:74|54)[A-Z]{0,4}\d|(?:CD|HEF)4\d{3}", "Logic IC (multi-source)",
        (LOGIC_IC, (r"(?:74|54)[A-Z]{0,4}(?:[123]G)?\d{2}.*", r"(?:CD|HEF)4\d{3}.*")),
    ),
    _entry(
        "YAGEO", r"R[CT]\d{4}|[CA]C\d{4}", "Yageo",
        *_subtyped(
            RESISTOR, "CHIP_YAGEO",
            rf"R[CT]\d{{4}}{_TOLERANCE}[A-Z]{{1,2}}\d{{2}}\d+[RKM]\d*.*",
            rf"RC(?:1005|1608|2012|3216|3225|5025|6432)[BDFGJ]{_OHM_CODE}.*",
        ),
        *_subtyped(
            CAPACITOR, "CERAMIC_YAGEO",
            rf"[CA]C\d{{4}}[BCDFGJKMZ][A-Z](?:NPO|COG|X7R|X5R|X7S|X6S|Y5V)\d[A-Z]{{2}}{_PF_CODE}.*",
        ),
    ),
    _entry(
        "PANASONIC", r"ER[JA]\d|EE[EU]|ECA", "Panasonic",
        *_subtyped(RESISTOR, "CHIP_PANASONIC", rf"ER[JA]\d{{1,2}}[A-Z]{{1,3}}[BCDFGJ]{_OHM_CODE}.*"),
        *_subtyped(
            CAPACITOR, "ELECTROLYTIC_PANASONIC",
            rf"(?:EE[EU](?:[A-Z]{{2}})?|ECA){_JIS_VOLTAGE}[A-Z]{{0,2}}{_PF_CODE}.*",
        ),
    ),
    _entry(
        "BOURNS", r"CR\d{4}|SR[RNP]\d", "Bourns",
        (RESISTOR, (rf"CR\d{{4}}[BDFJ][A-Z]{_OHM_CODE}.*",)),
        (INDUCTOR, (r"SR[RNP]\d{4}[A-Z]{0,2}(?:\d{3}|\d*R\d+).*",)),
    ),
    _entry(
        "MURATA", r"G[RCJ]M\d|LQ[GWMH]\d", "Murata Manufacturing",
        *_subtyped(
            CAPACITOR, "CERAMIC_MURATA",
            r"G[RCJ]M\d{2}[0-9A-Z](?:5C|R7|R6|C7|C8|D7|F5|C6|E7|L8|B1|B3|F1)"
            rf"{_JIS_VOLTAGE}(?:\d{{3}}|\dR\d|R\d{{2}})[BCDFGJKMZ].*",
        ),
        *_subtyped(INDUCTOR, "MURATA", r"LQ[GWMH]\d{2}[A-Z]{2}(?:\d*[NR]\d+|\d+[NR]|\d{3}).*"),
    ),
    _entry(
        "TDK", r"C\d{4}(?:X[5-8][RSTU]|C0G|NP0|JB|CH)\d|MLF\d|VLS\d", "TDK Corporation",
        *_subtyped(
            CAPACITOR, "CERAMIC_TDK",
            rf"C\d{{4}}(?:X[5-8][RSTU]|C0G|NP0|JB|CH){_JIS_VOLTAGE}{_PF_CODE}[BCDFGJKM].*",
        ),
        (INDUCTOR, (r"(?:MLF|VLS)\d{4}[A-Z]*(?:\d{3}|\d*R\d+).*",)),
    ),
    _entry(
        "KEMET", r"C\d{4}C\d|T4\d{2}[A-Z]", "KEMET Electronics",
        (CAPACITOR.subtype("CERAMIC_KEMET"), (rf"C\d{{4}}C{_PF_CODE}[BCDFGJKMZ][1-9A][GRPUV].*",)),
        (CAPACITOR.subtype("TANTALUM_KEMET"), (r"T4\d{2}[A-Z]\d{3}[KMJ]\d{3}.*",)),
        (CAPACITOR, (rf"C\d{{4}}C{_PF_CODE}[BCDFGJKMZ][1-9A][GRPUV].*", r"T4\d{2}[A-Z]\d{3}[KMJ]\d{3}.*")),
    ),
    _entry(
        "COILCRAFT", r"(?:XAL|XFL|XEL|LPS|MSS)\d|DO\d{4}", "Coilcraft",
        (INDUCTOR, (r"(?:XAL|XFL|XEL|LPS|MSS|DO)\d{4}[A-Z]?\d{3}.*",)),
    ),
    _entry(
        "MICRON", r"MT(?:25|29|4\d)|N25Q|M25P", "Micron Technology",
        (MEMORY, (
            r"MT25[A-Z][LU]\d+.*", r"MT29[A-Z]\d+[GMT].*", r"MT4\d[A-Z]+\d+M[A-Z]?\d+.*",
            r"N25Q\d+.*", r"M25P\d+.*",
        )),
    ),
    _entry(
        "WINBOND", r"W25[QXN]|W9\d", "Winbond",
        (MEMORY, (r"W25[QXN][A-Z]*\d+.*", r"W9\d{3}.*")),
    ),
    _entry(
        "ISSI", r"IS(?:25|42|43|61|62)", "ISSI",
        (MEMORY, (r"IS25[A-Z]{2}\d+.*", r"IS4[23][A-Z]+\d{5}.*", r"IS6[12][A-Z]+\d+.*")),
    ),
    _entry(
        "MACRONIX", r"MX(?:25|29|66)[A-Z]", "Macronix",
        (MEMORY, (r"MX(?:25|29|66)[A-Z]+\d+.*",)),
    ),
    _entry(
        "BOSCH", r"BM[EPIAGM]\d|BNO\d", "Bosch Sensortec",
        (SENSOR, (r"(?:BM[EPIAGM]|BNO)\d{3}.*",)),
    ),
    _entry(
        "SENSIRION", r"(?:SHT|SGP|SCD|STS|SDP)\d", "Sensirion",
        (SENSOR, (r"(?:SHT|SGP|SCD|STS|SDP)\d+.*",)),
    ),
    _entry(
        "INVENSENSE", r"(?:MPU|ICM)\d", "InvenSense",
        (SENSOR, (r"(?:MPU|ICM)\d{4,5}.*",)),
    ),
    _entry(
        "ALLEGRO", r"ACS\d|A49\d{2}", "Allegro MicroSystems",
        (SENSOR, (r"ACS\d{3}.*",)),
        (ANALOG_IC, (r"A49\d{2}.*",)),
    ),
    _entry(
        "KINGBRIGHT", r"APTD?\d|APH[A-Z]{1,3}\d|KPTD?\d|WP\d", "Kingbright",
        (LED, (rf"(?:APTD?|APH[A-Z]{{1,3}}|KPTD?|WP)\d{{3,4}}.*{_KINGBRIGHT_COLOR}.*",)),
    ),
    _entry(
        "OSRAM", r"L[SAWYOBTGR][A-Z]\d|LC[WRSY]E\d", "OSRAM Opto Semiconductors",
        (LED, (
            r"L[SAWYOBTG][A-Z]\d{3}.*",
            r"(?:LWE67C|LRE67C|LSE67B|LYE67B|L[WRSY]E6SF|LC[WRSY]E6SF).*",
        )),
    ),
    _entry(
        "CREE", r"XP[EG]", "Cree LED",
        (LED, (r"XP(?:ERED|GDWT).*",)),
    ),
    _entry(
        "LUMILEDS", r"L13[05]\d{4}", "Lumileds",
        (LED, (r"L1(?:305580|355780).*",)),
    ),
    _entry(
        "NICHIA", r"NCS[WR]\d", "Nichia",
        (LED, (r"NCS[WR]170.*",)),
    ),
    _entry(
        "WURTH", r"15\d{4}[A-Z]{2}|61[23]0\d{7}", "Wurth Elektronik",
        (LED, (r"15\d{4}(?:RS|GS|VS|BS|YS|WS|AS|OS)\d*",)),
        (CONNECTOR, (rf"61[23]0{_NONZERO2}\d{{5,}}",)),
    ),
    _entry(
        "MOLEX", r"(?:22|43|51|53|87)\d{6}", "Molex",
        (CONNECTOR, (
            rf"(?:53047|53048|53261|53398|51021|43045|43650|43025|87758|87832){_NONZERO2}\d{{2}}",
            rf"22(?:23|01)\d{_NONZERO2}\d",
        )),
    ),
    _entry(
        "JST", r"[BS]\d{1,2}B(?:XH|PH|ZR|EH|SH|GH|VH)", "JST",
        (CONNECTOR, (r"[BS]\d{1,2}B(?:XH|PH|ZR|EH|SH|GH|VH)[A-Z0-9]*",)),
    ),
    _entry(
        "ABRACON", r"AB(?:M\d|LS)", "Abracon",
        (CRYSTAL, (r"AB(?:M\d|LS)[A-Z0-9]*",)),
    ),
    _entry(
        "EPSON", r"(?:FA|FC)\d{3}|TSX\d", "Epson",
        (CRYSTAL, (r"(?:FA|FC)\d{3}.*", r"TSX\d.*")),
    ),
    _entry(
        "FTDI", r"FT\d{3}", "FTDI",
        (DIGITAL_IC, (r"FT\d{3}[A-Z0-9]*",)),
    ),
    _entry(
        "WCH", r"CH3\d{2}|CH32[VF]", "WCH",
        (DIGITAL_IC, (r"CH3\d{2}[A-Z0-9]*",)),
        (MICROCONTROLLER, (r"CH32[VF]\d+.*",)),
    ),
    # Catch-all: the empty pattern matches every identifier, so it must stay last
    Manufacturer(UNKNOWN_KEY, re.compile(""), "Unknown Manufacturer", UnknownHandler),
)

UNKNOWN = MANUFACTURERS[-1]


def validate_manufacturers(manufacturers: tuple[Manufacturer, ...]) -> None:
    """Raise ValueError unless keys are unique and the catch-all entry is last."""
    if not manufacturers or not manufacturers[-1].is_unknown:
        raise ValueError("Manufacturer list must end with the UNKNOWN catch-all entry")
    keys = [m.key for m in manufacturers]
    duplicates = {k for k in keys if keys.count(k) > 1}
    if duplicates:
        raise ValueError(f"Duplicate manufacturer keys: {sorted(duplicates)}")
    if any(m.is_unknown for m in manufacturers[:-1]):
        raise ValueError("UNKNOWN must appear exactly once, as the last entry")


def build_pattern_registry(manufacturers: tuple[Manufacturer, ...]) -> PatternRegistry:
    """Collect every handler's patterns and freeze them into one registry."""
    builder = PatternRegistryBuilder()
    for manufacturer in manufacturers:
        manufacturer.create_handler().register_patterns(builder)
    registry = builder.build()
    logger.debug(f"Pattern registry built: {len(registry)} patterns from {len(manufacturers)} manufacturers")
    return registry


def get_manufacturer(key: str, manufacturers: tuple[Manufacturer, ...] = MANUFACTURERS) -> Manufacturer:
    """Look up an entry by key (e.g. 'TI'); unknown keys resolve to UNKNOWN."""
    if key is None:
        raise ValueError("Manufacturer key must not be None")
    wanted = key.strip().upper()
    for manufacturer in manufacturers:
        if manufacturer.key == wanted:
            return manufacturer
    return manufacturers[-1]


validate_manufacturers(MANUFACTURERS)
PATTERNS = build_pattern_registry(MANUFACTURERS)
