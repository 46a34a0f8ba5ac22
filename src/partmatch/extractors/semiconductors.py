"""Spec decoding for discrete semiconductors: diodes, LEDs, MOSFETs and bipolar transistors.

Decoding combines structured part-number families (1N400x, FQP30N06, BC847B) with
small tables of well-known parts whose ratings are not encoded in the number.
"""

import re
from typing import Any

# =============================================================================
# DIODES
# =============================================================================

_1N400X = re.compile(r"^1N400([1-7])")
_1N540X = re.compile(r"^1N540([0-8])")
_1N4148 = re.compile(r"^1N(4148|914|4448)([A-Z]*)")
_1N47XX_ZENER = re.compile(r"^1N47(\d{2})")
_1N52XX_ZENER = re.compile(r"^1N52(\d{2})")
_1N581X = re.compile(r"^1N58([12])([0-9])")
_BAT = re.compile(r"^BAT(\d{2})")
_BAV_BAS = re.compile(r"^BA([SV])(\d{2})")
_SS_SCHOTTKY = re.compile(r"^SS(\d)(\d{1,2})")
_MBR = re.compile(r"^MBR[A-Z]?(\d{3,5})")
_MUR = re.compile(r"^MUR[A-Z]?(\d{3,4})")
_BZX_ZENER = re.compile(r"^BZX(\d{2})[A-Z]?(?:(\d+)(?:V(\d+))?)?")
_PESD = re.compile(r"^PESD(\d+)V(\d+)")

# Interchangeable numbering schemes, rewritten to the canonical family before decoding
_DIODE_EQUIVALENTS = (("RL20", "1N400"),)

_1N400X_VOLTAGES = {"1": 50, "2": 100, "3": 200, "4": 400, "5": 600, "6": 800, "7": 1000}
_1N540X_VOLTAGES = {
    "0": 50, "1": 100, "2": 200, "3": 300, "4": 400, "5": 500, "6": 600, "7": 800, "8": 1000,
}
# 1N5817..1N5819 (1 A) and 1N5820..1N5822 (3 A) Schottky rectifiers
_1N58XX_SCHOTTKY = {
    "17": (20, 1.0), "18": (30, 1.0), "19": (40, 1.0),
    "20": (20, 3.0), "21": (30, 3.0), "22": (40, 3.0),
}

# 1N4728 .. 1N4764, E24 zener voltages
_1N47XX_ZENER_VOLTAGES = (
    3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.2, 6.8, 7.5, 8.2, 9.1, 10, 11, 12, 13, 15, 16, 18,
    20, 22, 24, 27, 30, 33, 36, 39, 43, 47, 51, 56, 62, 68, 75, 82, 91, 100,
)
# 1N5221 .. 1N5267
_1N52XX_ZENER_VOLTAGES = (
    2.4, 2.5, 2.7, 2.8, 3.0, 3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.0, 6.2, 6.8, 7.5, 8.2, 8.7,
    9.1, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 22, 24, 25, 27, 28, 30, 33, 36, 39, 43,
    47, 51, 56, 60, 62, 68, 75,
)

# Signal/small Schottky diodes: family -> (type, voltage, current, package)
_KNOWN_DIODES: dict[str, tuple[str, float, float, str]] = {
    "BAT54": ("SCHOTTKY", 30, 0.2, "SOT-23"),
    "BAT43": ("SCHOTTKY", 30, 0.2, "DO-35"),
    "BAT85": ("SCHOTTKY", 30, 0.2, "DO-34"),
    "BAV99": ("SIGNAL", 75, 0.215, "SOT-23"),
    "BAV70": ("SIGNAL", 75, 0.215, "SOT-23"),
    "BAV21": ("SIGNAL", 200, 0.25, "DO-35"),
    "BAS16": ("SIGNAL", 75, 0.215, "SOT-23"),
    "BAS21": ("SIGNAL", 200, 0.2, "SOT-23"),
    "1N5711": ("SCHOTTKY", 70, 0.015, "DO-35"),
    "1N6263": ("SCHOTTKY", 60, 0.015, "DO-35"),
}

_BZX_PACKAGES = {"84": "SOT-23", "79": "DO-35", "55": "DO-35", "85": "DO-41"}


def _canonical_diode(identifier: str) -> str:
    for prefix, canonical in _DIODE_EQUIVALENTS:
        if identifier.startswith(prefix):
            return canonical + identifier[len(prefix):]
    return identifier


def _zener(voltages: tuple[float, ...], index: int, family: str) -> dict[str, Any]:
    specs: dict[str, Any] = {"type": "ZENER", "family": family, "package": "DO-41"}
    if 0 <= index < len(voltages):
        specs["zenerVoltage"] = float(voltages[index])
    return specs


def extract_diode(identifier: str) -> dict[str, Any]:
    """Decode diode type, ratings and family from common rectifier, signal, Schottky and zener numbers.

    Second-source numbering (RL207 for 1N4007, 1N914 for 1N4148) decodes to the same
    family and ratings as the part it replaces.
    """
    identifier = _canonical_diode(identifier)

    match = _1N400X.match(identifier)
    if match:
        return {
            "type": "RECTIFIER", "voltageRating": float(_1N400X_VOLTAGES[match.group(1)]),
            "currentRating": 1.0, "family": "1N400X", "package": "DO-41",
        }

    match = _1N540X.match(identifier)
    if match:
        return {
            "type": "RECTIFIER", "voltageRating": float(_1N540X_VOLTAGES[match.group(1)]),
            "currentRating": 3.0, "family": "1N540X", "package": "DO-201AD",
        }

    match = _1N4148.match(identifier)
    if match:
        number, suffix = match.groups()
        package = "SOD-323" if suffix.startswith("WS") else "SOD-123" if suffix.startswith("W") else "DO-35"
        return {
            "type": "SIGNAL", "voltageRating": 100.0, "currentRating": 0.15,
            "family": "1N4448" if number == "4448" else "1N4148", "package": package,
        }

    match = _1N581X.match(identifier)
    if match and match.group(1) + match.group(2) in _1N58XX_SCHOTTKY:
        voltage, current = _1N58XX_SCHOTTKY[match.group(1) + match.group(2)]
        return {
            "type": "SCHOTTKY", "voltageRating": float(voltage), "currentRating": current,
            "family": f"1N58{match.group(1)}X", "package": "DO-41" if current == 1.0 else "DO-201AD",
        }

    match = _1N47XX_ZENER.match(identifier)
    if match:
        return _zener(_1N47XX_ZENER_VOLTAGES, int(match.group(1)) - 28, "1N47XX")

    match = _1N52XX_ZENER.match(identifier)
    if match:
        specs: dict[str, Any] = _zener(_1N52XX_ZENER_VOLTAGES, int(match.group(1)) - 21, "1N52XX")
        specs["package"] = "DO-35"
        return specs

    match = _BZX_ZENER.match(identifier)
    if match:
        series, whole, fraction = match.groups()
        specs = {"type": "ZENER", "family": f"BZX{series}"}
        if whole:
            specs["zenerVoltage"] = float(f"{whole}.{fraction or '0'}")
        if series in _BZX_PACKAGES:
            specs["package"] = _BZX_PACKAGES[series]
        return specs

    for family, (diode_type, voltage, current, package) in _KNOWN_DIODES.items():
        if identifier.startswith(family):
            return {
                "type": diode_type, "voltageRating": float(voltage), "currentRating": current,
                "family": family, "package": package,
            }

    match = _BAT.match(identifier)
    if match:
        return {"type": "SCHOTTKY", "family": f"BAT{match.group(1)}"}

    match = _BAV_BAS.match(identifier)
    if match:
        return {"type": "SIGNAL", "family": f"BA{match.group(1)}{match.group(2)}"}

    match = _SS_SCHOTTKY.match(identifier)
    if match:
        current, voltage = match.groups()
        return {
            "type": "SCHOTTKY", "voltageRating": float(int(voltage) * 10),
            "currentRating": float(current), "family": "SS",
        }

    match = _MBR.match(identifier)
    if match:
        digits = match.group(1)
        # MBR0520 -> 0.5 A / 20 V, MBR340 -> 3 A / 40 V, MBR1045 -> 10 A / 45 V
        if digits.startswith("0"):
            current, voltage = int(digits[:2]) / 10, int(digits[2:])
        elif len(digits) == 3:
            current, voltage = int(digits[0]), int(digits[1:])
        else:
            current, voltage = int(digits[:2]), int(digits[2:])
        return {
            "type": "SCHOTTKY", "voltageRating": float(voltage), "currentRating": float(current),
            "family": "MBR",
        }

    match = _MUR.match(identifier)
    if match:
        digits = match.group(1)
        # MUR120 -> 1 A / 200 V, MUR1520 -> 15 A / 200 V
        split = 1 if len(digits) == 3 else 2
        return {
            "type": "ULTRAFAST", "voltageRating": float(int(digits[split:]) * 10),
            "currentRating": float(digits[:split]), "family": "MUR",
        }

    match = _PESD.match(identifier)
    if match:
        whole, fraction = match.groups()
        return {"type": "TVS", "voltageRating": float(f"{whole}.{fraction}"), "family": "PESD"}
    if identifier.startswith("PESD"):
        return {"type": "TVS", "family": "PESD"}

    return {}


# =============================================================================
# LEDS
# =============================================================================

# APT1608SGC, APHHS1005QBC/D, KPT-3216SURCK, WP7113SRC/D
_KINGBRIGHT = re.compile(r"^(APTD?|APH[A-Z]{0,3}|KPTD?|WP)(\d{3,4})([A-Z]*)")
# 150060RS75000: size, color
_WURTH_LED = re.compile(r"^15(\d{4})([A-Z]{2})")
# LS R976, LT T67C: color letter, package letter, series digits
_OSRAM_LED = re.compile(r"^L([SAWYOBTG])([A-Z])(\d{3})")
_COLOR_WORDS = re.compile(r"(RED|GREEN|BLUE|YELLOW|WHITE|AMBER|ORANGE)")

_KINGBRIGHT_SIZES = {"1005": "0402", "1608": "0603", "2012": "0805", "3216": "1206", "7113": "5MM"}
# Checked longest first so SURC wins over SRC
_KINGBRIGHT_COLORS = {
    "SURC": "RED", "SYKC": "YELLOW", "ZGKC": "GREEN", "SECK": "ORANGE",
    "SGC": "GREEN", "ZGC": "GREEN", "CGK": "GREEN", "SEC": "ORANGE",
    "SRC": "RED", "SYC": "YELLOW", "QBC": "BLUE", "VBC": "BLUE", "PBC": "BLUE", "QBD": "BLUE",
    "PWC": "WHITE", "QWF": "WHITE", "CWC": "WHITE", "SRD": "RED", "SGD": "GREEN", "SYD": "YELLOW",
    "LGD": "GREEN", "EC": "RED", "ID": "RED", "HD": "RED", "YC": "YELLOW", "GD": "GREEN",
}
_KINGBRIGHT_COLOR_CODES = sorted(_KINGBRIGHT_COLORS, key=len, reverse=True)

_WURTH_SIZES = {"0040": "0402", "0060": "0603", "0080": "0805", "0120": "1206"}
_WURTH_COLORS = {
    "RS": "RED", "GS": "GREEN", "VS": "GREEN", "BS": "BLUE", "YS": "YELLOW", "WS": "WHITE",
    "AS": "AMBER", "OS": "ORANGE",
}

# Interchangeable bin and packaging variants: member prefixes -> (series, color)
_LED_EQUIVALENT_GROUPS: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("TLHR540",), "TLHR5400", "RED"),
    (("TLHG580",), "TLHG5800", "GREEN"),
    (("TLHB580",), "TLHB5800", "BLUE"),
    (("LWE67C", "LWE6SF", "LCWE6SF"), "LWE67C", "WHITE"),
    (("LRE67C", "LRE6SF", "LCRE6SF"), "LRE67C", "RED"),
    (("LSE67B", "LSE6SF", "LCSE6SF"), "LSE67B", "RED"),
    (("LYE67B", "LYE6SF", "LCYE6SF"), "LYE67B", "YELLOW"),
    (("LGR971",), "LGR971", "GREEN"),
    (("LGB971",), "LGB971", "GREEN"),
    (("LGG971",), "LGG971", "GREEN"),
    (("XPERED",), "XPERED", "RED"),
    (("XPGDWT",), "XPGDWT", "WHITE"),
    (("L1305580",), "L1305580", "WHITE"),
    (("L1355780",), "L1355780", "WHITE"),
    (("LM301B",), "LM301B", "WHITE"),
    (("LM281B",), "LM281B", "WHITE"),
    (("NCSW170",), "NCSW170", "WHITE"),
    (("NCSR170",), "NCSR170", "RED"),
)

_OSRAM_COLORS = {
    "S": "RED", "A": "AMBER", "Y": "YELLOW", "T": "GREEN", "G": "GREEN",
    "B": "BLUE", "W": "WHITE", "O": "ORANGE",
}
_OSRAM_PACKAGES = {"T": "PLCC2", "M": "MINIPLCC", "Q": "0603", "R": "0805", "A": "PLCC4"}


def _kingbright_color(suffix: str) -> str | None:
    # KPT-3216SURCK, APTD1608LSECK/J3-PF: the code may follow a lens or brightness letter
    for code in _KINGBRIGHT_COLOR_CODES:
        if suffix.startswith(code):
            return _KINGBRIGHT_COLORS[code]
    for code in _KINGBRIGHT_COLOR_CODES:
        if code in suffix:
            return _KINGBRIGHT_COLORS[code]
    return None


def extract_led(identifier: str) -> dict[str, Any]:
    """Decode LED color, package and series from Kingbright, Wurth and OSRAM numbers.

    Members of an equivalence group (bin or packaging variants of one LED) decode to
    the group's series and color.
    """
    specs: dict[str, Any] = {}

    for members, series, color in _LED_EQUIVALENT_GROUPS:
        if identifier.startswith(members):
            return {"series": series, "color": color}

    match = _KINGBRIGHT.match(identifier)
    if match:
        series, size, _ = match.groups()
        specs["series"] = series
        color = _kingbright_color(identifier[match.end(2):])
        if color:
            specs["color"] = color
        specs["package"] = _KINGBRIGHT_SIZES.get(size, size)
        return specs

    match = _WURTH_LED.match(identifier)
    if match:
        size, color_code = match.groups()
        specs["series"] = "WL-SMCW"
        if color_code in _WURTH_COLORS:
            specs["color"] = _WURTH_COLORS[color_code]
        if size in _WURTH_SIZES:
            specs["package"] = _WURTH_SIZES[size]
        return specs

    match = _OSRAM_LED.match(identifier)
    if match:
        color_code, package_code, digits = match.groups()
        specs["color"] = _OSRAM_COLORS[color_code]
        specs["series"] = f"L{package_code}{digits}"
        if package_code in _OSRAM_PACKAGES:
            specs["package"] = _OSRAM_PACKAGES[package_code]
        return specs

    match = _COLOR_WORDS.search(identifier)
    if match:
        specs["color"] = match.group(1)
    return specs


# =============================================================================
# MOSFETS
# =============================================================================

# family -> (channel, Vds, Id, Rds(on) ohms, package)
_KNOWN_MOSFETS: dict[str, tuple[str, float, float, float, str]] = {
    "IRF530N": ("N", 100, 17, 0.09, "TO-220"),
    "IRF530": ("N", 100, 14, 0.16, "TO-220"),
    "IRF540N": ("N", 100, 33, 0.044, "TO-220"),
    "IRF540": ("N", 100, 28, 0.077, "TO-220"),
    "IRF640": ("N", 200, 18, 0.18, "TO-220"),
    "IRLZ44N": ("N", 55, 47, 0.022, "TO-220"),
    "IRF3205": ("N", 55, 110, 0.008, "TO-220"),
    "IRF9540N": ("P", 100, 23, 0.117, "TO-220"),
    "IRLML6402": ("P", 20, 3.7, 0.065, "SOT-23"),
    "IRLML2502": ("N", 20, 4.2, 0.045, "SOT-23"),
    "2N7002": ("N", 60, 0.115, 7.5, "SOT-23"),
    "2N7000": ("N", 60, 0.2, 5.0, "TO-92"),
    "BSS138": ("N", 50, 0.22, 3.5, "SOT-23"),
    "BSS123": ("N", 100, 0.17, 6.0, "SOT-23"),
    "BSS84": ("P", 50, 0.13, 10.0, "SOT-23"),
    "AO3400": ("N", 30, 5.7, 0.028, "SOT-23"),
    "AO3401": ("P", 30, 4.0, 0.05, "SOT-23"),
    "AO3402": ("N", 30, 4.0, 0.055, "SOT-23"),
    "AO3407": ("P", 30, 4.1, 0.06, "SOT-23"),
    "AO4407": ("P", 30, 12, 0.014, "SOIC-8"),
    "AOD4184": ("N", 40, 50, 0.007, "DPAK"),
    "SI2302": ("N", 20, 2.9, 0.057, "SOT-23"),
    "SI2301": ("P", 20, 3.1, 0.112, "SOT-23"),
    "FDS6680": ("N", 30, 12.5, 0.0095, "SOIC-8"),
    "FDS6675": ("P", 30, 11, 0.013, "SOIC-8"),
    "FDS4435": ("P", 30, 8.8, 0.02, "SOIC-8"),
    "FDS9435": ("P", 30, 5.3, 0.05, "SOIC-8"),
}
_KNOWN_MOSFET_KEYS = sorted(_KNOWN_MOSFETS, key=len, reverse=True)

# FQP30N06: package, current, channel, voltage / 10
_FAIRCHILD_QFET = re.compile(r"^FQ([PNDUAB])(\d+)([NP])(\d+)")
# STP55NF06, STF13N80K5: package, current, channel, technology, voltage / 10
_ST_MOSFET = re.compile(r"^ST([PFDBW])(\d+)([NP])([A-Z]*)(\d+)?")
# IPP60R190C6 (superjunction: voltage / 10, Rds(on) mOhm)
_INFINEON_SUPERJUNCTION = re.compile(r"^IP([DPBAW])(\d{2})R(\d{3})")
# IPP045N10N3, BSC016N06NS (Rds(on) / 10 mOhm), IPD50N06S4 (current): then channel, voltage / 10
_INFINEON_OPTIMOS = re.compile(r"^(IP[DPBAW]|BSC)(\d{1,4})([NP])(\d{2})")
_INFINEON_IR = re.compile(r"^IR(F|L)([A-Z]*?)(\d+)")
# DMN3404L: channel, voltage / 10
_DIODES_MOSFET = re.compile(r"^DM([NPG])(\d)(\d+)")
# FDN337N, FDS4435: channel suffix when present
_FAIRCHILD_FD = re.compile(r"^FD([SNC])(\d+)([NP])?")
# NTD5867NL, NTR4101P: package, number, channel
_ONSEMI_NT = re.compile(r"^NT([DR])(\d+)([NP])")
# BSS138, BSS806N: number, optional channel letter
_BSS = re.compile(r"^BSS(\d+)([NP])?")
# AO3400, AON7400, SI2333: part numbers without an encoded channel
_ODD_P_CHANNEL = re.compile(r"^(AO[DNIT]?|SIR?)(\d{4})")

_QFET_PACKAGES = {"P": "TO-220", "N": "TO-92", "D": "DPAK", "U": "IPAK", "A": "TO-3P", "B": "D2PAK"}
_ST_PACKAGES = {"P": "TO-220", "F": "TO-220FP", "D": "DPAK", "B": "D2PAK", "W": "TO-247"}
_INFINEON_PACKAGES = {"D": "DPAK", "P": "TO-220", "B": "D2PAK", "A": "TO-220FP", "W": "TO-247"}
_ONSEMI_PACKAGES = {"D": "DPAK", "R": "SOT-23"}

# International Rectifier numbering puts P-channel parts in these ranges
_IR_P_CHANNEL_PREFIXES = ("IRF9", "IRFR9", "IRFU9", "IRFS9", "IRLML6")
# Small-signal BSS parts that are P-channel
_BSS_P_CHANNEL = {"83", "84", "209", "223", "308", "315"}


def _mosfet(channel: str, voltage: float | None = None, current: float | None = None,
            rds_on: float | None = None, package: str | None = None, family: str | None = None) -> dict[str, Any]:
    specs: dict[str, Any] = {"channel": channel}
    for name, value in (
        ("voltageRating", voltage), ("currentRating", current), ("rdsOn", rds_on),
        ("package", package), ("family", family),
    ):
        if value is not None:
            specs[name] = float(value) if isinstance(value, int) else value
    return specs


def extract_mosfet(identifier: str) -> dict[str, Any]:
    """Decode MOSFET channel, ratings and package.

    Alpha and Omega, Vishay Siliconix and Diodes DMG numbering does not carry the channel;
    those series assign odd numbers to P-channel parts, which is what the fallback relies on.
    """
    for family in _KNOWN_MOSFET_KEYS:
        if identifier.startswith(family):
            channel, voltage, current, rds_on, package = _KNOWN_MOSFETS[family]
            return _mosfet(channel, voltage, current, rds_on, package, family)

    match = _FAIRCHILD_QFET.match(identifier)
    if match:
        package, current, channel, voltage = match.groups()
        return _mosfet(channel, int(voltage) * 10, int(current), None, _QFET_PACKAGES[package], "QFET")

    match = _ST_MOSFET.match(identifier)
    if match:
        package, current, channel, technology, voltage = match.groups()
        family = f"ST{technology}" if technology else "ST"
        voltage_rating = int(voltage) * 10 if voltage else None
        return _mosfet(channel, voltage_rating, int(current), None, _ST_PACKAGES[package], family)

    match = _INFINEON_SUPERJUNCTION.match(identifier)
    if match:
        package, voltage, rds = match.groups()
        return _mosfet("N", int(voltage) * 10, None, int(rds) / 1000, _INFINEON_PACKAGES[package], "COOLMOS")

    match = _INFINEON_OPTIMOS.match(identifier)
    if match:
        prefix, digits, channel, voltage = match.groups()
        package = "TDSON-8" if prefix == "BSC" else _INFINEON_PACKAGES[prefix[2]]
        if len(digits) >= 3:
            return _mosfet(channel, int(voltage) * 10, None, int(digits) / 10000, package, "OPTIMOS")
        return _mosfet(channel, int(voltage) * 10, int(digits), None, package, "OPTIMOS")

    match = _INFINEON_IR.match(identifier)
    if match:
        kind, letters, digits = match.groups()
        channel = "P" if identifier.startswith(_IR_P_CHANNEL_PREFIXES) else "N"
        return _mosfet(channel, family=f"IR{kind}{letters}{digits}")

    match = _DIODES_MOSFET.match(identifier)
    if match:
        letter, voltage, digits = match.groups()
        if letter == "G":
            channel = "P" if int(digits[-1]) % 2 else "N"
        else:
            channel = letter
        return _mosfet(channel, int(voltage) * 10, family=f"DM{letter}")

    match = _FAIRCHILD_FD.match(identifier)
    if match:
        kind, digits, channel = match.groups()
        if channel is None:
            # FDS numbering without a channel suffix: the 4xxx and 9xxx ranges are P-channel
            channel = "P" if digits[0] in "49" else "N"
        return _mosfet(channel, family=f"FD{kind}")

    match = _ONSEMI_NT.match(identifier)
    if match:
        package, _, channel = match.groups()
        return _mosfet(channel, package=_ONSEMI_PACKAGES[package], family=f"NT{package}")

    match = _BSS.match(identifier)
    if match:
        digits, channel = match.groups()
        if channel is None:
            channel = "P" if digits in _BSS_P_CHANNEL else "N"
        return _mosfet(channel, package="SOT-23", family="BSS")

    match = _ODD_P_CHANNEL.match(identifier)
    if match:
        prefix, digits = match.groups()
        return _mosfet("P" if int(digits[-1]) % 2 else "N", family=prefix)

    return {}


# =============================================================================
# BIPOLAR TRANSISTORS
# =============================================================================

# BC547B, BC847C, BC807-40: package digit, type digits, hFE group
_BC = re.compile(r"^BC([358])(\d{2})([ABC]|16|25|40)?")
# 2N3904, MMBT2222A, PMBT3906
_JEDEC = re.compile(r"^(2N|MMBT|PMBT)(\d{4})(A)?")
# PBSS4041NX, PBSS5540Z: 4xxx NPN, 5xxx PNP, optional polarity letter
_PBSS = re.compile(r"^PBSS([45])(\d{3})([NP])?")

# last two digits -> (polarity, Vceo, Ic)
_BC_TYPES: dict[str, tuple[str, float, float]] = {
    "47": ("NPN", 45, 0.1), "48": ("NPN", 30, 0.1), "49": ("NPN", 30, 0.1), "50": ("NPN", 45, 0.1),
    "57": ("PNP", 45, 0.1), "58": ("PNP", 30, 0.1), "59": ("PNP", 30, 0.1), "60": ("PNP", 45, 0.1),
    "46": ("NPN", 65, 0.1), "56": ("PNP", 65, 0.1),
    "37": ("NPN", 45, 0.8), "38": ("NPN", 25, 0.8), "27": ("PNP", 45, 0.8), "28": ("PNP", 25, 0.8),
    "17": ("NPN", 45, 0.5), "18": ("NPN", 25, 0.5), "07": ("PNP", 45, 0.5), "08": ("PNP", 25, 0.5),
}
# Minimum hFE of each gain group; BC807/BC817/BC327/BC337 use numeric groups
_BC_HFE_GROUPS = {"A": 110, "B": 200, "C": 420, "16": 100, "25": 160, "40": 250}

# type number -> (polarity, Vceo, Vceo of the A-suffix version, Ic, hFE)
_JEDEC_TYPES: dict[str, tuple[str, float, float, float, float]] = {
    "3904": ("NPN", 40, 40, 0.2, 100),
    "3906": ("PNP", 40, 40, 0.2, 100),
    "3903": ("NPN", 40, 40, 0.2, 50),
    "3905": ("PNP", 40, 40, 0.2, 50),
    "2222": ("NPN", 30, 40, 0.6, 100),
    "2907": ("PNP", 40, 60, 0.6, 100),
    "2219": ("NPN", 30, 40, 0.8, 100),
    "2905": ("PNP", 40, 60, 0.6, 100),
    "4400": ("NPN", 40, 40, 0.6, 50),
    "4401": ("NPN", 40, 40, 0.6, 100),
    "4402": ("PNP", 40, 40, 0.6, 50),
    "4403": ("PNP", 40, 40, 0.6, 100),
    "4124": ("NPN", 25, 25, 0.2, 120),
    "4126": ("PNP", 25, 25, 0.2, 120),
    "5088": ("NPN", 30, 30, 0.05, 300),
    "5089": ("NPN", 25, 25, 0.05, 400),
    "5086": ("PNP", 50, 50, 0.05, 150),
    "5087": ("PNP", 50, 50, 0.05, 250),
    "2369": ("NPN", 15, 15, 0.2, 40),
    "2484": ("NPN", 60, 60, 0.05, 250),
    "5550": ("NPN", 140, 140, 0.6, 60),
    "5551": ("NPN", 160, 160, 0.6, 80),
    "5400": ("PNP", 120, 120, 0.6, 40),
    "5401": ("PNP", 150, 150, 0.6, 60),
    "3055": ("NPN", 60, 60, 15, 20),
    "2955": ("PNP", 60, 60, 15, 20),
}
# Power types in TO-3 metal cans
_TO3_TYPES = {"3055", "2955"}


def extract_transistor(identifier: str) -> dict[str, Any]:
    """Decode BJT polarity and ratings for BC5xx/8xx/3xx, 2N/MMBT/PMBT and PBSS families.

    The family key pairs through-hole and SMD equivalents: BC547 and BC847 share
    'BC47', 2N3904 and MMBT3904 share '3904'.
    """
    match = _BC.match(identifier)
    if match:
        package_digit, digits, group = match.groups()
        known = _BC_TYPES.get(digits)
        if known is None:
            return {}
        polarity, voltage, current = known
        specs: dict[str, Any] = {
            "polarity": polarity, "voltageRating": float(voltage), "currentRating": current,
            "package": "SOT-23" if package_digit == "8" else "TO-92", "family": f"BC{digits}",
        }
        if group:
            specs["hfe"] = float(_BC_HFE_GROUPS[group])
        return specs

    match = _JEDEC.match(identifier)
    if match:
        prefix, digits, a_suffix = match.groups()
        known = _JEDEC_TYPES.get(digits)
        if known is None:
            return {}
        polarity, voltage, voltage_a, current, hfe = known
        if prefix != "2N":
            package = "SOT-23"
        else:
            package = "TO-3" if digits in _TO3_TYPES else "TO-92"
        return {
            "polarity": polarity,
            "voltageRating": float(voltage_a if a_suffix else voltage),
            "currentRating": float(current),
            "hfe": float(hfe),
            "package": package,
            "family": digits,
        }

    match = _PBSS.match(identifier)
    if match:
        series, digits, letter = match.groups()
        if letter:
            polarity = "NPN" if letter == "N" else "PNP"
        else:
            polarity = "NPN" if series == "4" else "PNP"
        return {"polarity": polarity, "family": f"PBSS{series}{digits}"}

    return {}
