"""Spec decoding for resistor, capacitor and inductor ordering codes.

Values are returned in base units (ohms, farads, henries, volts, watts) so they
compare directly against datasheet values parsed by partmatch.values.
"""

import re
from typing import Any

from ..values import METRIC_TO_IMPERIAL, parse_value_code
from .codes import TOLERANCE_CODES, JIS_VOLTAGE_CODES, RESISTOR_POWER_BY_SIZE, TEMPERATURE_CHARACTERISTICS

_PICO = 1e-12
_NANO = 1e-9
_MICRO = 1e-6


# =============================================================================
# RESISTORS
# =============================================================================

# RC0603FR-0710KL, RT0603BRD0710KL: series, size, tolerance, packaging, reel, value code
_YAGEO_RESISTOR = re.compile(r"^R([CT])(\d{4})([BCDFGJK])([A-Z]{1,2})(\d{2})(\d+[RKM]\d*)")
# CRCW060310K0FKEA
_VISHAY_CRCW = re.compile(r"^CRCW(\d{4})(\d+[RKM]\d*|\d{3,4})([BCDFGJK])")
# ERJ-3EKF1002V, ERA-3AEB103V, ERJ-14NF1002U
_PANASONIC_RESISTOR = re.compile(r"^ER([JA])(\d{1,2})([A-Z]{1,3}?)([BCDFGJ])(\d{3,4}|\d*R\d+)")
# CR0603-FX-1002ELF: size, tolerance, packaging letter, value
_BOURNS_CR = re.compile(r"^CR(\d{4})([BDFJ])[A-Z](\d{3,4}|\d*R\d+)")
# RC1608J103CS (metric size)
_SAMSUNG_RESISTOR = re.compile(r"^RC(1005|1608|2012|3216|3225|5025|6432)([BDFGJ])(\d{3,4}|\d*R\d+)")

_PANASONIC_SIZES = {
    "1": "0201", "2": "0402", "3": "0603", "6": "0805",
    "8": "1206", "14": "1210", "12": "1812",
}


def _resistor(value: float | None, tolerance: str, size: str | None, composition: str) -> dict[str, Any]:
    if value is None:
        return {}
    specs: dict[str, Any] = {
        "resistance": value,
        "tolerance": TOLERANCE_CODES[tolerance],
        "composition": composition,
    }
    if size:
        specs["package"] = size
        power = RESISTOR_POWER_BY_SIZE.get(size)
        if power is not None:
            specs["powerRating"] = power
    return specs


def extract_resistor(identifier: str) -> dict[str, Any]:
    """Decode chip-resistor ordering codes from Yageo, Vishay, Panasonic, Bourns and Samsung."""
    match = _YAGEO_RESISTOR.match(identifier)
    if match:
        series, size, tolerance, _, _, code = match.groups()
        composition = "THIN_FILM" if series == "T" else "THICK_FILM"
        return _resistor(parse_value_code(code), tolerance, size, composition)

    match = _VISHAY_CRCW.match(identifier)
    if match:
        size, code, tolerance = match.groups()
        return _resistor(parse_value_code(code), tolerance, size, "THICK_FILM")

    match = _PANASONIC_RESISTOR.match(identifier)
    if match:
        series, size_code, _, tolerance, code = match.groups()
        composition = "THIN_FILM" if series == "A" else "THICK_FILM"
        return _resistor(parse_value_code(code), tolerance, _PANASONIC_SIZES.get(size_code), composition)

    match = _BOURNS_CR.match(identifier)
    if match:
        size, tolerance, code = match.groups()
        return _resistor(parse_value_code(code), tolerance, size, "THICK_FILM")

    match = _SAMSUNG_RESISTOR.match(identifier)
    if match:
        metric, tolerance, code = match.groups()
        return _resistor(parse_value_code(code), tolerance, METRIC_TO_IMPERIAL.get(metric), "THICK_FILM")

    return {}


# =============================================================================
# CAPACITORS
# =============================================================================

# GRM188R71H104KA93D: series, size, height, dielectric, voltage, value, tolerance
_MURATA_CAPACITOR = re.compile(
    r"^G[RCJ]M(\d{2})([0-9A-Z])([0-9A-Z]{2})(\d[A-Z])(\d{3}|\dR\d|R\d{2})([BCDFGJKMZ])"
)
# CL10B104KB8NNNC: size, dielectric, value, tolerance, voltage
_SAMSUNG_CAPACITOR = re.compile(r"^CL(\d{2})([A-Z])(\d{3}|\dR\d)([BCDFGJKMZ])([A-Z])")
# C0603C104K5RACTU: size, value, tolerance, voltage, dielectric
_KEMET_CAPACITOR = re.compile(r"^C(\d{4})C(\d{3}|\dR\d)([BCDFGJKMZ])(\d|A)([A-Z])")
# C1608X7R1H104K080AA: metric size, dielectric, voltage, value, tolerance
_TDK_CAPACITOR = re.compile(r"^C(\d{4})(X[5-8][RSTU]|C0G|NP0|JB|CH)(\d[A-Z])(\d{3}|\dR\d)([BCDFGJKM])")
# CC0603KRX7R9BB104: size, tolerance, packaging, dielectric, voltage, value
_YAGEO_CAPACITOR = re.compile(
    r"^[CA]C(\d{4})([BCDFGJKMZ])([A-Z])(NPO|COG|X7R|X5R|X7S|X6S|Y5V)(\d)[A-Z]{2}(\d{3}|\dR\d)"
)
# EEE-1HA100WP, EEE-FK1V101P, EEU-FR1E101, ECA-1HM100: voltage, value in uF
_PANASONIC_ELECTROLYTIC = re.compile(r"^(?:EE[EU]([A-Z]{2})?|ECA)(\d[A-Z])([A-Z]{0,2}?)(\d{3}|\dR\d)")
# T491A106K016AT: case, value, tolerance, voltage
_KEMET_TANTALUM = re.compile(r"^T4(\d{2})([A-Z])(\d{3})([KMJ])(\d{3})")

_MURATA_SIZES = {
    "03": "0201", "15": "0402", "18": "0603", "21": "0805",
    "31": "1206", "32": "1210", "43": "1812", "55": "2220",
}
_MURATA_DIELECTRICS = {
    "5C": "C0G", "R7": "X7R", "R6": "X5R", "C7": "X7S", "C8": "X6S", "D7": "X7T", "F5": "Y5V",
    "C6": "X5S", "E7": "X7U", "L8": "X8L", "B1": "B", "B3": "B", "F1": "F",
}

_SAMSUNG_SIZES = {
    "03": "0201", "05": "0402", "10": "0603", "21": "0805", "31": "1206", "32": "1210", "43": "1812",
}
_SAMSUNG_DIELECTRICS = {"C": "C0G", "B": "X7R", "A": "X5R", "X": "X6S", "F": "Y5V"}
_SAMSUNG_VOLTAGES = {
    "R": 4.0, "Q": 6.3, "P": 10.0, "O": 16.0, "A": 25.0, "L": 35.0, "B": 50.0,
    "C": 100.0, "D": 200.0, "E": 250.0, "G": 500.0, "H": 630.0, "I": 1000.0,
}

_KEMET_VOLTAGES = {
    "7": 4.0, "9": 6.3, "8": 10.0, "4": 16.0, "3": 25.0, "6": 35.0, "5": 50.0,
    "1": 100.0, "2": 200.0, "A": 250.0,
}
_KEMET_DIELECTRICS = {"G": "C0G", "R": "X7R", "P": "X5R", "U": "Z5U", "V": "Y5V"}
_KEMET_TANTALUM_CASES = {"A": "3216", "B": "3528", "C": "6032", "D": "7343", "E": "7343H", "X": "7343X"}

_YAGEO_VOLTAGES = {
    "4": 4.0, "5": 6.3, "6": 10.0, "7": 16.0, "8": 25.0, "9": 50.0, "0": 100.0, "1": 200.0,
    "2": 500.0, "3": 1000.0,
}

# Dielectric spellings that refer to the same class
_DIELECTRIC_ALIASES = {"NP0": "C0G", "NPO": "C0G", "COG": "C0G", "CH": "C0G"}


def _capacitor(
    value: float | None,
    voltage: float | None,
    dielectric: str | None,
    size: str | None = None,
    tolerance: str | None = None,
) -> dict[str, Any]:
    if value is None:
        return {}
    specs: dict[str, Any] = {"capacitance": value}
    if voltage is not None:
        specs["voltage"] = voltage
    if dielectric:
        dielectric = _DIELECTRIC_ALIASES.get(dielectric, dielectric)
        specs["dielectric"] = dielectric
        characteristic = TEMPERATURE_CHARACTERISTICS.get(dielectric)
        if characteristic:
            specs["temperatureCharacteristic"] = characteristic
    if size:
        specs["package"] = size
    if tolerance and tolerance in TOLERANCE_CODES:
        specs["tolerance"] = TOLERANCE_CODES[tolerance]
    return specs


def extract_capacitor(identifier: str) -> dict[str, Any]:
    """Decode MLCC, tantalum and aluminium electrolytic ordering codes."""
    match = _MURATA_CAPACITOR.match(identifier)
    if match:
        size, _, dielectric, voltage, code, tolerance = match.groups()
        return _capacitor(
            parse_value_code(code, _PICO), JIS_VOLTAGE_CODES.get(voltage),
            _MURATA_DIELECTRICS.get(dielectric), _MURATA_SIZES.get(size), tolerance,
        )

    match = _SAMSUNG_CAPACITOR.match(identifier)
    if match:
        size, dielectric, code, tolerance, voltage = match.groups()
        return _capacitor(
            parse_value_code(code, _PICO), _SAMSUNG_VOLTAGES.get(voltage),
            _SAMSUNG_DIELECTRICS.get(dielectric), _SAMSUNG_SIZES.get(size), tolerance,
        )

    match = _KEMET_CAPACITOR.match(identifier)
    if match:
        size, code, tolerance, voltage, dielectric = match.groups()
        return _capacitor(
            parse_value_code(code, _PICO), _KEMET_VOLTAGES.get(voltage),
            _KEMET_DIELECTRICS.get(dielectric), size, tolerance,
        )

    match = _TDK_CAPACITOR.match(identifier)
    if match:
        metric, dielectric, voltage, code, tolerance = match.groups()
        return _capacitor(
            parse_value_code(code, _PICO), JIS_VOLTAGE_CODES.get(voltage),
            dielectric, METRIC_TO_IMPERIAL.get(metric), tolerance,
        )

    match = _YAGEO_CAPACITOR.match(identifier)
    if match:
        size, tolerance, _, dielectric, voltage, code = match.groups()
        return _capacitor(
            parse_value_code(code, _PICO), _YAGEO_VOLTAGES.get(voltage), dielectric, size, tolerance,
        )

    match = _PANASONIC_ELECTROLYTIC.match(identifier)
    if match:
        _, voltage, _, code = match.groups()
        return _capacitor(
            parse_value_code(code, _MICRO), JIS_VOLTAGE_CODES.get(voltage), "ALUMINUM_ELECTROLYTIC",
        )

    match = _KEMET_TANTALUM.match(identifier)
    if match:
        _, case, code, tolerance, voltage = match.groups()
        return _capacitor(
            parse_value_code(code, _PICO), float(int(voltage)), "TANTALUM",
            _KEMET_TANTALUM_CASES.get(case), tolerance,
        )

    return {}


# =============================================================================
# INDUCTORS
# =============================================================================

# LQG15HS10NJ02D, LQM21PN1R0MC0D, LQH32CN100K23: style, size, construction, value, tolerance
_MURATA_INDUCTOR = re.compile(r"^LQ([GWMH])(\d{2})([A-Z]{2})(\d*[NR]\d+|\d+[NR]|\d{3})([BCDGJKLMN])?")
# XAL4020-222MEB, DO1608C-104: series, size, value in nH
_COILCRAFT = re.compile(r"^(XAL|XFL|XEL|LPS|MSS|DO)(\d{4})([A-Z]?)(\d{3})([JKLMN])?")
# SRR1260-100M, SRN6045TA-4R7M: series, size, value in uH
_BOURNS_INDUCTOR = re.compile(r"^SR([RNP])(\d{4}[A-Z]{0,2})(\d{3}|\d*R\d+)([JKLMN])?")
# MLF1608A1R0K, VLS3012ET-2R2M: value in uH
_TDK_INDUCTOR = re.compile(r"^(MLF|VLS)(\d{4})([A-Z]*?)(\d{3}|\d*R\d+)([JKLMN])?")

_MURATA_INDUCTOR_SIZES = {
    "03": "0201", "15": "0402", "18": "0603", "21": "0805",
    "31": "1206", "32": "1210", "43": "1812",
}


def _murata_inductance(code: str) -> float | None:
    # N marks the decimal point in nH, R in uH; plain digits are an EIA code in uH
    if "N" in code:
        return parse_value_code(code, _NANO)
    return parse_value_code(code, _MICRO)


def _inductor(value: float | None, family: str, size: str | None, tolerance: str | None) -> dict[str, Any]:
    if value is None:
        return {}
    specs: dict[str, Any] = {"inductance": value, "family": family}
    if size:
        specs["package"] = size
    if tolerance and tolerance in TOLERANCE_CODES:
        specs["tolerance"] = TOLERANCE_CODES[tolerance]
    return specs


def extract_inductor(identifier: str) -> dict[str, Any]:
    """Decode inductor ordering codes from Murata, Coilcraft, Bourns and TDK."""
    match = _MURATA_INDUCTOR.match(identifier)
    if match:
        style, size, construction, code, tolerance = match.groups()
        return _inductor(
            _murata_inductance(code), f"LQ{style}{construction}",
            _MURATA_INDUCTOR_SIZES.get(size), tolerance,
        )

    match = _COILCRAFT.match(identifier)
    if match:
        series, size, _, code, tolerance = match.groups()
        return _inductor(parse_value_code(code, _NANO), series, size, tolerance)

    match = _BOURNS_INDUCTOR.match(identifier)
    if match:
        series, size, code, tolerance = match.groups()
        return _inductor(parse_value_code(code, _MICRO), f"SR{series}", size[:4], tolerance)

    match = _TDK_INDUCTOR.match(identifier)
    if match:
        series, size, _, code, tolerance = match.groups()
        return _inductor(parse_value_code(code, _MICRO), series, size, tolerance)

    return {}
