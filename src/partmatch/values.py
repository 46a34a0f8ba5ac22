"""Typed spec values and unit-aware parsing.

This module provides:
1. SpecValue - an immutable (value, unit, min, max) holder for one characteristic
2. Unit parsers that turn datasheet strings like '25V' or '100nF' into base-unit floats
3. parse_value_code() for the compact value codes embedded in part numbers ('104', '4K7', '2R2')
4. normalize_package() for package names written several ways ('SO-8', '1608M')
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class SpecValue:
    """One measured characteristic with an optional [min, max] window."""
    value: Any
    unit: str = ""
    min: float | None = None
    max: float | None = None

    def __post_init__(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"SpecValue min ({self.min}) is greater than max ({self.max})")

    def in_range(self, x: float) -> bool:
        """True if x falls inside [min, max]; open bounds are unconstrained."""
        if self.min is not None and x < self.min:
            return False
        if self.max is not None and x > self.max:
            return False
        return True

    def __str__(self) -> str:
        return f"{self.value}{self.unit}"


def to_number(value: Any) -> float | None:
    """Coerce a spec value to float, or None when it is not numeric.

    Accepts SpecValue, int/float and plain numeric strings ("10", "4.7").
    Booleans and NaN are not treated as numbers.
    """
    if isinstance(value, SpecValue):
        value = value.value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(result) else result


def unwrap(value: Any) -> Any:
    """Return the raw value held by a SpecValue, or the value itself."""
    return value.value if isinstance(value, SpecValue) else value


# =============================================================================
# PRE-COMPILED REGEX PATTERNS
# =============================================================================

_NUMBER = r"(\d+(?:\.\d+)?|\.\d+)"
_VOLTAGE_PATTERN = re.compile(_NUMBER + r"\s*([mk])?V", re.IGNORECASE)
_TOLERANCE_PATTERN = re.compile(_NUMBER + r"\s*%")
_POWER_FRACTION_PATTERN = re.compile(r"(\d+)/(\d+)\s*W", re.IGNORECASE)
_POWER_PATTERN = re.compile(_NUMBER + r"\s*(m)?W", re.IGNORECASE)
_CURRENT_PATTERN = re.compile(_NUMBER + r"\s*([uµnm])?A\b", re.IGNORECASE)
_RESISTANCE_PATTERN = re.compile(_NUMBER + r"\s*([kKM]|m(?!ohm))?")
_CAPACITANCE_PATTERN = re.compile(_NUMBER + r"\s*([pnuµm])?F?", re.IGNORECASE)
_INDUCTANCE_PATTERN = re.compile(_NUMBER + r"\s*([nuµm])?H?", re.IGNORECASE)
_FREQUENCY_PATTERN = re.compile(_NUMBER + r"\s*([kKMG])?(?:Hz)?")

# Value codes inside part numbers
_LETTER_DECIMAL_CODE = re.compile(r"^(\d*)([RKMNPU])(\d*)$")
_EIA_CODE = re.compile(r"^(\d{2,3})(\d)$")

# Package names
_METRIC_CHIP = re.compile(r"^(\d{4})(?:M|METRIC)$")
_SMALL_OUTLINE = re.compile(r"^(?:SOIC|SO)-?(\d+)$")
_PINNED_PACKAGE = re.compile(r"^(SOT|SOD|TO|TSSOP|MSOP|SSOP|QFN|DFN|LQFP|TQFP|DIP)-?(\d+[A-Z]*)(-\d+)?$")

_SI_PREFIX = {
    "p": 1e-12, "n": 1e-9, "u": 1e-6, "µ": 1e-6, "m": 1e-3,
    "k": 1e3, "K": 1e3, "M": 1e6, "G": 1e9,
}


# =============================================================================
# UNIT PARSERS
# =============================================================================
# Each parser returns a float in base units, or None if unparseable.


def parse_voltage(s: str) -> float | None:
    """Parse voltage: '25V' -> 25, '6.3V' -> 6.3, '500mV' -> 0.5"""
    if not s:
        return None
    match = _VOLTAGE_PATTERN.search(s)
    if not match:
        return None
    value = float(match.group(1))
    prefix = match.group(2)
    if prefix == "m":
        return value / 1000
    if prefix in ("k", "K"):
        return value * 1000
    return value


def parse_tolerance(s: str) -> float | None:
    """Parse tolerance: '±1%' -> 1, '10%' -> 10"""
    if not s:
        return None
    match = _TOLERANCE_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_power(s: str) -> float | None:
    """Parse power in watts: '100mW' -> 0.1, '1/4W' -> 0.25, '0.25W' -> 0.25"""
    if not s:
        return None
    match = _POWER_FRACTION_PATTERN.search(s)
    if match:
        return float(match.group(1)) / float(match.group(2))
    match = _POWER_PATTERN.search(s)
    if not match:
        return None
    value = float(match.group(1))
    return value / 1000 if match.group(2) else value


def parse_current(s: str) -> float | None:
    """Parse current in amps: '2A' -> 2, '500mA' -> 0.5, '100uA' -> 0.0001"""
    if not s:
        return None
    match = _CURRENT_PATTERN.search(s)
    if not match:
        return None
    value = float(match.group(1))
    prefix = match.group(2)
    return value * _SI_PREFIX[prefix.lower() if prefix != "µ" else prefix] if prefix else value


def parse_resistance(s: str) -> float | None:
    """Parse resistance in ohms: '10kΩ' -> 10000, '4.7M' -> 4700000, '100mΩ' -> 0.1"""
    if not s:
        return None
    s = s.replace("Ω", "").replace("ohm", "").replace("Ohm", "").strip()
    match = _RESISTANCE_PATTERN.search(s)
    if not match:
        return None
    value = float(match.group(1))
    prefix = match.group(2)
    return value * _SI_PREFIX[prefix] if prefix else value


def parse_capacitance(s: str) -> float | None:
    """Parse capacitance in farads: '100nF' -> 1e-7, '10uF' -> 1e-5, '1pF' -> 1e-12"""
    if not s:
        return None
    match = _CAPACITANCE_PATTERN.search(s.strip())
    if not match:
        return None
    value = float(match.group(1))
    prefix = (match.group(2) or "").lower()
    return value * _SI_PREFIX[prefix] if prefix else value


def parse_inductance(s: str) -> float | None:
    """Parse inductance in henries: '10uH' -> 1e-5, '100nH' -> 1e-7, '1mH' -> 1e-3"""
    if not s:
        return None
    match = _INDUCTANCE_PATTERN.search(s.strip())
    if not match:
        return None
    value = float(match.group(1))
    prefix = (match.group(2) or "").lower()
    return value * _SI_PREFIX[prefix] if prefix else value


def parse_frequency(s: str) -> float | None:
    """Parse frequency in Hz: '8MHz' -> 8e6, '32.768kHz' -> 32768"""
    if not s:
        return None
    match = _FREQUENCY_PATTERN.search(s.strip())
    if not match:
        return None
    value = float(match.group(1))
    prefix = match.group(2)
    if prefix:
        return value * _SI_PREFIX["k" if prefix == "K" else prefix]
    return value


# =============================================================================
# PACKAGES
# =============================================================================

# Metric chip sizes (mm x 10) -> imperial EIA size
METRIC_TO_IMPERIAL: dict[str, str] = {
    "0402": "01005", "0603": "0201", "1005": "0402", "1608": "0603",
    "2012": "0805", "3216": "1206", "3225": "1210", "4532": "1812",
    "5025": "2010", "5750": "2220", "6432": "2512",
}

# Alternate names of one footprint -> the name the part-number decoders emit
_PACKAGE_ALIASES = {
    "TO-252": "DPAK", "TO-263": "D2PAK", "TO-236": "SOT-23", "SOT-23-3": "SOT-23",
    "DO-214AC": "SMA", "DO-214AA": "SMB", "DO-214AB": "SMC",
}


def normalize_package(s: str) -> str:
    """Canonical package name: 'SO-8' -> 'SOIC-8', '1608M' -> '0603', 'sot23' -> 'SOT-23'.

    Bare four-digit chip sizes are imperial; metric sizes need an 'M' or 'metric'
    suffix. Names this does not recognize come back upper-cased without spaces.
    """
    if not s:
        return ""
    text = re.sub(r"\s+", "", str(s)).upper()

    match = _METRIC_CHIP.match(text)
    if match and match.group(1) in METRIC_TO_IMPERIAL:
        return METRIC_TO_IMPERIAL[match.group(1)]

    # SO-8, SO8, SOIC8 -> SOIC-8
    match = _SMALL_OUTLINE.match(text)
    if match:
        return f"SOIC-{match.group(1)}"

    match = _PINNED_PACKAGE.match(text)
    if match:
        family, size, pins = match.groups()
        text = f"{family}-{size}{pins or ''}"
    return _PACKAGE_ALIASES.get(text, text)


# Spec names (as used in type metadata) mapped to the parser for their string form
SPEC_PARSERS: dict[str, Callable[[str], float | None]] = {
    "resistance": parse_resistance,
    "capacitance": parse_capacitance,
    "inductance": parse_inductance,
    "voltage": parse_voltage,
    "voltageRating": parse_voltage,
    "forwardVoltage": parse_voltage,
    "outputVoltage": parse_voltage,
    "zenerVoltage": parse_voltage,
    "threshold": parse_voltage,
    "currentRating": parse_current,
    "powerRating": parse_power,
    "tolerance": parse_tolerance,
    "frequency": parse_frequency,
    "gbw": parse_frequency,
    "rdsOn": parse_resistance,
    "esr": parse_resistance,
}


def coerce_specs(raw: dict[str, Any]) -> dict[str, Any]:
    """Convert string spec values with units into base-unit floats.

    Values whose spec name has a parser and parse cleanly become floats; everything
    else (categorical values like 'X7R', already-numeric values) passes through.
    Package names are normalized so 'SO-8' matches 'SOIC-8' and '1608M' matches '0603'.
    """
    result: dict[str, Any] = {}
    for name, value in raw.items():
        if value is None:
            continue
        if name == "package" and isinstance(value, str):
            result[name] = normalize_package(value)
            continue
        parser = SPEC_PARSERS.get(name)
        if isinstance(value, str) and parser is not None and to_number(value) is None:
            parsed = parser(value)
            result[name] = parsed if parsed is not None else value
        else:
            result[name] = value
    return result


# =============================================================================
# PART NUMBER VALUE CODES
# =============================================================================


def parse_value_code(code: str, base: float = 1.0) -> float | None:
    """Decode a value code embedded in a part number, scaled by base.

    Letter-as-decimal codes: '4K7' -> 4700, '10K' -> 10000, '100R' -> 100, '2R2' -> 2.2,
    '10K0' -> 10000, '1M' -> 1e6, '10N' -> 10 (nano, relative to base), 'R47' -> 0.47.
    EIA digit codes: '104' -> 10 * 10^4, '1002' -> 100 * 10^2.

    R, N, P and U mark a decimal point without scaling (the unit comes from base);
    K and M also multiply by 1e3 / 1e6.
    """
    if not code:
        return None
    code = code.upper()
    match = _LETTER_DECIMAL_CODE.match(code)
    if match:
        whole, letter, fraction = match.groups()
        if not whole and not fraction:
            return None
        value = float(f"{whole or '0'}.{fraction or '0'}")
        if letter == "K":
            value *= 1e3
        elif letter == "M":
            value *= 1e6
        return value * base
    match = _EIA_CODE.match(code)
    if match:
        significand, exponent = match.groups()
        return float(significand) * (10 ** int(exponent)) * base
    return None
