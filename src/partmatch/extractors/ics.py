"""Spec decoding for integrated circuits: op-amps, regulators, logic, memory, MCUs and sensors."""

import re
from typing import Any

from ..classify import extract_series
from .codes import CAPACITY_CODES

_MBIT = 1024 * 1024
_KBIT = 1024


def _longest_prefix(identifier: str, keys: list[str]) -> str | None:
    for key in keys:
        if identifier.startswith(key):
            return key
    return None


# =============================================================================
# OP-AMPS
# =============================================================================

# family -> (channels, input type)
_KNOWN_OPAMPS: dict[str, tuple[int, str]] = {
    "LM358": (2, "BIPOLAR"), "LM324": (4, "BIPOLAR"), "LM741": (1, "BIPOLAR"),
    "LM833": (2, "BIPOLAR"), "LM2904": (2, "BIPOLAR"), "LM2902": (4, "BIPOLAR"),
    "LM4562": (2, "BIPOLAR"),
    "TL071": (1, "JFET"), "TL072": (2, "JFET"), "TL074": (4, "JFET"),
    "TL081": (1, "JFET"), "TL082": (2, "JFET"), "TL084": (4, "JFET"),
    "NE5532": (2, "BIPOLAR"), "NE5534": (1, "BIPOLAR"),
    "AD8605": (1, "CMOS"), "AD8606": (2, "CMOS"), "AD8608": (4, "CMOS"),
    "AD820": (1, "JFET"), "AD822": (2, "JFET"), "AD824": (4, "JFET"),
    "AD8065": (1, "JFET"), "AD8066": (2, "JFET"),
    "TSV321": (1, "CMOS"), "TSV358": (2, "CMOS"), "TSV324": (4, "CMOS"),
    "LTC6081": (1, "CMOS"), "LTC6082": (2, "CMOS"), "LTC6078": (2, "CMOS"), "LTC6079": (4, "CMOS"),
    "LTC6240": (1, "CMOS"), "LTC6241": (2, "CMOS"), "LTC6242": (4, "CMOS"),
}
_KNOWN_OPAMP_KEYS = sorted(_KNOWN_OPAMPS, key=len, reverse=True)

# MCP6002, MCP602: family digits, channel digit
_MCP_OPAMP = re.compile(r"^MCP6(\d{1,2})(\d)")
# OPA2134: channel digit (2 dual, 4 quad, otherwise single), model
_OPA = re.compile(r"^OPA(\d)(\d{2,3})")
# TLV9002, TLV9062, TSV912: last digit is the channel count
_TLV9 = re.compile(r"^TLV9(\d{1,2})(\d)")
_TSV = re.compile(r"^TSV(\d{2})(\d)")
# ADA4841-1, ADA4807-2: channel count follows the model, single when absent
_ADA4 = re.compile(r"^ADA4(\d{3})([124])?")
# AD8672, LTC6088: unlisted parts follow the last-digit channel convention
_AD8_LTC6 = re.compile(r"^(AD8|LTC6)(\d{1,2})(\d)")

_CHANNEL_DIGITS = {"1": 1, "2": 2, "4": 4}

# TI/National package suffixes, longest first
_TI_PACKAGE_SUFFIXES = (
    ("DBV", "SOT-23-5"), ("DGK", "VSSOP-8"), ("DCK", "SC-70"), ("PW", "TSSOP"),
    ("D", "SOIC"), ("N", "DIP"), ("P", "DIP"),
)
_MICROCHIP_PACKAGE_SUFFIXES = (("OT", "SOT-23-5"), ("MS", "MSOP-8"), ("SN", "SOIC"), ("P", "DIP"))


def _suffix_package(suffix: str, table: tuple[tuple[str, str], ...]) -> str | None:
    for code, package in table:
        if suffix.startswith(code):
            return package
    return None


def extract_opamp(identifier: str) -> dict[str, Any]:
    """Decode channel count, input stage, family and package of common op-amps."""
    family = _longest_prefix(identifier, _KNOWN_OPAMP_KEYS)
    if family:
        channels, input_type = _KNOWN_OPAMPS[family]
        specs: dict[str, Any] = {"channels": channels, "inputType": input_type, "family": family}
        package = _suffix_package(identifier[len(family):], _TI_PACKAGE_SUFFIXES)
        if package:
            specs["package"] = package
        return specs

    match = _MCP_OPAMP.match(identifier)
    if match:
        model, channel_digit = match.groups()
        channels = _CHANNEL_DIGITS.get(channel_digit, 1)
        specs = {"channels": channels, "inputType": "CMOS", "family": f"MCP6{model}"}
        # MCP6002-I/SN: temperature grade letter, then package code
        package = _suffix_package(identifier[match.end():].lstrip("IE"), _MICROCHIP_PACKAGE_SUFFIXES)
        if package:
            specs["package"] = package
        return specs

    match = _OPA.match(identifier)
    if match:
        channel_digit, model = match.groups()
        if channel_digit in ("2", "4"):
            channels, family = int(channel_digit), f"OPA{model}"
        else:
            channels, family = 1, f"OPA{channel_digit}{model}"
        specs = {"channels": channels, "family": family}
        package = _suffix_package(identifier[match.end():], _TI_PACKAGE_SUFFIXES)
        if package:
            specs["package"] = package
        return specs

    match = _TLV9.match(identifier) or _TSV.match(identifier)
    if match:
        channel_digit = match.group(2)
        prefix = "TLV9" if identifier.startswith("TLV") else "TSV"
        return {
            "channels": _CHANNEL_DIGITS.get(channel_digit, 1), "inputType": "CMOS",
            "family": f"{prefix}{match.group(1)}X",
        }

    match = _ADA4.match(identifier)
    if match:
        model, channel_digit = match.groups()
        return {"channels": int(channel_digit or 1), "family": f"ADA4{model}"}

    match = _AD8_LTC6.match(identifier)
    if match:
        prefix, model, channel_digit = match.groups()
        return {"channels": _CHANNEL_DIGITS.get(channel_digit, 1), "family": f"{prefix}{model}X"}

    return {}


# =============================================================================
# VOLTAGE REGULATORS
# =============================================================================

# LM7805, UA78M05, L78L33, MC7912
_78XX = re.compile(r"^(?:LM|UA|MC|KA|L)?(7[89])(L|M)?(\d{2})")
# AMS1117-3.3, LM1117IMPX-5.0, LD1117S33TR, AZ1117CH-ADJ, AMS1085CM
_1117 = re.compile(r"^(?:LM|AMS|LD|AZ|NCP|NCV|TLV|SPX|AP)?(1117|108[456])([A-Z]*)(\d{2})?")
# LM317T, LM337, LM317LZ
_LM3X7 = re.compile(r"^LM3([13])7(L)?")
# LM2596S-5.0
_LM2596 = re.compile(r"^LM2596([A-Z]*)(\d{2})?")
# MCP1700T-3302E, MCP1640T-I/CHY, MCP16301: model, letters, output voltage code
_MCP_REGULATOR = re.compile(r"^MCP1(6\d{3}|[67]\d{2})([A-Z]*)(\d{2})?")
# AP2112K-3.3
_AP2112 = re.compile(r"^AP2112[A-Z]?(\d{2})")
# LD39015M33R: current rating in tens of mA, then output voltage
_LD39 = re.compile(r"^LD39(\d{3})[A-Z]*(\d{2})?")
# TPS54331DR, TPS62130RGT, TPS7A4700, TPS73633DBV
_TPS = re.compile(r"^TPS([567])([A-Z]?)(\d{2})(\d{1,3})")
# ADP3338AKCZ-3.3, ADP2302ARDZ-5.0, ADP5054
_ADP = re.compile(r"^ADP(\d{3,4})[A-Z]*(\d{2})?")
# LT1763CS8-3.3, LT3080EST, LTC3780EG
_LT = re.compile(r"^(LTC?)([13])(\d{3})")
# NCP167AMX330TBG, NCP718BSN500T1G, NCP3063: onsemi uses 3-digit voltage codes
_NCP = re.compile(r"^NC[PV](\d{3,4})([A-Z]*)(\d{2,3})?")
# AP7361C-33E, AP63203WU-7
_AP = re.compile(r"^AP(\d{4,5})([A-Z]*)(\d{2})?")
# TLE4275G, TLE4274DV50
_TLE4 = re.compile(r"^TLE4(\d{3})[A-Z]*(\d{2})?")

_78XX_CURRENT = {"L": 0.1, "M": 0.5, None: 1.5}
_1117_CURRENT = {"1117": 1.0, "1084": 5.0, "1085": 3.0, "1086": 1.5}
_LM2596_VOLTAGES = {"33": 3.3, "50": 5.0, "12": 12.0, "15": 15.0}
_MCP_REGULATOR_CURRENT = {
    "700": 0.25, "702": 0.25, "703": 0.25, "711": 0.15, "725": 0.5,
    "726": 1.0, "727": 1.5, "754": 0.15, "755": 0.3, "799": 0.08,
}
# Standard fixed-output voltage codes (TPS73633, LT1763CS8-3.3)
_FIXED_OUTPUTS = {"12": 1.2, "15": 1.5, "18": 1.8, "25": 2.5, "28": 2.8, "30": 3.0, "33": 3.3, "50": 5.0}
# Fixed-output TLE4 parts without a voltage code
_TLE4_FIXED = {"275": 5.0, "271": 5.0, "276": 5.0, "678": 5.0, "263": 5.0}


def _regulator(
    topology: str, polarity: str, output: float | str, current: float | None, family: str,
) -> dict[str, Any]:
    specs: dict[str, Any] = {"topology": topology, "polarity": polarity, "outputVoltage": output, "family": family}
    if current is not None:
        specs["currentRating"] = current
    return specs


def _output_code(code: str | None) -> float | str:
    """Two-digit codes are tenths of a volt, three-digit codes hundredths; no code means adjustable."""
    if not code:
        return "ADJ"
    return int(code) / (10 if len(code) == 2 else 100)


def extract_voltage_regulator(identifier: str) -> dict[str, Any]:
    """Decode topology, polarity, output voltage and current of regulator families.

    Adjustable parts report outputVoltage 'ADJ' so they only match other adjustable parts.
    """
    match = _78XX.match(identifier)
    if match:
        series, variant, voltage = match.groups()
        polarity = "POSITIVE" if series == "78" else "NEGATIVE"
        return _regulator("LINEAR", polarity, float(int(voltage)), _78XX_CURRENT[variant], f"{series}{variant or ''}XX")

    match = _1117.match(identifier)
    if match:
        model, _, code = match.groups()
        current = 0.8 if identifier.startswith("LM") else _1117_CURRENT[model]
        return _regulator("LINEAR", "POSITIVE", _output_code(code), current, model)

    match = _LM3X7.match(identifier)
    if match:
        middle, low_current = match.groups()
        polarity = "POSITIVE" if middle == "1" else "NEGATIVE"
        current = 0.1 if low_current else 1.5
        return _regulator("LINEAR", polarity, "ADJ", current, f"LM3{middle}7")

    match = _LM2596.match(identifier)
    if match:
        output = _LM2596_VOLTAGES.get(match.group(2) or "", "ADJ")
        return _regulator("SWITCHING", "POSITIVE", output, 3.0, "LM2596")

    match = _MCP_REGULATOR.match(identifier)
    if match:
        model, _, code = match.groups()
        if model.startswith("6"):
            return _regulator("SWITCHING", "POSITIVE", "ADJ", None, f"MCP1{model}")
        return _regulator("LINEAR", "POSITIVE", _output_code(code), _MCP_REGULATOR_CURRENT.get(model), f"MCP1{model}")

    match = _AP2112.match(identifier)
    if match:
        return _regulator("LINEAR", "POSITIVE", int(match.group(1)) / 10, 0.6, "AP2112")

    match = _LD39.match(identifier)
    if match:
        current, code = match.groups()
        return _regulator("LINEAR", "POSITIVE", _output_code(code), int(current) / 100, f"LD39{current}")

    match = _TPS.match(identifier)
    if match:
        series, letter, model, tail = match.groups()
        family = f"TPS{series}{letter}{model}"
        if series == "7":
            return _regulator("LINEAR", "POSITIVE", _FIXED_OUTPUTS.get(tail[-2:], "ADJ"), None, family)
        return _regulator("SWITCHING", "POSITIVE", "ADJ", None, family)

    match = _ADP.match(identifier)
    if match:
        model, code = match.groups()
        switching = len(model) == 4 and (model[0] in "25" or model.startswith("16"))
        return _regulator("SWITCHING" if switching else "LINEAR", "POSITIVE", _output_code(code), None, f"ADP{model}")

    match = _LT.match(identifier)
    if match:
        prefix, series, model = match.groups()
        linear = series == "1" or model.startswith("0")
        # LT1763CS8-3.3: the package code carries digits, so only a trailing standard voltage counts
        output = _FIXED_OUTPUTS.get(identifier[-2:], "ADJ")
        return _regulator("LINEAR" if linear else "SWITCHING", "POSITIVE", output, None, f"{prefix}{series}{model}")

    match = _NCP.match(identifier)
    if match:
        model, _, code = match.groups()
        linear = len(model) == 3 or model[:2] in ("10", "11")
        return _regulator("LINEAR" if linear else "SWITCHING", "POSITIVE", _output_code(code), None, f"NCP{model}")

    match = _AP.match(identifier)
    if match:
        model, _, code = match.groups()
        topology = "LINEAR" if model[0] in "27" else "SWITCHING"
        return _regulator(topology, "POSITIVE", _output_code(code), None, f"AP{model}")

    match = _TLE4.match(identifier)
    if match:
        model, code = match.groups()
        output = _output_code(code) if code else _TLE4_FIXED.get(model, "ADJ")
        return _regulator("LINEAR", "POSITIVE", output, None, f"TLE4{model}")

    return {}


# =============================================================================
# LOGIC
# =============================================================================

# SN74HC595N, 74LVC1G04DBVR, MC74HC00: range, family letters, gate count, function
_74XX = re.compile(r"^(?:SN|CD|MC|M)?(74|54)([A-Z]*?)([123]G)?(\d{2,4})([A-Z0-9]*)")
# CD4051BE, HEF4094BT
_4000 = re.compile(r"^(?:CD|HEF|MC1)4(\d{3})B?([A-Z]*)")

_LOGIC_PACKAGE_SUFFIXES = (
    ("DBV", "SOT-23-5"), ("DCK", "SC-70"), ("PW", "TSSOP"), ("DR", "SOIC"),
    ("D", "SOIC"), ("N", "DIP"), ("E", "DIP"), ("M", "SOIC"), ("T", "SOIC"), ("P", "DIP"),
)


def extract_logic(identifier: str) -> dict[str, Any]:
    """Decode function, logic family, temperature grade and package of 74xx/4000-series parts."""
    match = _74XX.match(identifier)
    if match:
        series, family, gates, function, suffix = match.groups()
        specs: dict[str, Any] = {
            "function": f"{gates or ''}{function}",
            "family": family or "TTL",
            "grade": "COMMERCIAL" if series == "74" else "MILITARY",
        }
        package = _suffix_package(suffix, _LOGIC_PACKAGE_SUFFIXES)
        if package:
            specs["package"] = package
        return specs

    match = _4000.match(identifier)
    if match:
        function, suffix = match.groups()
        specs = {"function": f"4{function}", "family": "CD4000", "grade": "COMMERCIAL"}
        package = _suffix_package(suffix, _LOGIC_PACKAGE_SUFFIXES)
        if package:
            specs["package"] = package
        return specs

    return {}


# =============================================================================
# MEMORY
# =============================================================================

_W25 = re.compile(r"^W25([QXN])([A-Z]*?)(\d+)([A-Z]{2})?")
_GD25 = re.compile(r"^GD25([A-Z]+?)(\d+)")
# MX25L12835F, MX29LV640E, MX66L1G45G: series, voltage letters, then gigabits or a density code
_MACRONIX = re.compile(r"^MX(25|29|66)([A-Z]+)(?:(\d{1,2})G|(\d+))")
_IS25 = re.compile(r"^IS25([A-Z])[A-Z](\d+)")
_MICRON_SPI = re.compile(r"^(?:N25Q|MT25[A-Z]([LU]))(\d+)")
_M25P = re.compile(r"^M25P(\d+)")
_AT25_FLASH = re.compile(r"^AT25(SF|DF|XE)(\d+)")
_AT25_EEPROM = re.compile(r"^AT25C?(\d+)")
_I2C_EEPROM = re.compile(r"^(?:AT|M)?24(LC|AA|FC|C)?(\d+)")
_ISSI_SRAM = re.compile(r"^IS6([12])([A-Z]+)(\d{3,4})(8|16|32)")
# IS61LV256AL: depth-only numbering, the digits are the size in Kbit
_ISSI_SRAM_KBIT = re.compile(r"^IS6([12])([A-Z]+)(\d+)")
# IS42S16320D, IS43TR16256A: width, depth code
_ISSI_DRAM = re.compile(r"^IS4([235])([A-Z]+?)(\d{2})(\d{3})")
_MICRON_DRAM = re.compile(r"^MT4(\d)([A-Z]+?)(\d+)M[A-Z]?(\d+)")
_MICRON_NAND = re.compile(r"^MT29[A-Z](\d+)([GMT])")
# W9825G6KH, W9751G6KB: generation digit, density code
_WINBOND_DRAM = re.compile(r"^W9(\d)(\d{2})")

# Ordered so the longest density code wins: MX25L12835 is 128 Mbit, MX25L8006 is 8 Mbit
_MX25_DENSITIES = (
    "512", "256", "128", "64", "32", "16", "80", "40", "20", "10", "05", "040", "080", "010", "020",
)
_WINBOND_VOLTAGES = {"JV": 3.3, "FV": 3.3, "DV": 3.3, "BV": 3.3, "JW": 1.8, "FW": 1.8, "DW": 1.8}
_EEPROM_VOLTAGES = {"LC": 2.5, "AA": 1.8, "FC": 1.8}
_AT25_EEPROM_KBIT = {"010": 1, "020": 2, "040": 4, "080": 8, "160": 16, "320": 32, "640": 64}
_MICRON_DRAM_TYPES = {
    "8": "SDRAM", "6": "DDR", "7": "DDR2", "1": "DDR3", "0": "DDR4",
    "2": "LPDDR2", "5": "PSRAM", "9": "RLDRAM", "3": "DRAM", "4": "DRAM",
}
# ISSI depth codes, in M words
_ISSI_DEPTHS = {
    "100": 1, "200": 2, "400": 4, "800": 8, "160": 16, "320": 32, "640": 64,
    "128": 128, "256": 256, "512": 512,
}
_WINBOND_DENSITIES = {"16": 16, "32": 32, "64": 64, "12": 128, "25": 256, "51": 512}
_WINBOND_DRAM_TYPES = {"8": "SDRAM", "4": "DDR", "7": "DDR2", "6": "PSRAM"}
_NAND_UNITS = {"M": 1, "G": 1024, "T": 1024 * 1024}


def _mbit(code: str) -> float:
    return CAPACITY_CODES[code] if code in CAPACITY_CODES else float(int(code))


def _memory(kind: str, interface: str, bits: float, family: str, voltage: float | None = None) -> dict[str, Any]:
    specs: dict[str, Any] = {"type": kind, "interface": interface, "capacity": float(bits), "family": family}
    if voltage is not None:
        specs["voltage"] = voltage
    return specs


def extract_memory(identifier: str) -> dict[str, Any]:
    """Decode memory technology, interface, capacity (bits) and supply voltage."""
    match = _W25.match(identifier)
    if match:
        kind, _, code, variant = match.groups()
        return _memory(
            "NAND_FLASH" if kind == "N" else "NOR_FLASH", "SPI", _mbit(code) * _MBIT,
            f"W25{kind}", _WINBOND_VOLTAGES.get(variant or ""),
        )

    match = _GD25.match(identifier)
    if match:
        letters, code = match.groups()
        voltage = 1.8 if letters.startswith("L") or letters.startswith("U") else 3.3
        return _memory("NOR_FLASH", "SPI", _mbit(code) * _MBIT, f"GD25{letters}", voltage)

    match = _MACRONIX.match(identifier)
    if match:
        series, letters, gigabits, digits = match.groups()
        if gigabits:
            bits = int(gigabits) * 1024 * _MBIT
        else:
            density = next((d for d in _MX25_DENSITIES if digits.startswith(d)), digits)
            if series == "25" and density == "512" and len(digits) == 3:
                bits = 512 * _KBIT
            else:
                bits = _mbit(density) * _MBIT
        if series == "29":
            voltage = 5.0 if letters.startswith("F") else 3.3
            return _memory("NOR_FLASH", "PARALLEL", bits, f"MX29{letters}", voltage)
        return _memory("NOR_FLASH", "SPI", bits, f"MX{series}{letters[0]}", 1.8 if letters[0] in "UR" else 3.3)

    match = _IS25.match(identifier)
    if match:
        variant, code = match.groups()
        voltage = {"L": 3.3, "W": 1.8}.get(variant)
        return _memory("NOR_FLASH", "SPI", _mbit(code) * _MBIT, f"IS25{variant}", voltage)

    match = _MICRON_SPI.match(identifier)
    if match:
        variant, code = match.groups()
        voltage = {"L": 3.3, "U": 1.8}.get(variant or "")
        return _memory("NOR_FLASH", "SPI", _mbit(code) * _MBIT, "MT25Q" if variant else "N25Q", voltage)

    match = _M25P.match(identifier)
    if match:
        return _memory("NOR_FLASH", "SPI", _mbit(match.group(1)) * _MBIT, "M25P", 3.3)

    match = _AT25_FLASH.match(identifier)
    if match:
        variant, digits = match.groups()
        mbit = 128 if digits.startswith("128") else int(digits[:2])
        return _memory("NOR_FLASH", "SPI", mbit * _MBIT, f"AT25{variant}")

    match = _AT25_EEPROM.match(identifier)
    if match:
        digits = match.group(1)
        kbit = _AT25_EEPROM_KBIT.get(digits[:3], int(digits[:3]))
        return _memory("EEPROM", "SPI", kbit * _KBIT, "AT25")

    match = _I2C_EEPROM.match(identifier)
    if match:
        variant, kbit = match.groups()
        return _memory("EEPROM", "I2C", int(kbit) * _KBIT, "24XX", _EEPROM_VOLTAGES.get(variant or ""))

    match = _ISSI_SRAM.match(identifier)
    if match:
        series, _, depth, width = match.groups()
        return _memory("SRAM", "PARALLEL", int(depth) * _KBIT * int(width), f"IS6{series}", 3.3)

    match = _ISSI_SRAM_KBIT.match(identifier)
    if match:
        series, _, kbit = match.groups()
        return _memory("SRAM", "PARALLEL", int(kbit) * _KBIT, f"IS6{series}", 3.3)

    match = _ISSI_DRAM.match(identifier)
    if match:
        series, letters, width, depth = match.groups()
        if letters.endswith("TR"):
            kind = "DDR3"
        elif letters.endswith("DR"):
            kind = "DDR2"
        elif letters.endswith("R"):
            kind = "DDR"
        else:
            kind = "SDRAM"
        depth_m = _ISSI_DEPTHS.get(depth, int(depth[:2]))
        return _memory(kind, "PARALLEL", depth_m * _MBIT * int(width), f"IS4{series}{letters}")

    match = _MICRON_DRAM.match(identifier)
    if match:
        generation, letters, depth, width = match.groups()
        kind = _MICRON_DRAM_TYPES[generation]
        return _memory(kind, "PARALLEL", int(depth) * _MBIT * int(width), f"MT4{generation}{letters}")

    match = _MICRON_NAND.match(identifier)
    if match:
        size, unit = match.groups()
        return _memory("NAND_FLASH", "PARALLEL", int(size) * _NAND_UNITS[unit] * _MBIT, "MT29F")

    match = _WINBOND_DRAM.match(identifier)
    if match:
        generation, code = match.groups()
        mbit = _WINBOND_DENSITIES.get(code, int(code))
        kind = _WINBOND_DRAM_TYPES.get(generation, "DRAM")
        return _memory(kind, "PARALLEL", mbit * _MBIT, f"W9{generation}")

    return {}


# =============================================================================
# MICROCONTROLLERS
# =============================================================================

# STM32F103C8T6, GD32F303RCT6, CH32V003F4P6: line, core digit, model, pins, flash, package
_ARM_STYLE = re.compile(r"^(STM32|GD32|CH32)([A-Z]{1,2})(\d)(\d{1,2})([A-Z])([0-9A-Z])([A-Z])?")
_STM8 = re.compile(r"^STM8([A-Z])(\d{3})([A-Z])(\d)([A-Z])?")
_ATMEGA = re.compile(r"^ATMEGA(\d+)([A-Z]*)")
_ATTINY = re.compile(r"^ATTINY(\d+)([A-Z]*)")
_PIC = re.compile(r"^(PIC|DSPIC)(\d{2})([A-Z]+)(\d+)")
_ESP = re.compile(r"^ESP(32|8266)([A-Z0-9]*)")
_ESP_FLASH = re.compile(r"N(\d+)(?:R\d+)?$")
_MSP430 = re.compile(r"^MSP430([A-Z]+)(\d)(\d+)")
_NRF = re.compile(r"^NRF5(\d)(\d{3})")
# Ordering codes outside the regular line/pins/flash layout still name their family
_ARM_FAMILY = re.compile(r"^(STM32|GD32|CH32|STM8)([A-Z]{1,2})(\d)")
# XMC1100-T016F0064: family digit, model, then package, pins and flash (KB)
_XMC = re.compile(r"^XMC(\d)(\d{3})(?:([TQF])(\d{3})F(\d{3,4}))?")
_XMC_PACKAGES = {"T": "TSSOP", "Q": "VQFN", "F": "LQFP"}

_PIN_CODES = {
    "F": 20, "G": 28, "K": 32, "T": 36, "C": 48, "R": 64, "V": 100,
    "Q": 132, "Z": 144, "A": 169, "I": 176, "B": 208, "N": 216,
}
_FLASH_CODES_KB = {
    "3": 8, "4": 16, "6": 32, "8": 64, "B": 128, "C": 256, "D": 384,
    "E": 512, "F": 768, "G": 1024, "H": 1536, "I": 2048,
}
_PACKAGE_CODES = {"T": "LQFP", "U": "UFQFPN", "H": "BGA", "Y": "WLCSP", "P": "TSSOP", "M": "SOIC", "J": "UFBGA"}
_AVR_PACKAGES = (("AU", "TQFP"), ("PU", "DIP"), ("MU", "QFN"), ("SU", "SOIC"), ("SSU", "SOIC"))
_ESP32_VARIANTS = ("S2", "S3", "C2", "C3", "C5", "C6", "H2", "P4")
_NRF_FLASH_KB = {"52832": 512, "52833": 512, "52840": 1024, "52810": 192, "52811": 192, "51822": 256}


def _avr_package(letters: str) -> str | None:
    for code, package in sorted(_AVR_PACKAGES, key=lambda entry: -len(entry[0])):
        if letters.endswith(code):
            return package
    return None


def extract_microcontroller(identifier: str) -> dict[str, Any]:
    """Decode family, series, flash size (KB), pin count and package of MCU part numbers."""
    match = _ARM_STYLE.match(identifier)
    if match:
        vendor, line, core, model, pins, flash, package = match.groups()
        specs: dict[str, Any] = {
            "family": f"{vendor}{line}{core}",
            "series": f"{vendor}{line}{core}{model}",
        }
        if pins in _PIN_CODES:
            specs["pinCount"] = _PIN_CODES[pins]
        if flash in _FLASH_CODES_KB:
            specs["flashSize"] = _FLASH_CODES_KB[flash]
        if package in _PACKAGE_CODES:
            specs["package"] = _PACKAGE_CODES[package]
        return specs

    match = _STM8.match(identifier)
    if match:
        line, model, pins, flash, package = match.groups()
        specs = {"family": f"STM8{line}", "series": f"STM8{line}{model}"}
        if pins in _PIN_CODES:
            specs["pinCount"] = _PIN_CODES[pins]
        if flash in _FLASH_CODES_KB:
            specs["flashSize"] = _FLASH_CODES_KB[flash]
        if package in _PACKAGE_CODES:
            specs["package"] = _PACKAGE_CODES[package]
        return specs

    match = _ATMEGA.match(identifier)
    if match:
        digits, letters = match.groups()
        # ATmega328 -> 32 KB, ATmega2560 -> 256 KB, ATmega48/88 -> 4/8 KB, ATmega16 -> 16 KB
        if len(digits) >= 3 or digits in ("48", "88"):
            flash = int(digits[:-1])
        else:
            flash = int(digits)
        specs = {"family": "ATMEGA", "series": f"ATMEGA{digits}", "flashSize": flash}
        package = _avr_package(letters)
        if package:
            specs["package"] = package
        return specs

    match = _ATTINY.match(identifier)
    if match:
        digits, letters = match.groups()
        # ATtiny85-20PU normalizes to ATTINY8520PU; drop the speed grade
        if len(digits) == 4 and digits[2:] in ("10", "20") and digits[:2] not in ("16", "32"):
            digits = digits[:2]
        # ATtiny85 -> 8 KB, ATtiny1614 -> 16 KB, ATtiny3216 -> 32 KB, ATtiny2313 -> 2 KB
        if len(digits) == 4 and digits[:2] in ("16", "32"):
            flash = int(digits[:2])
        else:
            flash = int(digits[0])
        specs = {"family": "ATTINY", "series": f"ATTINY{digits}", "flashSize": flash}
        package = _avr_package(letters)
        if package:
            specs["package"] = package
        return specs

    match = _PIC.match(identifier)
    if match:
        prefix, bits, letters, model = match.groups()
        return {"family": f"{prefix}{bits}", "series": f"{prefix}{bits}{letters}{model}"}

    match = _ESP.match(identifier)
    if match:
        line, rest = match.groups()
        variant = next((v for v in _ESP32_VARIANTS if rest.startswith(v)), "") if line == "32" else ""
        specs = {"family": f"ESP{line}", "series": f"ESP{line}{variant}"}
        flash = _ESP_FLASH.search(rest)
        if flash:
            specs["flashSize"] = int(flash.group(1)) * 1024
        return specs

    match = _MSP430.match(identifier)
    if match:
        letters, generation, _ = match.groups()
        return {"family": "MSP430", "series": f"MSP430{letters}{generation}"}
    if identifier.startswith("MSP430"):
        return {"family": "MSP430"}

    match = _NRF.match(identifier)
    if match:
        generation, model = match.groups()
        number = f"5{generation}{model}"
        specs = {"family": f"NRF5{generation}", "series": f"NRF{number}"}
        if number in _NRF_FLASH_KB:
            specs["flashSize"] = _NRF_FLASH_KB[number]
        return specs

    match = _XMC.match(identifier)
    if match:
        generation, model, package, pins, flash = match.groups()
        specs = {"family": f"XMC{generation}000", "series": f"XMC{generation}{model}"}
        if package:
            specs["package"] = _XMC_PACKAGES[package]
            specs["pinCount"] = int(pins)
            specs["flashSize"] = int(flash)
        return specs

    match = _ARM_FAMILY.match(identifier)
    if match:
        vendor, line, core = match.groups()
        if vendor == "STM8":
            return {"family": f"STM8{line}"}
        return {"family": f"{vendor}{line}{core}"}

    return {}


# =============================================================================
# SENSORS
# =============================================================================

# prefix -> (sensor type, interface); first matching prefix wins, so specific prefixes come first
_SENSOR_PREFIXES: tuple[tuple[str, str, str | None], ...] = (
    ("BME68", "ENVIRONMENTAL_GAS", "I2C_SPI"),
    ("BME", "ENVIRONMENTAL", "I2C_SPI"),
    ("BMP18", "PRESSURE", "I2C"),
    ("BMP", "PRESSURE", "I2C_SPI"),
    ("BMI", "IMU", "I2C_SPI"),
    ("BMA", "ACCELEROMETER", "I2C_SPI"),
    ("BMG", "GYROSCOPE", "I2C_SPI"),
    ("BMM", "MAGNETOMETER", "I2C_SPI"),
    ("BNO", "IMU", "I2C"),
    ("SHT", "HUMIDITY", "I2C"),
    ("STS", "TEMPERATURE", "I2C"),
    ("SGP", "GAS", "I2C"),
    ("SCD", "CO2", "I2C"),
    ("SDP", "DIFFERENTIAL_PRESSURE", "I2C"),
    ("MPU", "IMU", "I2C_SPI"),
    ("ICM", "IMU", "I2C_SPI"),
    ("ACS", "CURRENT", "ANALOG"),
    ("TMP3", "TEMPERATURE", "ANALOG"),
    ("TMP", "TEMPERATURE", "I2C"),
    ("LM35", "TEMPERATURE", "ANALOG"),
    ("LM75", "TEMPERATURE", "I2C"),
    ("HDC", "HUMIDITY", "I2C"),
    ("MCP970", "TEMPERATURE", "ANALOG"),
    ("MCP97", "TEMPERATURE", "I2C"),
    ("MCP98", "TEMPERATURE", "I2C"),
)


def extract_sensor(identifier: str) -> dict[str, Any]:
    """Decode the measured quantity and bus interface of common sensor families."""
    for prefix, sensor_type, interface in _SENSOR_PREFIXES:
        if identifier.startswith(prefix):
            specs: dict[str, Any] = {"sensorType": sensor_type, "family": extract_series(identifier)}
            if interface:
                specs["interface"] = interface
            return specs
    return {}
