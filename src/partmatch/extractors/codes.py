"""Ordering-code tables shared by several part-number decoders."""

# Tolerance letters used by resistor, capacitor and inductor ordering codes (percent)
TOLERANCE_CODES: dict[str, float] = {
    "B": 0.1, "C": 0.25, "D": 0.5, "F": 1.0, "G": 2.0,
    "J": 5.0, "K": 10.0, "L": 15.0, "M": 20.0, "N": 30.0,
}

# JIS/EIA two-character rated-voltage codes (Murata, TDK, Panasonic)
JIS_VOLTAGE_CODES: dict[str, float] = {
    "0E": 2.5, "0G": 4.0, "0J": 6.3, "1A": 10.0, "1C": 16.0, "1E": 25.0,
    "1V": 35.0, "1H": 50.0, "1J": 63.0, "1K": 80.0, "2A": 100.0, "2C": 160.0, "2D": 200.0,
    "2E": 250.0, "2F": 315.0, "2V": 350.0, "2G": 400.0, "2H": 500.0,
    "2W": 450.0, "2J": 630.0, "3A": 1000.0,
}

# Typical chip-resistor power rating by imperial size (watts)
RESISTOR_POWER_BY_SIZE: dict[str, float] = {
    "01005": 0.03, "0201": 0.05, "0402": 0.0625, "0603": 0.1, "0805": 0.125,
    "1206": 0.25, "1210": 0.5, "1812": 0.75, "2010": 0.75, "2512": 1.0,
}

# Ceramic dielectric class -> temperature characteristic
TEMPERATURE_CHARACTERISTICS: dict[str, str] = {
    "C0G": "±30ppm/°C",
    "X8R": "±15%",
    "X7R": "±15%",
    "X6S": "±22%",
    "X5R": "±15%",
    "X7S": "±22%",
    "X7T": "+22/-33%",
    "Y5V": "+22/-82%",
    "Z5U": "+22/-56%",
}

# Memory density codes (Mbit) whose digits are not the literal size; others read as-is
CAPACITY_CODES: dict[str, float] = {
    "05": 0.5, "10": 1, "20": 2, "40": 4, "80": 8,
    "010": 1, "020": 2, "040": 4, "080": 8,
    "01": 1024, "02": 2048,
}
