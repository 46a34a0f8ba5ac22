"""Spec decoding for wire-to-board and pin-header connectors (JST, Molex, Wurth)."""

import re
from typing import Any

# B4B-XH-A, S3B-PH-K-S: orientation letter, circuits, series
_JST = re.compile(r"^([BS])(\d{1,2})B(XH|PH|ZR|EH|SH|GH|VH)")
# 61300411121 (WR-PHD pin header), 61201021621 (WR-BHD box header): series digit, pins in digits 5-6
_WURTH_HEADER = re.compile(r"^61([23])0(\d{2})(\d+)")

_JST_PITCH_MM = {"XH": 2.5, "PH": 2.0, "ZR": 1.5, "EH": 2.5, "SH": 1.0, "GH": 1.25, "VH": 3.96}

# series -> (pitch mm, family, orientation, slice of the suffix holding the circuit count)
_MOLEX_SERIES: dict[str, tuple[float, str, str, slice]] = {
    "53047": (1.25, "PICOBLADE", "VERTICAL", slice(0, 2)),
    "53048": (1.25, "PICOBLADE", "RIGHT_ANGLE", slice(0, 2)),
    "53261": (1.25, "PICOBLADE", "RIGHT_ANGLE", slice(0, 2)),
    "53398": (1.25, "PICOBLADE", "VERTICAL", slice(0, 2)),
    "51021": (1.25, "PICOBLADE", "CABLE", slice(0, 2)),
    "43045": (3.0, "MICRO-FIT", "RIGHT_ANGLE", slice(0, 2)),
    "43650": (3.0, "MICRO-FIT", "VERTICAL", slice(0, 2)),
    "43025": (3.0, "MICRO-FIT", "CABLE", slice(0, 2)),
    "87758": (2.0, "MILLI-GRID", "VERTICAL", slice(0, 2)),
    "87832": (2.0, "MILLI-GRID", "VERTICAL", slice(0, 2)),
    "2223": (2.54, "KK254", "VERTICAL", slice(1, 3)),
    "2201": (2.54, "KK254", "CABLE", slice(1, 3)),
}
_MOLEX_KEYS = sorted(_MOLEX_SERIES, key=len, reverse=True)

_WURTH_FAMILIES = {"3": "WR-PHD", "2": "WR-BHD"}


def extract_connector(identifier: str) -> dict[str, Any]:
    """Decode pin count, pitch (mm), family and mounting orientation."""
    match = _JST.match(identifier)
    if match:
        orientation, circuits, series = match.groups()
        return {
            "pinCount": int(circuits),
            "pitch": _JST_PITCH_MM[series],
            "family": f"JST_{series}",
            "orientation": "VERTICAL" if orientation == "B" else "SIDE_ENTRY",
        }

    for series in _MOLEX_KEYS:
        if identifier.startswith(series):
            pitch, family, orientation, circuit_digits = _MOLEX_SERIES[series]
            circuits = identifier[len(series):][circuit_digits]
            if not circuits.isdigit() or int(circuits) == 0:
                return {}
            return {"pinCount": int(circuits), "pitch": pitch, "family": family, "orientation": orientation}

    match = _WURTH_HEADER.match(identifier)
    if match:
        series, pins, _ = match.groups()
        if int(pins) == 0:
            return {}
        return {"pinCount": int(pins), "pitch": 2.54, "family": _WURTH_FAMILIES[series]}

    return {}
