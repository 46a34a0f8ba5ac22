"""Decode the specs a part number encodes on its own.

Each extractor takes a normalized identifier and returns a dict keyed by the same spec
names the type metadata declares ('resistance', 'voltageRating', 'channels', ...). An
extractor returns {} when it cannot decode the identifier; it never raises.
"""

from typing import Any, Callable

from ..classify import classify
from .connectors import extract_connector
from .ics import (
    extract_opamp, extract_voltage_regulator, extract_logic, extract_memory,
    extract_microcontroller, extract_sensor,
)
from .passives import extract_resistor, extract_capacitor, extract_inductor
from .semiconductors import extract_diode, extract_led, extract_mosfet, extract_transistor

Extractor = Callable[[str], dict[str, Any]]

# Base type name -> extractor
EXTRACTORS: dict[str, Extractor] = {
    "RESISTOR": extract_resistor,
    "CAPACITOR": extract_capacitor,
    "INDUCTOR": extract_inductor,
    "DIODE": extract_diode,
    "LED": extract_led,
    "MOSFET": extract_mosfet,
    "TRANSISTOR": extract_transistor,
    "OPAMP": extract_opamp,
    "VOLTAGE_REGULATOR": extract_voltage_regulator,
    "LOGIC_IC": extract_logic,
    "MEMORY": extract_memory,
    "MICROCONTROLLER": extract_microcontroller,
    "SENSOR": extract_sensor,
    "CONNECTOR": extract_connector,
}


def extract_specs(mpn: str | None) -> dict[str, Any]:
    """Classify mpn and decode its specs with the extractor for its base type."""
    classification = classify(mpn)
    if classification.type_tag is None:
        return {}
    extractor = EXTRACTORS.get(classification.type_tag.base)
    if extractor is None:
        return {}
    return extractor(classification.identifier)


__all__ = [
    "EXTRACTORS",
    "Extractor",
    "extract_specs",
    "extract_resistor",
    "extract_capacitor",
    "extract_inductor",
    "extract_diode",
    "extract_led",
    "extract_mosfet",
    "extract_transistor",
    "extract_opamp",
    "extract_voltage_regulator",
    "extract_logic",
    "extract_memory",
    "extract_microcontroller",
    "extract_sensor",
    "extract_connector",
]
