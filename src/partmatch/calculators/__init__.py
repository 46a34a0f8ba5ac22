"""Ordered calculator list and dispatch helpers.

Order is significant: the first calculator applicable to either part's type scores the
pair and its result is final. Specific domains come before generic ones and related
types are grouped (semiconductor ICs, then discretes, then passives, then interconnect).
"""

import logging
import threading
from typing import Iterable, Mapping

from ..component_types import (
    TypeTag, RESISTOR, CAPACITOR, INDUCTOR, DIODE, LED, TRANSISTOR, MOSFET, OPAMP,
    VOLTAGE_REGULATOR, LOGIC_IC, MEMORY, MICROCONTROLLER, SENSOR, CONNECTOR,
)
from ..extractors import (
    extract_resistor, extract_capacitor, extract_inductor, extract_diode, extract_led,
    extract_mosfet, extract_transistor, extract_opamp, extract_voltage_regulator,
    extract_logic, extract_memory, extract_microcontroller, extract_sensor, extract_connector,
)
from ..metadata import MetadataRegistry, get_registry
from .base import SimilarityCalculator, SpecCalculator
from .fallback import DefaultSimilarityCalculator, legacy_similarity
from . import part_metadata

logger = logging.getLogger(__name__)

__all__ = [
    "SimilarityCalculator",
    "SpecCalculator",
    "DefaultSimilarityCalculator",
    "DEFAULT_CALCULATOR",
    "legacy_similarity",
    "build_calculators",
    "get_calculators",
    "reset_calculators",
    "find_calculator",
    "shadowing_violations",
]

DEFAULT_CALCULATOR = DefaultSimilarityCalculator()


def build_calculators(registry: MetadataRegistry | None = None) -> tuple[SimilarityCalculator, ...]:
    """Build the fixed-order calculator tuple.

    Resistor and capacitor calculators score against the registry's metadata, so
    metadata registered for those types before this call is picked up.
    """
    registry = registry if registry is not None else get_registry()
    resistor_metadata = registry.lookup(RESISTOR)
    capacitor_metadata = registry.lookup(CAPACITOR)
    if resistor_metadata is None or capacitor_metadata is None:
        raise ValueError("Metadata registry must describe RESISTOR and CAPACITOR")

    return (
        SpecCalculator("VoltageRegulator", VOLTAGE_REGULATOR, part_metadata.VOLTAGE_REGULATOR_PART, extract_voltage_regulator),
        SpecCalculator("LED", LED, part_metadata.LED_PART, extract_led),
        SpecCalculator("OpAmp", OPAMP, part_metadata.OPAMP_PART, extract_opamp),
        SpecCalculator("LogicIC", LOGIC_IC, part_metadata.LOGIC_IC_PART, extract_logic),
        SpecCalculator("Memory", MEMORY, part_metadata.MEMORY_PART, extract_memory),
        SpecCalculator("Diode", DIODE, part_metadata.DIODE_PART, extract_diode),
        SpecCalculator("Sensor", SENSOR, part_metadata.SENSOR_PART, extract_sensor),
        SpecCalculator("Mosfet", MOSFET, part_metadata.MOSFET_PART, extract_mosfet),
        SpecCalculator("Transistor", TRANSISTOR, part_metadata.TRANSISTOR_PART, extract_transistor),
        SpecCalculator("Microcontroller", MICROCONTROLLER, part_metadata.MICROCONTROLLER_PART, extract_microcontroller),
        SpecCalculator("Resistor", RESISTOR, resistor_metadata, extract_resistor),
        SpecCalculator("Capacitor", CAPACITOR, capacitor_metadata, extract_capacitor),
        SpecCalculator("Inductor", INDUCTOR, part_metadata.INDUCTOR_PART, extract_inductor),
        SpecCalculator("Connector", CONNECTOR, part_metadata.CONNECTOR_PART, extract_connector),
    )


# Global state
_calculators: tuple[SimilarityCalculator, ...] | None = None
_calculators_lock = threading.Lock()


def get_calculators() -> tuple[SimilarityCalculator, ...]:
    """Get or build the process-wide calculator list (thread-safe)."""
    global _calculators
    if _calculators is None:
        with _calculators_lock:
            # Double-check locking pattern
            if _calculators is None:
                _calculators = build_calculators()
                logger.debug(f"Built {len(_calculators)} calculators")
    return _calculators


def reset_calculators() -> None:
    """Drop the cached list so the next get_calculators() rebuilds from the current registry."""
    global _calculators
    with _calculators_lock:
        _calculators = None


def find_calculator(
    type_a: TypeTag | None,
    type_b: TypeTag | None,
    calculators: Iterable[SimilarityCalculator] | None = None,
) -> SimilarityCalculator | None:
    """First calculator applicable to either type, or None."""
    for calculator in calculators if calculators is not None else get_calculators():
        if calculator.is_applicable(type_a) or calculator.is_applicable(type_b):
            return calculator
    return None


def shadowing_violations(
    calculators: Iterable[SimilarityCalculator],
    samples: Mapping[TypeTag, Iterable[str]],
) -> list[tuple[SimilarityCalculator, TypeTag, str]]:
    """Find calculators that claim a type but score its valid parts 0.0.

    For every calculator and every sample type it claims, each sample part is scored
    against itself. A claimed part that cannot even match itself means the calculator
    claims more than it can score and would silently shadow later calculators.
    """
    violations = []
    for calculator in calculators:
        for type_tag, mpns in samples.items():
            if not calculator.is_applicable(type_tag):
                continue
            for mpn in mpns:
                if calculator.similarity(mpn, mpn) == 0.0:
                    logger.warning(f"{calculator.name} claims {type_tag} but scores {mpn!r} 0.0 against itself")
                    violations.append((calculator, type_tag, mpn))
    return violations
