"""Metadata describing the specs a part number encodes, per component type.

Registry metadata (partmatch.metadata) describes datasheet-level specs. Most of those
never appear in an MPN, so calculators for these types score against the narrower
declarations below, which list only what the extractors can decode.
"""

from ..component_types import (
    TypeTag, INDUCTOR, DIODE, LED, TRANSISTOR, MOSFET, OPAMP, VOLTAGE_REGULATOR, LOGIC_IC, MEMORY,
    MICROCONTROLLER, SENSOR, CONNECTOR,
)
from ..config import DEFAULT_PROFILE
from ..importance import Importance
from ..metadata import ComponentTypeMetadata, MetadataBuilder
from ..profiles import SimilarityProfile
from ..tolerance import exact_match, percentage_tolerance, minimum_required, maximum_allowed, range_tolerance

_C, _H, _M, _L = Importance.CRITICAL, Importance.HIGH, Importance.MEDIUM, Importance.LOW


def _builder(type_tag: TypeTag) -> MetadataBuilder:
    return ComponentTypeMetadata.builder(type_tag).default_profile(SimilarityProfile.from_name(DEFAULT_PROFILE))


VOLTAGE_REGULATOR_PART = (
    _builder(VOLTAGE_REGULATOR)
    .add_spec("topology", _C, exact_match())
    .add_spec("polarity", _C, exact_match())
    .add_spec("outputVoltage", _C, percentage_tolerance(2.0))
    .add_spec("currentRating", _H, minimum_required())
    .add_spec("family", _M, exact_match())
    .build()
)

LED_PART = (
    _builder(LED)
    .add_spec("color", _C, exact_match())
    .add_spec("package", _H, exact_match())
    .add_spec("series", _M, exact_match())
    .build()
)

OPAMP_PART = (
    _builder(OPAMP)
    .add_spec("channels", _C, exact_match())
    .add_spec("inputType", _H, exact_match())
    .add_spec("family", _H, exact_match())
    .add_spec("package", _M, exact_match())
    .build()
)

LOGIC_IC_PART = (
    _builder(LOGIC_IC)
    .add_spec("function", _C, exact_match())
    .add_spec("family", _H, exact_match())
    .add_spec("grade", _M, exact_match())
    .add_spec("package", _L, exact_match())
    .build()
)

MEMORY_PART = (
    _builder(MEMORY)
    .add_spec("type", _C, exact_match())
    .add_spec("interface", _C, exact_match())
    .add_spec("capacity", _C, minimum_required())
    .add_spec("voltage", _H, exact_match())
    .add_spec("family", _M, exact_match())
    .build()
)

DIODE_PART = (
    _builder(DIODE)
    .add_spec("type", _C, exact_match())
    .add_spec("voltageRating", _H, minimum_required())
    .add_spec("zenerVoltage", _H, percentage_tolerance(5.0))
    .add_spec("currentRating", _H, minimum_required())
    .add_spec("family", _M, exact_match())
    .add_spec("package", _L, exact_match())
    .build()
)

SENSOR_PART = (
    _builder(SENSOR)
    .add_spec("sensorType", _C, exact_match())
    .add_spec("interface", _H, exact_match())
    .add_spec("family", _M, exact_match())
    .build()
)

MOSFET_PART = (
    _builder(MOSFET)
    .add_spec("channel", _C, exact_match())
    .add_spec("voltageRating", _H, minimum_required())
    .add_spec("currentRating", _H, minimum_required())
    .add_spec("rdsOn", _M, maximum_allowed(1.2))
    .add_spec("package", _L, exact_match())
    .add_spec("family", _L, exact_match())
    .build()
)

TRANSISTOR_PART = (
    _builder(TRANSISTOR)
    .add_spec("polarity", _C, exact_match())
    .add_spec("voltageRating", _H, minimum_required())
    .add_spec("currentRating", _H, minimum_required())
    .add_spec("hfe", _M, range_tolerance(30.0, 50.0))
    .add_spec("package", _L, exact_match())
    .add_spec("family", _L, exact_match())
    .build()
)

MICROCONTROLLER_PART = (
    _builder(MICROCONTROLLER)
    .add_spec("family", _C, exact_match())
    .add_spec("series", _H, exact_match())
    .add_spec("flashSize", _H, minimum_required())
    .add_spec("pinCount", _M, minimum_required())
    .add_spec("package", _M, exact_match())
    .build()
)

INDUCTOR_PART = (
    _builder(INDUCTOR)
    .add_spec("inductance", _C, percentage_tolerance(10.0))
    .add_spec("package", _H, exact_match())
    .add_spec("tolerance", _M, exact_match())
    .add_spec("family", _L, exact_match())
    .build()
)

CONNECTOR_PART = (
    _builder(CONNECTOR)
    .add_spec("pinCount", _C, exact_match())
    .add_spec("pitch", _C, exact_match())
    .add_spec("family", _H, exact_match())
    .add_spec("orientation", _M, exact_match())
    .build()
)
