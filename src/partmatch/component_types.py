"""Component type tags: a closed set of base types plus manufacturer-qualified subtypes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TypeTag:
    """Two-field type key. variant=None is a base tag, otherwise a manufacturer subtype.

    TypeTag("RESISTOR", "CHIP_YAGEO").name == "RESISTOR_CHIP_YAGEO"
    """
    base: str
    variant: str | None = None

    @property
    def name(self) -> str:
        return f"{self.base}_{self.variant}" if self.variant else self.base

    @property
    def is_subtype(self) -> bool:
        return self.variant is not None

    @property
    def base_tag(self) -> "TypeTag":
        return TypeTag(self.base) if self.variant else self

    @property
    def specificity(self) -> int:
        """Higher is more specific: subtype 4, concrete base 3, analog/digital IC 2, IC 1."""
        if self.variant:
            return 4
        return _GENERIC_SPECIFICITY.get(self.base, 3)

    def subtype(self, variant: str) -> "TypeTag":
        return TypeTag(self.base, variant)

    def __str__(self) -> str:
        return self.name


RESISTOR = TypeTag("RESISTOR")
CAPACITOR = TypeTag("CAPACITOR")
INDUCTOR = TypeTag("INDUCTOR")
DIODE = TypeTag("DIODE")
LED = TypeTag("LED")
TRANSISTOR = TypeTag("TRANSISTOR")
MOSFET = TypeTag("MOSFET")
OPAMP = TypeTag("OPAMP")
VOLTAGE_REGULATOR = TypeTag("VOLTAGE_REGULATOR")
LOGIC_IC = TypeTag("LOGIC_IC")
MEMORY = TypeTag("MEMORY")
MICROCONTROLLER = TypeTag("MICROCONTROLLER")
SENSOR = TypeTag("SENSOR")
CRYSTAL = TypeTag("CRYSTAL")
CONNECTOR = TypeTag("CONNECTOR")
ANALOG_IC = TypeTag("ANALOG_IC")
DIGITAL_IC = TypeTag("DIGITAL_IC")
IC = TypeTag("IC")

BASE_TAGS: tuple[TypeTag, ...] = (
    RESISTOR, CAPACITOR, INDUCTOR, DIODE, LED, TRANSISTOR, MOSFET,
    OPAMP, VOLTAGE_REGULATOR, LOGIC_IC, MEMORY, MICROCONTROLLER, SENSOR,
    CRYSTAL, CONNECTOR, ANALOG_IC, DIGITAL_IC, IC,
)

# Generic categories rank below concrete component types
_GENERIC_SPECIFICITY = {"ANALOG_IC": 2, "DIGITAL_IC": 2, "IC": 1}

# Longest first so "ANALOG_IC_X" resolves to ANALOG_IC rather than IC
_BASES_BY_LENGTH = sorted((t.base for t in BASE_TAGS), key=len, reverse=True)


def parse_tag(name: str | TypeTag | None) -> TypeTag | None:
    """Parse 'RESISTOR' or 'RESISTOR_CHIP_YAGEO' into a TypeTag.

    Returns None for None/empty input and for names that do not start with a base tag.
    """
    if isinstance(name, TypeTag):
        return name
    if not name:
        return None
    name = name.strip().upper()
    for base in _BASES_BY_LENGTH:
        if name == base:
            return TypeTag(base)
        if name.startswith(base + "_"):
            return TypeTag(base, name[len(base) + 1:])
    return None
