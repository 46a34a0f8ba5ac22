"""Component-type metadata: which specs matter for a type, how much, and how they compare.

Metadata objects are built once through ComponentTypeMetadata.builder() and are
immutable afterwards. The MetadataRegistry is an immutable snapshot keyed by type
tag, with base-type fallback for manufacturer subtypes. The process-wide default
registry is built lazily and replaced wholesale on registration, so readers always
see a complete snapshot.
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType

from .component_types import (
    TypeTag, parse_tag, RESISTOR, CAPACITOR, MOSFET, TRANSISTOR, DIODE, OPAMP,
    MICROCONTROLLER, MEMORY, LED, CONNECTOR,
)
from .importance import Importance
from .profiles import SimilarityProfile
from .tolerance import (
    ToleranceRule, exact_match, percentage_tolerance, minimum_required,
    maximum_allowed, range_tolerance,
)

logger = logging.getLogger(__name__)

__all__ = [
    "SpecDefinition",
    "ComponentTypeMetadata",
    "MetadataBuilder",
    "MetadataRegistry",
    "build_default_registry",
    "get_registry",
    "register_type_metadata",
    "lookup_type_metadata",
    "reset_registry",
]


@dataclass(frozen=True)
class SpecDefinition:
    """One declared spec: importance tier, comparison rule, and whether it is mandatory."""
    name: str
    importance: Importance
    rule: ToleranceRule
    critical: bool = False


@dataclass(frozen=True)
class ComponentTypeMetadata:
    type_tag: TypeTag
    specs: tuple[SpecDefinition, ...]
    default_profile: SimilarityProfile = SimilarityProfile.REPLACEMENT

    @staticmethod
    def builder(type_tag: TypeTag | str) -> "MetadataBuilder":
        return MetadataBuilder(type_tag)

    def spec(self, name: str) -> SpecDefinition | None:
        for spec in self.specs:
            if spec.name == name:
                return spec
        return None

    def importance(self, name: str) -> Importance:
        """Importance of a spec; specs the type does not declare are OPTIONAL."""
        spec = self.spec(name)
        return spec.importance if spec else Importance.OPTIONAL

    def rule(self, name: str) -> ToleranceRule:
        """Comparison rule of a spec; undeclared specs compare exactly."""
        spec = self.spec(name)
        return spec.rule if spec else exact_match()

    def is_critical(self, name: str) -> bool:
        spec = self.spec(name)
        return spec.critical if spec else False

    @property
    def spec_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.specs)

    @property
    def critical_specs(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.specs if spec.critical)

    def to_dict(self) -> dict:
        return {
            "type": self.type_tag.name,
            "default_profile": self.default_profile.name,
            "specs": [
                {
                    "name": s.name,
                    "importance": s.importance.name,
                    "rule": str(s.rule),
                    "critical": s.critical,
                }
                for s in self.specs
            ],
        }


class MetadataBuilder:
    """Validates declarations as they are added; build() fails on an empty spec list."""

    def __init__(self, type_tag: TypeTag | str):
        if type_tag is None:
            raise ValueError("Component type must not be None")
        tag = parse_tag(type_tag)
        if tag is None:
            raise ValueError(f"Unknown component type: {type_tag!r}")
        self._type_tag = tag
        self._specs: dict[str, SpecDefinition] = {}
        self._profile = SimilarityProfile.REPLACEMENT

    def add_spec(self, name: str, importance: Importance, rule: ToleranceRule) -> "MetadataBuilder":
        if not name or not name.strip():
            raise ValueError("Spec name must not be empty")
        if importance is None:
            raise ValueError(f"Importance for spec {name!r} must not be None")
        if rule is None:
            raise ValueError(f"Tolerance rule for spec {name!r} must not be None")
        self._specs[name] = SpecDefinition(name, importance, rule, critical=importance.is_mandatory)
        return self

    def mark_critical(self, name: str) -> "MetadataBuilder":
        spec = self._specs.get(name)
        if spec is None:
            raise ValueError(f"Cannot mark undeclared spec {name!r} as critical")
        self._specs[name] = SpecDefinition(spec.name, spec.importance, spec.rule, critical=True)
        return self

    def default_profile(self, profile: SimilarityProfile) -> "MetadataBuilder":
        if profile is None:
            raise ValueError("Default profile must not be None")
        self._profile = profile
        return self

    def build(self) -> ComponentTypeMetadata:
        if not self._specs:
            raise ValueError(f"Metadata for {self._type_tag} declares no specs")
        return ComponentTypeMetadata(self._type_tag, tuple(self._specs.values()), self._profile)


class MetadataRegistry:
    """Immutable snapshot of type tag -> metadata."""

    def __init__(self, entries: dict[TypeTag, ComponentTypeMetadata] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def lookup(self, type_tag: TypeTag | str) -> ComponentTypeMetadata | None:
        """Exact tag first, then the subtype's base tag."""
        if type_tag is None:
            raise ValueError("Type tag must not be None")
        tag = parse_tag(type_tag)
        if tag is None:
            return None
        found = self._entries.get(tag)
        if found is None and tag.is_subtype:
            found = self._entries.get(tag.base_tag)
        return found

    def with_metadata(self, type_tag: TypeTag | str, metadata: ComponentTypeMetadata) -> "MetadataRegistry":
        """Return a new snapshot with metadata registered under type_tag."""
        if type_tag is None:
            raise ValueError("Type tag must not be None")
        if metadata is None:
            raise ValueError("Metadata must not be None")
        tag = parse_tag(type_tag)
        if tag is None:
            raise ValueError(f"Unknown component type: {type_tag!r}")
        entries = dict(self._entries)
        entries[tag] = metadata
        return MetadataRegistry(entries)

    def tags(self) -> tuple[TypeTag, ...]:
        return tuple(self._entries)

    def __contains__(self, type_tag: object) -> bool:
        """Exact registration check; accepts a TypeTag or its name, never the base fallback."""
        if not isinstance(type_tag, (str, TypeTag)):
            return False
        tag = parse_tag(type_tag)
        return tag is not None and tag in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# BUILT-IN TYPE METADATA
# =============================================================================

_C, _H, _M, _L = Importance.CRITICAL, Importance.HIGH, Importance.MEDIUM, Importance.LOW


def _default_metadata() -> list[ComponentTypeMetadata]:
    return [
        ComponentTypeMetadata.builder(RESISTOR)
        .add_spec("resistance", _C, percentage_tolerance(1.0))
        .add_spec("tolerance", _C, exact_match())
        .add_spec("package", _H, exact_match())
        .add_spec("powerRating", _M, minimum_required())
        .add_spec("temperatureCoefficient", _L, percentage_tolerance(20.0))
        .add_spec("composition", _L, exact_match())
        .build(),

        ComponentTypeMetadata.builder(CAPACITOR)
        .add_spec("capacitance", _C, percentage_tolerance(5.0))
        .add_spec("voltage", _C, minimum_required())
        .add_spec("dielectric", _C, exact_match())
        .add_spec("package", _H, exact_match())
        .add_spec("tolerance", _M, exact_match())
        .add_spec("temperatureCharacteristic", _M, exact_match())
        .add_spec("esr", _L, maximum_allowed(1.5))
        .build(),

        ComponentTypeMetadata.builder(MOSFET)
        .add_spec("voltageRating", _C, minimum_required())
        .add_spec("currentRating", _C, minimum_required())
        .add_spec("channel", _C, exact_match())
        .add_spec("rdsOn", _H, maximum_allowed(1.2))
        .add_spec("package", _M, exact_match())
        .add_spec("gateCharge", _L, percentage_tolerance(30.0))
        .add_spec("threshold", _L, range_tolerance(20.0, 20.0))
        .build(),

        ComponentTypeMetadata.builder(TRANSISTOR)
        .add_spec("polarity", _C, exact_match())
        .add_spec("voltageRating", _C, minimum_required())
        .add_spec("currentRating", _C, minimum_required())
        .add_spec("package", _H, exact_match())
        .add_spec("hfe", _M, range_tolerance(30.0, 50.0))
        .add_spec("powerRating", _M, minimum_required())
        .build(),

        ComponentTypeMetadata.builder(DIODE)
        .add_spec("type", _C, exact_match())
        .add_spec("voltageRating", _C, minimum_required())
        .add_spec("currentRating", _C, minimum_required())
        .add_spec("package", _H, exact_match())
        .add_spec("forwardVoltage", _M, maximum_allowed(1.2))
        .add_spec("reverseRecovery", _L, maximum_allowed(1.5))
        .build(),

        ComponentTypeMetadata.builder(OPAMP)
        .add_spec("configuration", _C, exact_match())
        .add_spec("inputType", _H, exact_match())
        .add_spec("package", _H, exact_match())
        .add_spec("gbw", _M, minimum_required())
        .add_spec("slewRate", _M, minimum_required())
        .add_spec("inputOffset", _L, maximum_allowed(1.5))
        .build(),

        ComponentTypeMetadata.builder(MICROCONTROLLER)
        .add_spec("family", _C, exact_match())
        .add_spec("series", _H, exact_match())
        .add_spec("flashSize", _H, minimum_required())
        .add_spec("ramSize", _H, minimum_required())
        .add_spec("ioCount", _M, minimum_required())
        .add_spec("package", _M, exact_match())
        .add_spec("frequency", _L, minimum_required())
        .build(),

        ComponentTypeMetadata.builder(MEMORY)
        .add_spec("type", _C, exact_match())
        .add_spec("capacity", _C, minimum_required())
        .add_spec("interface", _C, exact_match())
        .add_spec("voltage", _H, exact_match())
        .add_spec("package", _M, exact_match())
        .add_spec("speed", _L, minimum_required())
        .build(),

        ComponentTypeMetadata.builder(LED)
        .add_spec("color", _C, exact_match())
        .add_spec("package", _H, exact_match())
        .add_spec("brightness", _M, minimum_required())
        .add_spec("forwardVoltage", _M, range_tolerance(10.0, 10.0))
        .add_spec("viewingAngle", _L, minimum_required())
        .add_spec("wavelength", _L, percentage_tolerance(5.0))
        .build(),

        ComponentTypeMetadata.builder(CONNECTOR)
        .add_spec("pinCount", _C, exact_match())
        .add_spec("pitch", _C, exact_match())
        .add_spec("gender", _C, exact_match())
        .add_spec("mountingType", _H, exact_match())
        .add_spec("currentRating", _M, minimum_required())
        .add_spec("voltageRating", _M, minimum_required())
        .build(),
    ]


def build_default_registry() -> MetadataRegistry:
    """Fresh registry holding the built-in metadata for ten component types."""
    return MetadataRegistry({metadata.type_tag: metadata for metadata in _default_metadata()})


# Global state
_registry: MetadataRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> MetadataRegistry:
    """Get or build the process-wide metadata registry (thread-safe)."""
    global _registry
    if _registry is None:
        with _registry_lock:
            # Double-check locking pattern
            if _registry is None:
                _registry = build_default_registry()
    return _registry


def register_type_metadata(type_tag: TypeTag | str, metadata: ComponentTypeMetadata) -> MetadataRegistry:
    """Register metadata process-wide by swapping in a new snapshot. Returns the new registry.

    Intended for startup; readers holding the previous snapshot keep seeing it unchanged.
    """
    global _registry
    with _registry_lock:
        current = _registry if _registry is not None else build_default_registry()
        _registry = current.with_metadata(type_tag, metadata)
        logger.info(f"Registered metadata for {parse_tag(type_tag)} ({len(metadata.specs)} specs)")
        return _registry


def lookup_type_metadata(type_tag: TypeTag | str, registry: MetadataRegistry | None = None) -> ComponentTypeMetadata | None:
    """Metadata for type_tag (exact, then base type) from registry or the process default."""
    return (registry if registry is not None else get_registry()).lookup(type_tag)


def reset_registry() -> None:
    """Drop the process-wide registry so the next get_registry() rebuilds the defaults."""
    global _registry
    with _registry_lock:
        _registry = None
