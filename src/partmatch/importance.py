"""Spec importance tiers with fixed base weights."""

from enum import Enum


class Importance(Enum):
    """Five ordered tiers. The value is the tier's base weight; only CRITICAL is mandatory."""
    CRITICAL = 1.0
    HIGH = 0.7
    MEDIUM = 0.4
    LOW = 0.2
    OPTIONAL = 0.0

    @property
    def base_weight(self) -> float:
        return self.value

    @property
    def is_mandatory(self) -> bool:
        return self is Importance.CRITICAL

    def __lt__(self, other: "Importance") -> bool:
        if not isinstance(other, Importance):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: "Importance") -> bool:
        if not isinstance(other, Importance):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: "Importance") -> bool:
        if not isinstance(other, Importance):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: "Importance") -> bool:
        if not isinstance(other, Importance):
            return NotImplemented
        return self.value >= other.value
