"""Similarity profiles: named contexts that reweight importance tiers.

Effective weight of a spec = base weight of its importance tier x the profile's
multiplier for that tier. Each profile also sets the score above which a candidate
counts as an acceptable substitute.
"""

from enum import Enum

from .errors import UnknownProfileError
from .importance import Importance

_C, _H, _M, _L, _O = (
    Importance.CRITICAL, Importance.HIGH, Importance.MEDIUM, Importance.LOW, Importance.OPTIONAL,
)


class SimilarityProfile(Enum):
    """(description, tier multipliers, acceptance threshold)."""

    DESIGN_PHASE = (
        "New design: strict matching, all specs matter",
        {_C: 1.0, _H: 0.9, _M: 0.7, _L: 0.4, _O: 0.0},
        0.85,
    )
    REPLACEMENT = (
        "Drop-in replacement for an existing design",
        {_C: 1.0, _H: 0.7, _M: 0.4, _L: 0.2, _O: 0.0},
        0.75,
    )
    COST_OPTIMIZATION = (
        "Cheaper alternative: only critical and high-importance specs really count",
        {_C: 1.0, _H: 0.4, _M: 0.2, _L: 0.0, _O: 0.0},
        0.60,
    )
    PERFORMANCE_UPGRADE = (
        "Better-performing alternative: critical specs plus most high-importance specs",
        {_C: 1.0, _H: 0.8, _M: 0.5, _L: 0.2, _O: 0.0},
        0.70,
    )
    EMERGENCY_SOURCING = (
        "Shortage mitigation: relaxed matching to find anything workable",
        {_C: 0.8, _H: 0.4, _M: 0.2, _L: 0.0, _O: 0.0},
        0.50,
    )

    def __init__(self, description: str, multipliers: dict[Importance, float], threshold: float):
        self.description = description
        self._multipliers = dict(multipliers)
        self.threshold = threshold

    def multiplier(self, importance: Importance) -> float:
        return self._multipliers.get(importance, 0.0)

    def effective_weight(self, importance: Importance) -> float:
        return importance.base_weight * self.multiplier(importance)

    def is_acceptable(self, score: float) -> bool:
        return score >= self.threshold

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "threshold": self.threshold,
            "multipliers": {imp.name: self.multiplier(imp) for imp in Importance},
        }

    @classmethod
    def from_name(cls, name: "str | SimilarityProfile") -> "SimilarityProfile":
        """Resolve 'replacement', 'EMERGENCY_SOURCING', 'design-phase' etc."""
        if isinstance(name, cls):
            return name
        if not name:
            raise UnknownProfileError(str(name))
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise UnknownProfileError(name) from None
