"""Tolerance rules: pluggable (reference, candidate) -> [0, 1] comparison strategies.

Five rules cover how component specs are compared when looking for substitutes:

- exact_match(): categorical values (dielectric, channel, package)
- percentage_tolerance(p): values that must sit within p% (resistance, capacitance)
- minimum_required(): over-spec is fine, under-spec is not (voltage/current ratings)
- maximum_allowed(m): lower is better, with a grace band up to m x reference (Rds(on), ESR)
- range_tolerance(low%, high%): an asymmetric band around the reference (hFE, Vf)

Rules are immutable and never raise while comparing: None or unusable values score 0.0.
The "symmetric" flag marks rules whose score does not depend on which side is the
reference; minimum_required and maximum_allowed are deliberately asymmetric.
"""

import math
from dataclasses import dataclass
from typing import Any

from .config import (
    ACCEPT_THRESHOLD, PERCENT_DECAY_FACTOR, NEAR_MINIMUM_RATIO, NEAR_MINIMUM_SCORE,
    MAXIMUM_ALLOWED_FLOOR,
)
from .values import to_number, unwrap

# Relative slack when testing "deviation <= p%" so 1.0% of 10000 counts as inside 1%
_EPSILON = 1e-9


def _clamp(score: float) -> float:
    return min(1.0, max(0.0, score))


def _exact(reference: Any, candidate: Any) -> float:
    if reference is None or candidate is None:
        return 0.0
    ref_num, cand_num = to_number(reference), to_number(candidate)
    if ref_num is not None and cand_num is not None:
        return 1.0 if math.isclose(ref_num, cand_num, rel_tol=_EPSILON, abs_tol=0.0) else 0.0
    ref_str = str(unwrap(reference)).strip().casefold()
    cand_str = str(unwrap(candidate)).strip().casefold()
    return 1.0 if ref_str == cand_str else 0.0


class ToleranceRule:
    """Base class. Subclasses implement _score() for two numbers; non-numbers compare exactly."""

    symmetric = True

    def compare(self, reference: Any, candidate: Any) -> float:
        if reference is None or candidate is None:
            return 0.0
        ref_num, cand_num = to_number(reference), to_number(candidate)
        if ref_num is None or cand_num is None:
            return _exact(reference, candidate)
        return _clamp(self._score(ref_num, cand_num))

    def _score(self, reference: float, candidate: float) -> float:
        raise NotImplementedError

    def is_acceptable(self, reference: Any, candidate: Any, threshold: float | None = None) -> bool:
        limit = ACCEPT_THRESHOLD if threshold is None else threshold
        return self.compare(reference, candidate) >= limit


@dataclass(frozen=True)
class ExactMatchRule(ToleranceRule):
    """1.0 iff the values are equal (numbers numerically, text case-insensitively)."""

    def compare(self, reference: Any, candidate: Any) -> float:
        return _exact(reference, candidate)

    def _score(self, reference: float, candidate: float) -> float:
        return 1.0 if reference == candidate else 0.0

    def __str__(self) -> str:
        return "exact"


@dataclass(frozen=True)
class PercentageToleranceRule(ToleranceRule):
    """1.0 within percent% of the reference, linear decay to 0.0 at decay_factor x percent%."""
    percent: float
    decay_factor: float = PERCENT_DECAY_FACTOR

    def __post_init__(self):
        if self.percent is None or self.percent < 0 or math.isnan(self.percent):
            raise ValueError(f"Percentage tolerance must be >= 0, got {self.percent}")
        if self.decay_factor < 1:
            raise ValueError(f"Decay factor must be >= 1, got {self.decay_factor}")

    def _score(self, reference: float, candidate: float) -> float:
        if reference == 0:
            return 1.0 if candidate == 0 else 0.0
        deviation = abs(candidate - reference) / abs(reference) * 100
        if deviation <= self.percent + _EPSILON:
            return 1.0
        limit = self.percent * self.decay_factor
        if deviation >= limit or limit <= self.percent:
            return 0.0
        return (limit - deviation) / (limit - self.percent)

    def __str__(self) -> str:
        return f"within {self.percent:g}%"


@dataclass(frozen=True)
class MinimumRequiredRule(ToleranceRule):
    """Candidate must meet or exceed the reference (ratings where more headroom is fine).

    candidate >= reference -> 1.0; within near_ratio of it -> near_score; else 0.0.
    """
    near_ratio: float = NEAR_MINIMUM_RATIO
    near_score: float = NEAR_MINIMUM_SCORE
    symmetric = False

    def __post_init__(self):
        if not 0 <= self.near_ratio <= 1:
            raise ValueError(f"near_ratio must be within [0, 1], got {self.near_ratio}")
        if not 0 <= self.near_score <= 1:
            raise ValueError(f"near_score must be within [0, 1], got {self.near_score}")

    def _score(self, reference: float, candidate: float) -> float:
        if candidate >= reference:
            return 1.0
        if reference > 0 and candidate >= reference * self.near_ratio:
            return self.near_score
        return 0.0

    def __str__(self) -> str:
        return "at least reference"


@dataclass(frozen=True)
class MaximumAllowedRule(ToleranceRule):
    """Candidate should not exceed the reference (losses, leakage, resistance).

    candidate <= reference -> 1.0; linear decay from 1.0 to floor at multiplier x reference;
    0.0 beyond.
    """
    multiplier: float
    floor: float = MAXIMUM_ALLOWED_FLOOR
    symmetric = False

    def __post_init__(self):
        if self.multiplier is None or self.multiplier < 1 or math.isnan(self.multiplier):
            raise ValueError(f"Maximum-allowed multiplier must be >= 1, got {self.multiplier}")
        if not 0 <= self.floor <= 1:
            raise ValueError(f"floor must be within [0, 1], got {self.floor}")

    def _score(self, reference: float, candidate: float) -> float:
        if candidate <= reference:
            return 1.0
        if reference <= 0:
            return 0.0
        limit = reference * self.multiplier
        if candidate > limit or limit == reference:
            return 0.0
        fraction = (candidate - reference) / (limit - reference)
        return 1.0 - fraction * (1.0 - self.floor)

    def __str__(self) -> str:
        return f"at most {self.multiplier:g}x reference"


@dataclass(frozen=True)
class RangeToleranceRule(ToleranceRule):
    """1.0 inside [ref x (1 - low%), ref x (1 + high%)]; outside, linear decay to 0.0
    over one more band width on that side."""
    low_percent: float
    high_percent: float

    def __post_init__(self):
        for name, value in (("low_percent", self.low_percent), ("high_percent", self.high_percent)):
            if value is None or value < 0 or math.isnan(value):
                raise ValueError(f"Range tolerance {name} must be >= 0, got {value}")
        if self.low_percent > 100:
            raise ValueError(f"Range tolerance low_percent must be <= 100, got {self.low_percent}")

    def _score(self, reference: float, candidate: float) -> float:
        lower = reference * (1 - self.low_percent / 100)
        upper = reference * (1 + self.high_percent / 100)
        if lower > upper:  # negative reference flips the band
            lower, upper = upper, lower
        if lower <= candidate <= upper:
            return 1.0
        if candidate < lower:
            width = abs(reference - lower)
            distance = lower - candidate
        else:
            width = abs(upper - reference)
            distance = candidate - upper
        if width == 0:
            return 0.0
        return 1.0 - distance / width

    def __str__(self) -> str:
        return f"within -{self.low_percent:g}%/+{self.high_percent:g}%"


# =============================================================================
# FACTORIES
# =============================================================================

_EXACT = ExactMatchRule()


def exact_match() -> ExactMatchRule:
    return _EXACT


def percentage_tolerance(percent: float, decay_factor: float = PERCENT_DECAY_FACTOR) -> PercentageToleranceRule:
    return PercentageToleranceRule(percent, decay_factor)


def minimum_required() -> MinimumRequiredRule:
    return MinimumRequiredRule()


def maximum_allowed(multiplier: float) -> MaximumAllowedRule:
    return MaximumAllowedRule(multiplier)


def range_tolerance(low_percent: float, high_percent: float) -> RangeToleranceRule:
    return RangeToleranceRule(low_percent, high_percent)
