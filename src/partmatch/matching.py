"""Top-level part-number similarity and candidate ranking.

similarity() classifies both part numbers, hands the pair to the first calculator
applicable to either type, and returns that calculator's score unchanged, 0.0
included. Only when no calculator applies does the default prefix/number/suffix
scorer run. Malformed input fails closed with 0.0.
"""

import logging
from typing import Iterable, NamedTuple, Sequence

from .calculators import DEFAULT_CALCULATOR, SimilarityCalculator, find_calculator
from .classify import classify, normalize
from .config import DEFAULT_PROFILE
from .profiles import SimilarityProfile

logger = logging.getLogger(__name__)


class RankedCandidate(NamedTuple):
    mpn: str
    score: float
    acceptable: bool


def resolve_profile(profile: SimilarityProfile | str | None) -> SimilarityProfile | None:
    """Accept a profile, its name, or None. Unknown names raise UnknownProfileError."""
    if profile is None or isinstance(profile, SimilarityProfile):
        return profile
    return SimilarityProfile.from_name(profile)


def resolve_calculator(
    mpn_a: str | None,
    mpn_b: str | None,
    calculators: Sequence[SimilarityCalculator] | None = None,
) -> SimilarityCalculator:
    """The calculator similarity() would use for this pair."""
    type_a = classify(mpn_a).type_tag
    type_b = classify(mpn_b).type_tag
    return find_calculator(type_a, type_b, calculators) or DEFAULT_CALCULATOR


def similarity(
    mpn_a: str | None,
    mpn_b: str | None,
    profile: SimilarityProfile | str | None = None,
    calculators: Sequence[SimilarityCalculator] | None = None,
) -> float:
    """Similarity of two part numbers in [0, 1]. Never raises on malformed input."""
    a, b = normalize(mpn_a), normalize(mpn_b)
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    calculator = resolve_calculator(a, b, calculators)
    result = calculator.similarity(a, b, resolve_profile(profile))
    logger.debug(f"similarity({a}, {b}) via {calculator.name}: {result:.3f}")
    return min(1.0, max(0.0, result))


def rank_candidates(
    reference: str,
    candidates: Iterable[str],
    profile: SimilarityProfile | str | None = None,
    calculators: Sequence[SimilarityCalculator] | None = None,
) -> list[RankedCandidate]:
    """Score every candidate against reference, best first.

    acceptable is judged against the profile's threshold (DEFAULT_PROFILE when none is given).
    Ties keep the input order.
    """
    resolved = resolve_profile(profile) or SimilarityProfile.from_name(DEFAULT_PROFILE)
    ranked = []
    for mpn in candidates:
        score = similarity(reference, mpn, resolved, calculators)
        ranked.append(RankedCandidate(mpn, score, resolved.is_acceptable(score)))
    ranked.sort(key=lambda candidate: -candidate.score)
    return ranked
