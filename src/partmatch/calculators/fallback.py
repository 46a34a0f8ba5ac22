"""Type-agnostic scoring for part numbers no calculator claims.

DefaultSimilarityCalculator splits an identifier into prefix letters, the first digit
run and the remaining suffix, then blends the three comparisons:
    0.3 x prefix + 0.5 x numeric + 0.2 x suffix
Mismatched affixes are compared by normalized Levenshtein similarity.
"""

import math
import re

from rapidfuzz.distance import Levenshtein

from ..classify import classify, extract_series, normalize
from ..profiles import SimilarityProfile
from .base import SimilarityCalculator

_AFFIXES = re.compile(r"^([A-Z]*)(\d*)(.*)$")

PREFIX_WEIGHT = 0.3
NUMERIC_WEIGHT = 0.5
SUFFIX_WEIGHT = 0.2


def _split(identifier: str) -> tuple[str, str, str]:
    match = _AFFIXES.match(identifier)
    return match.group(1), match.group(2), match.group(3)


def _affix_similarity(a: str, b: str, one_missing: float) -> float:
    if a == b:
        return 1.0
    if not a or not b:
        return one_missing
    return Levenshtein.normalized_similarity(a, b)


def _numeric_similarity(a: str, b: str) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    x, y = int(a), int(b)
    largest = max(x, y)
    if largest == 0:
        return 1.0
    difference = abs(x - y)
    # Large part numbers are compared on a log scale so 10000 vs 10100 still scores high
    if largest > 1000:
        return max(0.0, 1.0 - math.log10(difference + 1) / math.log10(largest + 1))
    return 1.0 - difference / largest


class DefaultSimilarityCalculator(SimilarityCalculator):
    """Prefix/number/suffix comparison. Claims nothing; used only when no calculator applies."""

    name = "default"

    def similarity(self, mpn_a: str, mpn_b: str, profile: SimilarityProfile | None = None) -> float:
        a, b = normalize(mpn_a), normalize(mpn_b)
        if not a or not b:
            return 0.0
        if a == b:
            return 1.0
        prefix_a, number_a, suffix_a = _split(a)
        prefix_b, number_b, suffix_b = _split(b)
        score = (
            PREFIX_WEIGHT * _affix_similarity(prefix_a, prefix_b, 0.0)
            + NUMERIC_WEIGHT * _numeric_similarity(number_a, number_b)
            + SUFFIX_WEIGHT * _affix_similarity(suffix_a, suffix_b, 0.5)
        )
        return min(1.0, max(0.0, score))


def legacy_similarity(mpn_a: str | None, mpn_b: str | None) -> float:
    """Coarse classification-based heuristic.

    +0.4 for the same base type, +0.3 for the same known manufacturer and +0.2 for
    the same series; identical identifiers score 1.0.
    """
    a, b = normalize(mpn_a), normalize(mpn_b)
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    left, right = classify(a), classify(b)
    score = 0.0
    if left.base_type is not None and left.base_type == right.base_type:
        score += 0.4
    if not left.manufacturer.is_unknown and left.manufacturer.key == right.manufacturer.key:
        score += 0.3
    series = extract_series(a)
    if series and series == extract_series(b):
        score += 0.2
    return score
