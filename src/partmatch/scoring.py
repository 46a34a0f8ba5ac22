"""Metadata-driven weighted scoring of a reference/candidate spec pair.

For every spec the type declares and both sides provide:
    spec_score = rule.compare(reference, candidate)
    weight     = base_weight(importance) x profile.multiplier(importance)
The result is sum(spec_score x weight) / sum(weight), or 0.0 when nothing is
comparable. A critical spec missing from either side disqualifies the pair (0.0).
Types without registered metadata fall back to fallback_spec_score().
"""

import logging
from typing import Any, Mapping

from rapidfuzz.distance import Levenshtein

from .component_types import TypeTag, parse_tag
from .metadata import ComponentTypeMetadata, MetadataRegistry, lookup_type_metadata
from .profiles import SimilarityProfile
from .values import to_number, unwrap

logger = logging.getLogger(__name__)


def weighted_score(
    metadata: ComponentTypeMetadata,
    reference: Mapping[str, Any],
    candidate: Mapping[str, Any],
    profile: SimilarityProfile | None = None,
) -> float:
    """Score candidate against reference under metadata. Always within [0, 1]."""
    profile = profile or metadata.default_profile
    reference = reference or {}
    candidate = candidate or {}

    for name in metadata.critical_specs:
        if reference.get(name) is None or candidate.get(name) is None:
            side = "reference" if reference.get(name) is None else "candidate"
            logger.info(f"Disqualified {metadata.type_tag}: critical spec {name!r} missing from {side}")
            return 0.0

    weighted_total = 0.0
    weight_sum = 0.0
    for spec in metadata.specs:
        ref_value = reference.get(spec.name)
        cand_value = candidate.get(spec.name)
        if ref_value is None or cand_value is None:
            continue
        weight = profile.effective_weight(spec.importance)
        weighted_total += spec.rule.compare(ref_value, cand_value) * weight
        weight_sum += weight

    if weight_sum == 0:
        logger.debug(f"No comparable specs for {metadata.type_tag} under {profile.name}")
        return 0.0
    return min(1.0, max(0.0, weighted_total / weight_sum))


def score(
    type_tag: TypeTag | str,
    reference: Mapping[str, Any],
    candidate: Mapping[str, Any],
    profile: SimilarityProfile | None = None,
    registry: MetadataRegistry | None = None,
) -> float:
    """Weighted score for a pair of spec dicts of the given component type.

    Raises ValueError for a None type tag. Tags without metadata (including subtypes
    whose base has none) use the generic fallback scorer instead of failing.
    """
    if type_tag is None:
        raise ValueError("Type tag must not be None")
    metadata = lookup_type_metadata(type_tag, registry)
    if metadata is None:
        tag = parse_tag(type_tag)
        logger.warning(f"No metadata for type {tag or type_tag!r}, using fallback scorer")
        return fallback_spec_score(reference, candidate)
    return weighted_score(metadata, reference, candidate, profile)


def _value_similarity(reference: Any, candidate: Any) -> float:
    ref_num, cand_num = to_number(reference), to_number(candidate)
    if ref_num is not None and cand_num is not None:
        largest = max(abs(ref_num), abs(cand_num))
        if largest == 0:
            return 1.0
        return max(0.0, 1.0 - abs(ref_num - cand_num) / largest)
    ref_str = str(unwrap(reference)).strip().upper()
    cand_str = str(unwrap(candidate)).strip().upper()
    return Levenshtein.normalized_similarity(ref_str, cand_str)


def fallback_spec_score(reference: Mapping[str, Any], candidate: Mapping[str, Any]) -> float:
    """Generic comparison for types without metadata.

    Specs on both sides are compared by numeric closeness or edit-distance similarity;
    specs present on only one side count as 0. The average over all spec names is
    returned, 0.0 when both sides are empty.
    """
    reference = {k: v for k, v in (reference or {}).items() if v is not None}
    candidate = {k: v for k, v in (candidate or {}).items() if v is not None}
    names = set(reference) | set(candidate)
    if not names:
        return 0.0
    total = sum(
        _value_similarity(reference[name], candidate[name])
        for name in names
        if name in reference and name in candidate
    )
    return min(1.0, max(0.0, total / len(names)))
