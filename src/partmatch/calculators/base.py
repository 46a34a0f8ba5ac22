"""Calculator interface and the metadata-driven calculator used for every concrete type."""

import logging
from typing import Any

from ..classify import normalize
from ..component_types import TypeTag
from ..extractors import Extractor
from ..metadata import ComponentTypeMetadata
from ..profiles import SimilarityProfile
from ..scoring import weighted_score

logger = logging.getLogger(__name__)


class SimilarityCalculator:
    """Scores a pair of part numbers for the base types it claims.

    A calculator must claim only types it can fully score: dispatch stops at the first
    applicable calculator, so an over-broad claim hides every later calculator.
    """

    name = "base"
    claims: frozenset[str] = frozenset()
    symmetric = True

    def is_applicable(self, type_tag: TypeTag | None) -> bool:
        return type_tag is not None and type_tag.base in self.claims

    def similarity(self, mpn_a: str, mpn_b: str, profile: SimilarityProfile | None = None) -> float:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class SpecCalculator(SimilarityCalculator):
    """Decode both part numbers with an extractor and compare them under type metadata.

    When every declared rule is symmetric the score is min(forward, backward), so
    similarity(a, b) == similarity(b, a). Calculators whose metadata uses
    minimum_required or maximum_allowed keep the reference/candidate direction.
    """

    def __init__(
        self,
        name: str,
        type_tag: TypeTag,
        metadata: ComponentTypeMetadata,
        extractor: Extractor,
        claims: frozenset[str] | None = None,
    ):
        if metadata is None:
            raise ValueError(f"Calculator {name} needs metadata")
        self.name = name
        self.type_tag = type_tag
        self.metadata = metadata
        self.extractor = extractor
        self.claims = frozenset(claims) if claims is not None else frozenset({type_tag.base})
        self.symmetric = all(spec.rule.symmetric for spec in metadata.specs)

    def specs(self, mpn: str | None) -> dict[str, Any]:
        identifier = normalize(mpn)
        return self.extractor(identifier) if identifier else {}

    def similarity(self, mpn_a: str, mpn_b: str, profile: SimilarityProfile | None = None) -> float:
        reference = self.specs(mpn_a)
        candidate = self.specs(mpn_b)
        if not reference or not candidate:
            logger.debug(f"{self.name}: nothing decoded from {mpn_a if not reference else mpn_b!r}")
        forward = weighted_score(self.metadata, reference, candidate, profile)
        if not self.symmetric:
            return forward
        return min(forward, weighted_score(self.metadata, candidate, reference, profile))
