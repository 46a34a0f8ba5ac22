"""Part number similarity and classification for electronic components."""

__version__ = "0.1.0"

from .classify import Classification, classify, normalize
from .matching import RankedCandidate, rank_candidates, similarity
from .metadata import ComponentTypeMetadata, get_registry, lookup_type_metadata, register_type_metadata
from .profiles import SimilarityProfile
from .importance import Importance
from .scoring import score

__all__ = [
    "__version__",
    "Classification",
    "classify",
    "normalize",
    "RankedCandidate",
    "rank_candidates",
    "similarity",
    "ComponentTypeMetadata",
    "get_registry",
    "lookup_type_metadata",
    "register_type_metadata",
    "SimilarityProfile",
    "Importance",
    "score",
]
