"""Part number normalization and manufacturer/type classification.

classify() is a pure function of the identifier: it walks the ordered manufacturer
table, asks the owning manufacturer's handler which type patterns match, and keeps
the most specific tag (manufacturer subtype over base type, concrete type over
generic IC). Malformed or unmatched input resolves to the UNKNOWN sentinel with
no type tag instead of raising.
"""

import logging
import re
from dataclasses import dataclass

from .component_types import TypeTag
from .manufacturers import MANUFACTURERS, PATTERNS, Manufacturer
from .patterns import PatternRegistry

logger = logging.getLogger(__name__)

# Everything that is not a letter or digit is non-semantic punctuation
_NON_SEMANTIC = re.compile(r"[^A-Za-z0-9]")
_SERIES_PATTERN = re.compile(r"^([A-Z]*)(\d*)")


@dataclass(frozen=True)
class Classification:
    """Result of classify(): normalized identifier, manufacturer, and optional type tag."""
    identifier: str
    manufacturer: Manufacturer
    type_tag: TypeTag | None

    @property
    def base_type(self) -> TypeTag | None:
        return self.type_tag.base_tag if self.type_tag else None

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "manufacturer": self.manufacturer.display_name,
            "manufacturer_key": self.manufacturer.key,
            "type": self.type_tag.name if self.type_tag else None,
            "base_type": self.base_type.name if self.base_type else None,
        }


def normalize(raw: str | None) -> str:
    """Uppercase and strip punctuation/whitespace: 'rc0603fr-0710kl' -> 'RC0603FR0710KL'.

    Never fails; None, empty and non-string input map to ''. Idempotent.
    """
    if not raw or not isinstance(raw, str):
        return ""
    return _NON_SEMANTIC.sub("", raw).upper()


def classify_manufacturer(
    identifier: str | None,
    manufacturers: tuple[Manufacturer, ...] = MANUFACTURERS,
) -> Manufacturer:
    """Return the first manufacturer whose pattern matches, UNKNOWN if none does."""
    identifier = normalize(identifier)
    if identifier:
        for manufacturer in manufacturers:
            if manufacturer.matches(identifier):
                return manufacturer
    return manufacturers[-1]


def matching_types(
    identifier: str | None,
    manufacturer: Manufacturer,
    patterns: PatternRegistry = PATTERNS,
) -> list[TypeTag]:
    """Every type tag the manufacturer's handler matches, most specific first.

    Ties in specificity keep the handler's declaration order.
    """
    identifier = normalize(identifier)
    if not identifier or manufacturer is None:
        return []
    handler = manufacturer.create_handler()
    matched = [tag for tag in handler.supported_types() if handler.matches(identifier, tag, patterns)]
    # sorted() is stable, so equal specificity preserves declaration order
    return sorted(matched, key=lambda tag: -tag.specificity)


def classify_type(
    identifier: str | None,
    manufacturer: Manufacturer,
    patterns: PatternRegistry = PATTERNS,
) -> TypeTag | None:
    """Most specific type tag for identifier under manufacturer, or None."""
    matched = matching_types(identifier, manufacturer, patterns)
    return matched[0] if matched else None


def classify(
    identifier: str | None,
    manufacturers: tuple[Manufacturer, ...] = MANUFACTURERS,
    patterns: PatternRegistry = PATTERNS,
) -> Classification:
    """Classify a part number into (manufacturer, type tag). Never raises."""
    normalized = normalize(identifier)
    manufacturer = classify_manufacturer(normalized, manufacturers)
    type_tag = classify_type(normalized, manufacturer, patterns)
    if type_tag is None and normalized:
        logger.debug(f"No type pattern for {normalized!r} (manufacturer {manufacturer.key})")
    return Classification(normalized, manufacturer, type_tag)


def possible_manufacturers(
    identifier: str | None,
    manufacturers: tuple[Manufacturer, ...] = MANUFACTURERS,
) -> list[Manufacturer]:
    """Every known manufacturer whose pattern matches, in declaration order."""
    identifier = normalize(identifier)
    if not identifier:
        return []
    return [m for m in manufacturers if not m.is_unknown and m.matches(identifier)]


def extract_series(identifier: str | None) -> str:
    """Leading letters plus the first digit run: 'LM358N' -> 'LM358', 'GRM188R7' -> 'GRM188'."""
    identifier = normalize(identifier)
    match = _SERIES_PATTERN.match(identifier)
    return match.group(1) + match.group(2) if match else ""
