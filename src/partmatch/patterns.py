"""Pattern registry: regex patterns keyed by component type and manufacturer handler.

Patterns are added through PatternRegistryBuilder and frozen into a PatternRegistry.
Matching is a case-insensitive full match against the normalized part identifier.
"""

import re
from types import MappingProxyType

from .component_types import TypeTag


class PatternRegistry:
    """Immutable lookup of compiled patterns: type tag -> handler key -> patterns."""

    def __init__(self, patterns: dict[TypeTag, dict[str, tuple[re.Pattern, ...]]]):
        self._patterns = MappingProxyType({
            tag: MappingProxyType(dict(by_handler))
            for tag, by_handler in patterns.items()
        })

    def matches(self, identifier: str, tag: TypeTag, handler_key: str | None = None) -> bool:
        """True if any pattern for tag (optionally limited to one handler) full-matches."""
        if not identifier or tag is None:
            return False
        by_handler = self._patterns.get(tag)
        if not by_handler:
            return False
        if handler_key is not None:
            candidates = by_handler.get(handler_key, ())
        else:
            candidates = (p for patterns in by_handler.values() for p in patterns)
        return any(p.fullmatch(identifier) for p in candidates)

    def has_pattern(self, tag: TypeTag, handler_key: str | None = None) -> bool:
        by_handler = self._patterns.get(tag)
        if not by_handler:
            return False
        if handler_key is None:
            return any(by_handler.values())
        return bool(by_handler.get(handler_key))

    def patterns_for(self, tag: TypeTag, handler_key: str) -> tuple[re.Pattern, ...]:
        by_handler = self._patterns.get(tag)
        return by_handler.get(handler_key, ()) if by_handler else ()

    def handler_keys(self, tag: TypeTag) -> tuple[str, ...]:
        by_handler = self._patterns.get(tag)
        return tuple(by_handler) if by_handler else ()

    def supported_types(self, handler_key: str | None = None) -> frozenset[TypeTag]:
        if handler_key is None:
            return frozenset(self._patterns)
        return frozenset(tag for tag, by_handler in self._patterns.items() if handler_key in by_handler)

    def __len__(self) -> int:
        return sum(len(p) for by_handler in self._patterns.values() for p in by_handler.values())


class PatternRegistryBuilder:
    """Collects patterns before freezing them. Not safe to share across threads."""

    def __init__(self):
        self._patterns: dict[TypeTag, dict[str, list[re.Pattern]]] = {}

    def add_pattern(self, tag: TypeTag, handler_key: str, pattern: str) -> "PatternRegistryBuilder":
        if tag is None:
            raise ValueError("Pattern type tag must not be None")
        if not handler_key:
            raise ValueError("Pattern handler key must not be empty")
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"Invalid pattern {pattern!r} for {tag}: {e}") from e
        self._patterns.setdefault(tag, {}).setdefault(handler_key, []).append(compiled)
        return self

    def build(self) -> PatternRegistry:
        return PatternRegistry({
            tag: {key: tuple(patterns) for key, patterns in by_handler.items()}
            for tag, by_handler in self._patterns.items()
        })
