"""
Attribute Matcher for attrquery.

Decides which declared Attribute Entries answer to a Match Specification.

Matching rules, checked in order:
1. Exact   — entry loads to the spec type, or its identifier equals the
             spec type's identifier
2. Child   — entry type is a subclass of the spec type (match_children)
3. Short   — spec string without dots (or one that names no loadable
             type): compare the case-folded last dotted segment of entry
             identifier and spec. A bare name like "filter" is tried both
             as a builtin type and as a short name.

List semantics:
    has_all()        — every spec matches some entry (AND)
    has_any()        — at least one spec matches some entry
    filter_entries() — entries matching any spec, declaration order (OR)

A spec that is neither a class nor a string never matches and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Union

from .. import config
from ..entries import AttributeEntry, qualified_name, short_name
from ..reflection.loader import load_type

SpecLike = Union[type, str]


@dataclass(frozen=True)
class MatchSpec:
    """
    A normalized match specification.

    target is the attribute class when the spec names one. short_name
    holds the case-folded unqualified name to compare against; it is set
    for strings that are not dotted type names. Both are empty for
    unrecognized specs.
    """
    target: Optional[type] = None
    short_name: Optional[str] = None
    match_children: bool = True

    @property
    def recognized(self) -> bool:
        return self.target is not None or bool(self.short_name)


def child_matching(match_children: Optional[bool]) -> bool:
    """Explicit flag, or the configured default when None."""
    if match_children is None:
        return config.MATCH_CHILD_ATTRIBUTES
    return bool(match_children)


def build_spec(spec: Any, match_children: Optional[bool] = None) -> MatchSpec:
    """
    Normalize a class or string into a MatchSpec.

    Example:
        Route                    -> MatchSpec(target=Route)
        "myapp.routing.Route"    -> MatchSpec(target=Route) if loadable
        "route" / "ROUTE"        -> MatchSpec(short_name="route")
    """
    children = child_matching(match_children)

    if isinstance(spec, MatchSpec):
        return spec

    if isinstance(spec, type):
        return MatchSpec(target=spec, match_children=children)

    if isinstance(spec, str) and spec.strip():
        name = spec.strip()
        target = load_type(name)
        if target is not None and "." in name:
            return MatchSpec(target=target, match_children=children)
        return MatchSpec(
            target=target,
            short_name=short_name(name),
            match_children=children,
        )

    return MatchSpec(match_children=children)


def build_specs(
    spec_or_specs: Any,
    match_children: Optional[bool] = None,
) -> list[MatchSpec]:
    """Normalize a single spec or a list/tuple of specs."""
    if isinstance(spec_or_specs, (list, tuple, set, frozenset)):
        return [build_spec(s, match_children) for s in spec_or_specs]
    return [build_spec(spec_or_specs, match_children)]


# =============================================================================
# SINGLE ENTRY
# =============================================================================

def matches(entry: AttributeEntry, spec: MatchSpec) -> bool:
    """Does one declared entry answer to spec?"""
    if spec.target is not None:
        entry_type = entry.load()
        if entry_type is spec.target or entry.name == qualified_name(spec.target):
            return True
        if (
            spec.match_children
            and entry_type is not None
            and issubclass(entry_type, spec.target)
        ):
            return True

    if spec.short_name:
        return short_name(entry.name) == spec.short_name

    return False


def matches_any(entry: AttributeEntry, specs: Iterable[MatchSpec]) -> bool:
    return any(matches(entry, spec) for spec in specs)


# =============================================================================
# ENTRY LISTS
# =============================================================================

def has_match(entries: Sequence[AttributeEntry], spec: MatchSpec) -> bool:
    """True if at least one entry matches spec."""
    return any(matches(entry, spec) for entry in entries)


def has_all(entries: Sequence[AttributeEntry], specs: Sequence[MatchSpec]) -> bool:
    """
    AND semantics: every spec matches at least one entry.

    An empty spec list asks for nothing and is trivially satisfied.
    """
    return all(has_match(entries, spec) for spec in specs)


def has_any(entries: Sequence[AttributeEntry], specs: Sequence[MatchSpec]) -> bool:
    """At least one spec matches at least one entry."""
    return any(has_match(entries, spec) for spec in specs)


def filter_entries(
    entries: Sequence[AttributeEntry],
    specs: Sequence[MatchSpec],
) -> list[AttributeEntry]:
    """
    OR semantics: entries matching any spec.

    Output keeps declaration order, not spec order. An entry matching
    several specs appears once.
    """
    return [entry for entry in entries if matches_any(entry, specs)]
