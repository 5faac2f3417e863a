"""
Attribute Entries — The canonical metadata contract for attrquery.

An Attribute Entry records one attribute declaration *before* it is
instantiated: the dotted identifier of the attribute type plus the
constructor arguments it was declared with.

Declaration forms:
    @attribute(Route, "/users")            — on a class, function or method
    name: Annotated[str, attribute(Column)] — on a class-level property
    MAX: Final[Annotated[int, attribute(Tunable)]] = 10 — on a class constant

Entries are stored on the declaring object itself and are never inherited
from base classes. Declaration order is preserved: the top-most decorator
is the first entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from . import config
from .reflection.loader import load_type


class DeclarationError(Exception):
    """Raised when an attribute declaration is malformed or cannot be stored."""
    pass


# =============================================================================
# NAMES
# =============================================================================

def qualified_name(cls: type) -> str:
    """Dotted identifier of a type, e.g. ``myapp.routing.Route``."""
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", cls.__name__)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def short_name(identifier: str, lower: bool = True) -> str:
    """
    Unqualified form of a dotted identifier (its last segment).

    Example:
        "myapp.routing.Route" -> "route"
        "myapp.routing.Route", lower=False -> "Route"
    """
    name = identifier.rsplit(".", 1)[-1]
    return name.casefold() if lower else name


# =============================================================================
# ATTRIBUTE ENTRY
# =============================================================================

@dataclass(frozen=True)
class AttributeEntry:
    """
    One declared attribute, not yet instantiated.

    Invariants enforced:
    1. name must be a non-empty dotted identifier
    2. arguments/keywords are stored as given and replayed on instantiation

    An entry is also a decorator: calling it on a class or function
    declares the entry there and returns the target unchanged.
    """
    name: str
    arguments: tuple = ()
    keywords: tuple[tuple[str, Any], ...] = ()

    # Set when declared with the class object; string declarations are
    # loaded by name and may refer to types that do not exist.
    declared_type: Optional[type] = field(default=None, compare=False)

    def __post_init__(self):
        """Enforce invariants at construction time."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise DeclarationError(
                f"attribute identifier must be a non-empty string, got {self.name!r}"
            )

    def __call__(self, target: Any) -> Any:
        declare(target, self)
        return target

    @property
    def short_name(self) -> str:
        """Unqualified identifier, original case."""
        return short_name(self.name, lower=False)

    def load(self) -> Optional[type]:
        """Return the attribute type if it is currently loadable, else None."""
        if self.declared_type is not None:
            return self.declared_type
        return load_type(self.name)


def attribute(type_or_name: Union[type, str], *args: Any, **kwargs: Any) -> AttributeEntry:
    """
    Factory function to create an Attribute Entry.

    Accepts the attribute class itself or its dotted identifier. Use the
    string form for attribute types that live in modules which may not be
    importable at query time.
    """
    if isinstance(type_or_name, type):
        return AttributeEntry(
            name=qualified_name(type_or_name),
            arguments=tuple(args),
            keywords=tuple(kwargs.items()),
            declared_type=type_or_name,
        )

    if isinstance(type_or_name, str):
        return AttributeEntry(
            name=type_or_name.strip(),
            arguments=tuple(args),
            keywords=tuple(kwargs.items()),
        )

    raise DeclarationError(
        f"attribute type must be a class or a dotted name, got {type(type_or_name).__name__}"
    )


# =============================================================================
# STORAGE
# =============================================================================

def _storage_target(target: Any) -> Any:
    """Object that physically holds the entries for a declaration target."""
    if isinstance(target, (staticmethod, classmethod)):
        return target.__func__
    if isinstance(target, property):
        if target.fget is None:
            raise DeclarationError("cannot declare attributes on a property without a getter")
        return target.fget
    return target


def declare(target: Any, entry: AttributeEntry) -> None:
    """
    Attach an entry to a class, function, method or property.

    Decorators run bottom-up, so each new entry is placed first to keep
    the written (top-to-bottom) order.
    """
    holder = _storage_target(target)
    existing = declared_entries(holder)
    try:
        setattr(holder, config.ENTRIES_ATTRIBUTE, (entry,) + existing)
    except (AttributeError, TypeError) as e:
        raise DeclarationError(
            f"cannot declare {entry.name} on {holder!r}: {e}"
        ) from e


def declared_entries(target: Any) -> tuple[AttributeEntry, ...]:
    """
    Entries declared directly on target.

    Only the object's own namespace is read, so a subclass never reports
    the attributes of its base class.
    """
    holder = target
    if isinstance(holder, (staticmethod, classmethod)):
        holder = holder.__func__
    elif isinstance(holder, property):
        holder = holder.fget
    if holder is None:
        return ()
    try:
        namespace = vars(holder)
    except TypeError:
        return ()
    return tuple(namespace.get(config.ENTRIES_ATTRIBUTE, ()))


def annotation_entries(metadata: tuple) -> tuple[AttributeEntry, ...]:
    """Pick the Attribute Entries out of ``Annotated`` metadata."""
    return tuple(m for m in metadata if isinstance(m, AttributeEntry))
