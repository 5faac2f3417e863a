"""
Member enumeration for attrquery.

Reads live class objects to find methods, properties and constants and
the Attribute Entries declared on them.

Python conventions used for visibility:
    - a leading underscore marks a private member; private members are
      never enumerated (but can still be addressed by name)
    - dunder methods a class defines itself (``__init__``, ``__call__``)
      are public protocol methods and are enumerated
    - ``Final[...]`` marks a class constant
    - ``ClassVar[...]`` marks a static property (class-level only)

Lookups walk the MRO subclass-first and stop at ``object``. The first
class that defines a name decides what that name is.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Final, Iterable, Optional, get_args, get_origin

from ..entries import AttributeEntry, annotation_entries, declared_entries
from .loader import load_type
from .members import ConstantMember, MethodMember, PropertyMember

logger = logging.getLogger(__name__)

_MISSING = object()

# Functions the compiler places in a class namespace
_GENERATED_FUNCTIONS = frozenset({"__annotate__", "__annotate_func__"})


# =============================================================================
# OWNERS
# =============================================================================

def owner_type(owner: Any) -> Optional[type]:
    """
    Class that owns the members of owner.

    Accepts a class, an instance, or the dotted name of a class.
    """
    if owner is None:
        return None
    if isinstance(owner, type):
        return owner
    if isinstance(owner, str):
        return load_type(owner)
    return type(owner)


def _lineage(cls: type) -> list[type]:
    return [klass for klass in cls.__mro__ if klass is not object]


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _is_public_method(name: str) -> bool:
    if name in _GENERATED_FUNCTIONS:
        return False
    return _is_public(name) or (name.startswith("__") and name.endswith("__"))


# =============================================================================
# ANNOTATIONS
# =============================================================================

def class_annotations(klass: type) -> dict[str, Any]:
    """
    Annotations declared directly on klass.

    String annotations (``from __future__ import annotations``) are
    evaluated so that ``Annotated`` metadata is visible. If evaluation
    fails the raw annotations are used and carry no entries.
    """
    try:
        return dict(inspect.get_annotations(klass, eval_str=True))
    except (NameError, AttributeError, TypeError, SyntaxError) as e:
        logger.debug("could not evaluate annotations of %s: %s", klass.__qualname__, e)

    try:
        return dict(inspect.get_annotations(klass))
    except (NameError, AttributeError, TypeError) as e:
        logger.debug("could not read annotations of %s: %s", klass.__qualname__, e)
        return {}


@dataclass(frozen=True)
class FieldInfo:
    """What one class-level annotation or property descriptor declares."""
    name: str
    owner: type
    entries: tuple[AttributeEntry, ...] = ()
    constant: bool = False
    static: bool = False
    descriptor: bool = False


def describe_annotation(hint: Any) -> tuple[tuple[AttributeEntry, ...], bool, bool]:
    """
    Unwrap an annotation into (entries, is_constant, is_static).

    Handles any nesting of Annotated, Final and ClassVar, e.g.
    ``Final[Annotated[int, attribute(Tunable)]]``.
    """
    entries: list[AttributeEntry] = []
    constant = False
    static = False

    while hint is not None:
        origin = get_origin(hint)
        if origin is Annotated:
            entries.extend(annotation_entries(hint.__metadata__))
            hint = hint.__origin__
        elif origin is Final or hint is Final:
            constant = True
            args = get_args(hint)
            hint = args[0] if args else None
        elif origin is ClassVar or hint is ClassVar:
            static = True
            args = get_args(hint)
            hint = args[0] if args else None
        else:
            break

    return tuple(entries), constant, static


def _annotation_info(klass: type, name: str, hint: Any) -> FieldInfo:
    entries, constant, static = describe_annotation(hint)
    return FieldInfo(
        name=name,
        owner=klass,
        entries=entries,
        constant=constant,
        static=static,
    )


def class_fields(cls: type) -> dict[str, FieldInfo]:
    """
    Annotated names and property descriptors of cls, subclass first.

    Within one class, fields keep source order. Annotated names without a
    value have no place in the namespace; they are kept ahead of the next
    annotated name that has one.
    """
    found: dict[str, FieldInfo] = {}

    for klass in _lineage(cls):
        annotations = class_annotations(klass)
        pending = list(annotations)

        for name, value in vars(klass).items():
            if name in annotations:
                while pending:
                    annotated = pending.pop(0)
                    if annotated not in found:
                        found[annotated] = _annotation_info(
                            klass, annotated, annotations[annotated]
                        )
                    if annotated == name:
                        break
            elif isinstance(value, property) and name not in found:
                found[name] = FieldInfo(
                    name=name,
                    owner=klass,
                    entries=declared_entries(value),
                    descriptor=True,
                )

        for annotated in pending:
            if annotated not in found:
                found[annotated] = _annotation_info(klass, annotated, annotations[annotated])

    return found


# =============================================================================
# MEMBER PROBES
# =============================================================================

def find_method(cls: type, name: str) -> Optional[MethodMember]:
    """Method called name on cls, or None if name is not a method."""
    for klass in cls.__mro__:
        namespace = vars(klass)
        if name not in namespace:
            continue

        value = namespace[name]
        if isinstance(value, (staticmethod, classmethod)):
            value = value.__func__
        if inspect.isfunction(value):
            return MethodMember(owner=cls, member_name=name, function=value)
        return None

    return None


def find_property(cls: type, name: str, instance: Any = None) -> Optional[PropertyMember]:
    """
    Property called name on cls, or None.

    Instance attributes without a class-level declaration resolve to a
    property with no entries.
    """
    info = class_fields(cls).get(name)
    if info is not None and not info.constant:
        return PropertyMember(
            owner=cls,
            member_name=name,
            entries=info.entries,
            static=info.static,
        )

    if instance is not None and name in getattr(instance, "__dict__", {}):
        return PropertyMember(owner=cls, member_name=name)

    return None


def find_constant(cls: type, name: str) -> Optional[ConstantMember]:
    """Final-annotated constant called name on cls, or None."""
    info = class_fields(cls).get(name)
    if info is None or not info.constant:
        return None
    return ConstantMember(owner=cls, member_name=name, entries=info.entries)


# =============================================================================
# ENUMERATION
# =============================================================================

def class_methods(cls: type) -> list[str]:
    """Public method names of cls (dunders included), including inherited ones."""
    seen: set[str] = set()
    names: list[str] = []

    for klass in _lineage(cls):
        for name, value in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)

            if isinstance(value, (staticmethod, classmethod)):
                value = value.__func__
            if inspect.isfunction(value) and _is_public_method(name):
                names.append(name)

    return names


def class_properties(cls: type, include_static: bool = True) -> list[str]:
    """Public property names of cls (annotated fields and descriptors)."""
    return [
        name
        for name, info in class_fields(cls).items()
        if _is_public(name)
        and not info.constant
        and (include_static or not info.static)
    ]


def object_property_names(obj: Any) -> list[str]:
    """
    Public, non-static property names of obj.

    Undeclared instance attributes are listed after the declared ones.
    No getter runs.
    """
    names = class_properties(type(obj), include_static=False)
    for name in getattr(obj, "__dict__", {}):
        if _is_public(name) and name not in names:
            names.append(name)
    return names


def object_property_values(obj: Any, names: Optional[Iterable[str]] = None) -> dict[str, Any]:
    """
    Current values of the named properties of obj (all public ones by default).

    Only the getters of the named properties run. Annotated fields that
    were never assigned have no value and are left out.
    """
    if names is None:
        names = object_property_names(obj)

    values: dict[str, Any] = {}
    for name in names:
        try:
            values[name] = getattr(obj, name)
        except AttributeError:
            continue
    return values


def class_constants(cls: type) -> dict[str, Any]:
    """Public Final-annotated constants of cls with their values."""
    constants: dict[str, Any] = {}
    for name, info in class_fields(cls).items():
        if not info.constant or not _is_public(name):
            continue
        value = getattr(cls, name, _MISSING)
        if value is not _MISSING:
            constants[name] = value
    return constants
