"""
Query API for attrquery.

The public surface: presence checks, single/indexed/filtered retrieval,
and class scans that return the members carrying a matching attribute.

Items accepted everywhere:
    - a class, an instance, a function or a bound method
    - the dotted name of a loaded class or function
    - an (owner, member_name) pair naming a method, property or constant

Attribute specs accepted everywhere:
    - the attribute class
    - its dotted name, or its unqualified name in any case ("route", "Route")
    - a list of either, where the operation accepts one

match_children:
    None (the default) uses ``config.MATCH_CHILD_ATTRIBUTES``, which is
    True: asking for attribute A also finds subclasses of A. Pass False
    for strict matching (exact type or short name only).

No query raises for a bad item or an unknown attribute: the answer is
simply False, None, or empty. Exceptions raised by caller callbacks
propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .entries import AttributeEntry, short_name
from .matching.instantiator import instantiate, instantiate_all
from .matching.matcher import build_spec, build_specs, filter_entries, has_all, has_any
from .reflection.introspect import (
    class_constants,
    class_methods,
    class_properties,
    object_property_names,
    object_property_values,
    owner_type,
)
from .resolution.item_resolver import resolve

Callback = Callable[[Any], Any]


def _entries(item: Any) -> tuple[AttributeEntry, ...]:
    return resolve(item).attribute_entries()


def _is_empty_list(specs: Any) -> bool:
    if specs is None:
        return True
    return isinstance(specs, (list, tuple, set, frozenset)) and not specs


# =============================================================================
# PRESENCE
# =============================================================================

def has_attribute(
    item: Any,
    attribute_or_attributes: Any,
    match_children: Optional[bool] = None,
) -> bool:
    """
    Check whether item carries an attribute.

    With a list, every listed attribute must be present (AND).
    """
    specs = build_specs(attribute_or_attributes, match_children)
    return has_all(_entries(item), specs)


def does_not_have_attribute(
    item: Any,
    attribute_or_attributes: Any,
    match_children: Optional[bool] = None,
) -> bool:
    """
    Check whether item carries none of the given attributes.

    With a single attribute this is ``not has_attribute(...)``. With a
    list it is true only when no listed attribute is present.
    """
    specs = build_specs(attribute_or_attributes, match_children)
    return not has_any(_entries(item), specs)


def has_attribute_callback(
    item: Any,
    attribute: Any,
    callback: Callback,
    match_children: Optional[bool] = None,
) -> bool:
    """
    Check the first matching attribute instance against callback.

    False if item has no such attribute; otherwise callback's result as bool.
    """
    instance = get_attribute(item, attribute, match_children)
    if instance is None:
        return False
    return bool(callback(instance))


# =============================================================================
# RETRIEVAL
# =============================================================================

def get_attribute(
    item: Any,
    attribute: Any,
    match_children: Optional[bool] = None,
    index: int = 0,
) -> Optional[Any]:
    """
    Return the index-th matching attribute instance, or None.

    Repeated attributes are counted in declaration order, so index=1 is
    the second declaration that matches. An index past the last match
    returns None.
    """
    if index < 0:
        return None

    matched = filter_entries(_entries(item), [build_spec(attribute, match_children)])
    if index >= len(matched):
        return None
    return instantiate(matched[index])


def get_attributes(
    item: Any,
    attributes: Any = (),
    match_children: Optional[bool] = None,
) -> list[Any]:
    """
    Return attribute instances declared on item, in declaration order.

    With no attributes given, every declared attribute is returned.
    Otherwise entries matching any of the given attributes are returned
    (OR). Attributes whose type is not loadable are left out.
    """
    entries = _entries(item)
    if not _is_empty_list(attributes):
        entries = filter_entries(entries, build_specs(attributes, match_children))
    return instantiate_all(entries)


def get_attributes_callback(
    item: Any,
    attribute: Any,
    callback: Callback,
    match_children: Optional[bool] = None,
) -> list[Any]:
    """Matching attribute instances for which callback is truthy."""
    return [a for a in get_attributes(item, [attribute], match_children) if callback(a)]


def get_attribute_names(item: Any, short_names: bool = False) -> list[str]:
    """
    Identifiers of every declared attribute, including ones whose type
    is not loadable.
    """
    names = [entry.name for entry in _entries(item)]
    if short_names:
        return [short_name(name, lower=False) for name in names]
    return names


# =============================================================================
# CLASS SCANS
# =============================================================================

def get_class_methods_with_attribute(
    object_or_class: Any,
    attribute_or_attributes: Any,
    match_children: Optional[bool] = None,
) -> list[str]:
    """Public method names whose method carries the attribute(s) (AND)."""
    cls = owner_type(object_or_class)
    if cls is None:
        return []

    specs = build_specs(attribute_or_attributes, match_children)
    return [
        name for name in class_methods(cls)
        if has_all(_entries((cls, name)), specs)
    ]


def get_class_methods_with_attribute_callback(
    object_or_class: Any,
    attribute: Any,
    callback: Callback,
    match_children: Optional[bool] = None,
) -> list[str]:
    """Method names whose first matching attribute passes callback."""
    cls = owner_type(object_or_class)
    if cls is None:
        return []

    return [
        name for name in class_methods(cls)
        if has_attribute_callback((cls, name), attribute, callback, match_children)
    ]


def get_object_properties_with_attribute(
    obj: Any,
    attribute_or_attributes: Any,
    match_children: Optional[bool] = None,
) -> dict[str, Any]:
    """
    Public instance properties carrying the attribute(s), mapped to their
    current values.

    Private (underscore) and ClassVar properties are not visible here.
    Getters run only for the properties that carry the attribute(s).
    """
    if obj is None or isinstance(obj, type):
        return {}

    specs = build_specs(attribute_or_attributes, match_children)
    names = [
        name for name in object_property_names(obj)
        if has_all(_entries((obj, name)), specs)
    ]
    return object_property_values(obj, names)


def get_object_properties_with_attribute_callback(
    obj: Any,
    attribute: Any,
    callback: Callback,
    match_children: Optional[bool] = None,
) -> dict[str, Any]:
    if obj is None or isinstance(obj, type):
        return {}

    names = [
        name for name in object_property_names(obj)
        if has_attribute_callback((obj, name), attribute, callback, match_children)
    ]
    return object_property_values(obj, names)


def get_class_properties_with_attribute(
    cls: Any,
    attribute_or_attributes: Any,
    match_children: Optional[bool] = None,
) -> list[str]:
    """Public property names of a class (static ones included) carrying the attribute(s)."""
    owner = owner_type(cls)
    if owner is None:
        return []

    specs = build_specs(attribute_or_attributes, match_children)
    return [
        name for name in class_properties(owner)
        if has_all(_entries((owner, name)), specs)
    ]


def get_class_properties_with_attribute_callback(
    cls: Any,
    attribute: Any,
    callback: Callback,
    match_children: Optional[bool] = None,
) -> list[str]:
    owner = owner_type(cls)
    if owner is None:
        return []

    return [
        name for name in class_properties(owner)
        if has_attribute_callback((owner, name), attribute, callback, match_children)
    ]


def get_class_constants_with_attribute(
    class_or_object: Any,
    attribute_or_attributes: Any,
    match_children: Optional[bool] = None,
) -> dict[str, Any]:
    """Final class constants carrying the attribute(s), mapped to their values."""
    cls = owner_type(class_or_object)
    if cls is None:
        return {}

    specs = build_specs(attribute_or_attributes, match_children)
    return {
        name: value
        for name, value in class_constants(cls).items()
        if has_all(_entries((cls, name)), specs)
    }


def get_class_constants_with_attribute_callback(
    class_or_object: Any,
    attribute: Any,
    callback: Callback,
    match_children: Optional[bool] = None,
) -> dict[str, Any]:
    cls = owner_type(class_or_object)
    if cls is None:
        return {}

    return {
        name: value
        for name, value in class_constants(cls).items()
        if has_attribute_callback((cls, name), attribute, callback, match_children)
    }
