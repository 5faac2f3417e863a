# attrquery: attribute introspection queries
# Declare structured metadata on Python classes and members, then query it.

"""
Core invariant: a bad item or an unknown attribute is never an error.
Every query degrades to False, None or an empty result instead.

Usage:
    from attrquery import attribute, has_attribute, get_attribute

    @attribute(Route, "/users")
    class UserView: ...

    has_attribute(UserView, Route)              # True
    get_attribute(UserView, "route").path       # "/users"
"""

import logging

from .entries import (
    AttributeEntry,
    DeclarationError,
    attribute,
    declared_entries,
)
from .query import (
    does_not_have_attribute,
    get_attribute,
    get_attribute_names,
    get_attributes,
    get_attributes_callback,
    get_class_constants_with_attribute,
    get_class_constants_with_attribute_callback,
    get_class_methods_with_attribute,
    get_class_methods_with_attribute_callback,
    get_class_properties_with_attribute,
    get_class_properties_with_attribute_callback,
    get_object_properties_with_attribute,
    get_object_properties_with_attribute_callback,
    has_attribute,
    has_attribute_callback,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Declaration
    "AttributeEntry",
    "DeclarationError",
    "attribute",
    "declared_entries",
    # Presence
    "has_attribute",
    "does_not_have_attribute",
    "has_attribute_callback",
    # Retrieval
    "get_attribute",
    "get_attributes",
    "get_attributes_callback",
    "get_attribute_names",
    # Class scans
    "get_class_methods_with_attribute",
    "get_class_methods_with_attribute_callback",
    "get_object_properties_with_attribute",
    "get_object_properties_with_attribute_callback",
    "get_class_properties_with_attribute",
    "get_class_properties_with_attribute_callback",
    "get_class_constants_with_attribute",
    "get_class_constants_with_attribute_callback",
]
