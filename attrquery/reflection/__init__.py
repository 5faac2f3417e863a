# Reflection package for attrquery
"""
Live introspection of Python objects.

Locates loadable types and functions by dotted name, wraps classes and
members as Reflectable Members, and enumerates a class's methods,
properties and constants.
"""
