# Matching package for attrquery
"""
Attribute matching and instantiation.

Selects the declared entries that answer to a match specification and
turns them into attribute instances, skipping types that cannot be loaded.
"""
