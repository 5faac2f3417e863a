"""
Configuration for attrquery.

Module-level constants, read at call time so callers can adjust them
for the whole process (e.g. ``attrquery.config.IMPORT_ON_LOOKUP = True``).
"""

# =============================================================================
# MATCHING DEFAULTS
# =============================================================================

# Whether a query for attribute type A also matches declared subclasses of A.
# The strict behaviour (exact type or short name only) is available per call
# by passing match_children=False.
MATCH_CHILD_ATTRIBUTES = True


# =============================================================================
# TYPE LOOKUP
# =============================================================================

# When False, dotted names are only looked up in modules that are already
# imported, so resolving an item never runs module code.
IMPORT_ON_LOOKUP = False


# =============================================================================
# METADATA STORAGE
# =============================================================================

# Name of the attribute that holds declared entries on classes and functions
ENTRIES_ATTRIBUTE = "__attrquery_entries__"
