# Resolution package for attrquery
"""
Item resolution modules.

Converts whatever the caller points at into a Reflectable Member.
Unresolvable items become the Null Member, never an exception.
"""
