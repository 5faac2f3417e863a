# CLI package for attrquery
"""
Read-only CLI for inspecting declared attributes.

Commands:
    attrquery describe — Show the attributes declared on a target
    attrquery find     — Show the members of a class carrying an attribute
"""
