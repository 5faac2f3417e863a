"""
Safe Instantiator for attrquery.

Turns matched Attribute Entries into live attribute instances.

If an entry's type is not loadable (declared by a name that no longer
resolves), the entry yields None instead of raising. Bulk instantiation
drops those entries. Exceptions raised by an attribute's own constructor
are declaration bugs and propagate.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..entries import AttributeEntry

logger = logging.getLogger(__name__)


def instantiate(entry: AttributeEntry) -> Optional[Any]:
    """Construct the attribute, or return None if its type is not loadable."""
    cls = entry.load()
    if cls is None:
        logger.debug("attribute type %s is not loadable, skipping", entry.name)
        return None
    return cls(*entry.arguments, **dict(entry.keywords))


def instantiate_all(entries: Iterable[AttributeEntry]) -> list[Any]:
    """Instantiate entries in order, dropping the ones that are not loadable."""
    instances = []
    for entry in entries:
        instance = instantiate(entry)
        if instance is not None:
            instances.append(instance)
    return instances
