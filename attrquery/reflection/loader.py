"""
Type loader for attrquery.

Answers "is this dotted name currently loadable?" for types and free
functions. By default only modules that are already imported are
consulted; set ``config.IMPORT_ON_LOOKUP`` (or pass import_modules=True)
to allow importing.
"""

from __future__ import annotations

import builtins
import importlib
import inspect
import logging
import sys
from typing import Any, Optional

from .. import config

logger = logging.getLogger(__name__)

_MISSING = object()


def _is_dotted_identifier(name: str) -> bool:
    return all(part.isidentifier() for part in name.split("."))


def _find_module(module_name: str, import_modules: bool) -> Any:
    module = sys.modules.get(module_name)
    if module is not None or not import_modules:
        return module

    try:
        return importlib.import_module(module_name)
    except Exception as e:
        # Import failures mean "not loadable", whatever the module raised
        logger.debug("import of %s failed: %s", module_name, e)
        return None


def locate(name: str, import_modules: Optional[bool] = None) -> Any:
    """
    Find the object a dotted name refers to.

    Example:
        "collections.OrderedDict" -> <class 'collections.OrderedDict'>
        "int"                     -> <class 'int'> (builtins)
        "no.such.Thing"           -> None

    The longest importable module prefix wins; the remaining segments are
    read as attributes, so nested classes ("pkg.mod.Outer.Inner") work.
    """
    if not isinstance(name, str):
        return None

    name = name.strip()
    if not name or not _is_dotted_identifier(name):
        return None

    if import_modules is None:
        import_modules = config.IMPORT_ON_LOOKUP

    parts = name.split(".")
    if len(parts) == 1:
        return getattr(builtins, name, None)

    for cut in range(len(parts) - 1, 0, -1):
        module = _find_module(".".join(parts[:cut]), import_modules)
        if module is None:
            continue

        obj = module
        for attr in parts[cut:]:
            obj = getattr(obj, attr, _MISSING)
            if obj is _MISSING:
                break
        if obj is not _MISSING:
            return obj

    return None


def load_type(name: str, import_modules: Optional[bool] = None) -> Optional[type]:
    """Return the type a dotted name refers to, or None."""
    obj = locate(name, import_modules)
    return obj if isinstance(obj, type) else None


def load_function(name: str, import_modules: Optional[bool] = None) -> Any:
    """Return the free function a dotted name refers to, or None."""
    obj = locate(name, import_modules)
    if obj is None or isinstance(obj, type):
        return None
    return obj if inspect.isroutine(obj) else None
