"""
Item Resolver for attrquery.

Converts an Item (whatever the caller points at) into a Reflectable Member.

Design principles:
- Shape is validated when the Item variant is built, not while reflecting
- Every failure becomes a ResolutionFailure with a rule, never an exception
- A failed resolution collapses to the Null Member, which behaves like a
  member with zero attributes

Item variants:
    ObjectItem   — a class, function, bound method or any other object
    TypeName     — dotted name of a class
    FunctionName — dotted name of a free function
    MemberRef    — (owner, member name): method, then property, then constant
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..reflection.introspect import (
    find_constant,
    find_method,
    find_property,
    owner_type,
)
from ..reflection.loader import load_function, load_type
from ..reflection.members import (
    NULL_MEMBER,
    FunctionMember,
    Member,
    MethodMember,
    TypeMember,
)

logger = logging.getLogger(__name__)


# =============================================================================
# FAILURE SYSTEM
# =============================================================================

class ResolutionRule(Enum):
    """
    Reasons an Item fails to resolve.

    Any of these yields the Null Member:
    UNSUPPORTED_ITEM: None, wrong-arity sequence or other unusable shape
    UNKNOWN_TYPE:     type name is not loadable
    UNKNOWN_FUNCTION: name is neither a loadable type nor a function
    UNKNOWN_OWNER:    member reference owner cannot be turned into a class
    MISSING_MEMBER:   owner has no method, property or constant of that name
    REFLECTION_ERROR: the runtime refused to introspect the target
    """
    UNSUPPORTED_ITEM = "unsupported_item"
    UNKNOWN_TYPE = "unknown_type"
    UNKNOWN_FUNCTION = "unknown_function"
    UNKNOWN_OWNER = "unknown_owner"
    MISSING_MEMBER = "missing_member"
    REFLECTION_ERROR = "reflection_error"


class ResolutionError(Exception):
    """Raised inside the resolver; always converted to a ResolutionFailure."""

    def __init__(self, rule: ResolutionRule, reason: str):
        self.rule = rule
        self.reason = reason
        super().__init__(f"[{rule.value}] {reason}")


class ItemShapeError(ResolutionError):
    """Raised when an Item variant is constructed with invalid fields."""

    def __init__(self, reason: str):
        super().__init__(ResolutionRule.UNSUPPORTED_ITEM, reason)


@dataclass(frozen=True)
class ResolutionFailure:
    """Why an Item resolved to the Null Member."""
    rule: ResolutionRule
    reason: str

    @classmethod
    def from_error(cls, error: ResolutionError) -> ResolutionFailure:
        return cls(rule=error.rule, reason=error.reason)


# =============================================================================
# ITEM VARIANTS
# =============================================================================

@dataclass(frozen=True)
class ObjectItem:
    value: Any

    def __post_init__(self):
        if self.value is None:
            raise ItemShapeError("item is None")


@dataclass(frozen=True)
class TypeName:
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ItemShapeError(f"type name must be a non-empty string, got {self.name!r}")


@dataclass(frozen=True)
class FunctionName:
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ItemShapeError(f"function name must be a non-empty string, got {self.name!r}")


@dataclass(frozen=True)
class MemberRef:
    owner: Any
    member: str

    def __post_init__(self):
        if self.owner is None:
            raise ItemShapeError("member reference owner is None")
        if not isinstance(self.member, str) or not self.member:
            raise ItemShapeError(f"member name must be a non-empty string, got {self.member!r}")


Item = Union[ObjectItem, TypeName, FunctionName, MemberRef]

_ITEM_TYPES = (ObjectItem, TypeName, FunctionName, MemberRef)


def as_item(raw: Any) -> Item:
    """
    Coerce a raw caller value into an Item variant.

    Example:
        MyClass                 -> ObjectItem(MyClass)
        "pkg.mod.MyClass"       -> TypeName("pkg.mod.MyClass")
        "pkg.mod.helper"        -> FunctionName("pkg.mod.helper")
        (MyClass, "run")        -> MemberRef(MyClass, "run")
        [1, 2, 3]               -> ItemShapeError

    Raises:
        ItemShapeError: If raw has no usable shape
    """
    if isinstance(raw, _ITEM_TYPES):
        return raw

    if raw is None:
        raise ItemShapeError("item is None")

    if isinstance(raw, (list, tuple)):
        if len(raw) != 2:
            raise ItemShapeError(f"member reference needs 2 elements, got {len(raw)}")
        return MemberRef(owner=raw[0], member=raw[1])

    if isinstance(raw, str):
        if load_type(raw) is not None:
            return TypeName(raw)
        return FunctionName(raw)

    return ObjectItem(raw)


# =============================================================================
# RESOLUTION
# =============================================================================

@dataclass
class ResolutionResult:
    """Result of an item resolution attempt."""
    success: bool
    member: Member = NULL_MEMBER
    failure: Optional[ResolutionFailure] = None


def _resolve_object(value: Any) -> Member:
    if isinstance(value, type):
        return TypeMember(value)

    if inspect.ismethod(value):
        owner = value.__self__ if isinstance(value.__self__, type) else type(value.__self__)
        return MethodMember(owner=owner, member_name=value.__name__, function=value.__func__)

    if inspect.isroutine(value):
        return FunctionMember(value)

    return TypeMember(type(value))


def _resolve_type_name(item: TypeName) -> Member:
    cls = load_type(item.name)
    if cls is None:
        raise ResolutionError(
            ResolutionRule.UNKNOWN_TYPE,
            f"no loadable type named {item.name!r}",
        )
    return TypeMember(cls)


def _resolve_function_name(item: FunctionName) -> Member:
    function = load_function(item.name)
    if function is None:
        raise ResolutionError(
            ResolutionRule.UNKNOWN_FUNCTION,
            f"no loadable type or function named {item.name!r}",
        )
    return FunctionMember(function)


def _resolve_member_ref(item: MemberRef) -> Member:
    cls = owner_type(item.owner)
    if cls is None:
        raise ResolutionError(
            ResolutionRule.UNKNOWN_OWNER,
            f"cannot resolve owner {item.owner!r} to a class",
        )

    # Probe order: method, property, constant
    instance = None if isinstance(item.owner, (type, str)) else item.owner

    member: Optional[Member] = find_method(cls, item.member)
    if member is None:
        member = find_property(cls, item.member, instance)
    if member is None:
        member = find_constant(cls, item.member)

    if member is None:
        raise ResolutionError(
            ResolutionRule.MISSING_MEMBER,
            f"{cls.__qualname__} has no method, property or constant named {item.member!r}",
        )
    return member


def resolve_item(raw: Any) -> ResolutionResult:
    """
    Resolve an Item (or a raw value coercible to one) into a Member.

    Returns:
        ResolutionResult with either:
        - success=True and the resolved Member
        - success=False, the Null Member and the failure reason
    """
    try:
        item = as_item(raw)

        if isinstance(item, ObjectItem):
            member = _resolve_object(item.value)
        elif isinstance(item, TypeName):
            member = _resolve_type_name(item)
        elif isinstance(item, FunctionName):
            member = _resolve_function_name(item)
        else:
            member = _resolve_member_ref(item)

        return ResolutionResult(success=True, member=member)

    except ResolutionError as e:
        failure = ResolutionFailure.from_error(e)
    except (AttributeError, TypeError, ValueError) as e:
        failure = ResolutionFailure(
            rule=ResolutionRule.REFLECTION_ERROR,
            reason=f"{type(e).__name__}: {e}",
        )

    logger.debug("item %r resolved to the null member: %s", raw, failure.reason)
    return ResolutionResult(success=False, failure=failure)


def resolve(raw: Any) -> Member:
    """Resolve an item to a Member, or to the Null Member on any failure."""
    return resolve_item(raw).member
