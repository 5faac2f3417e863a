"""
Reflectable Members for attrquery.

A Member is the normalized, inspectable form of an Item. Every variant
answers one question: which Attribute Entries are declared on it, in
declaration order.

Members:
    TypeMember      — a class
    FunctionMember  — a free function
    MethodMember    — a method looked up on a class
    PropertyMember  — an annotated field or property descriptor
    ConstantMember  — a Final-annotated class constant
    NullMember      — an unresolvable item; has no entries

Entries are read from live objects on every call. Nothing is cached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ..entries import AttributeEntry, declared_entries


class MemberKind(Enum):
    """The kinds of things that can carry attributes."""
    TYPE = "type"
    FUNCTION = "function"
    METHOD = "method"
    PROPERTY = "property"
    CONSTANT = "constant"
    NULL = "null"


class Member(ABC):
    """Abstract base class for reflectable members."""

    kind: MemberKind

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the member as written in source."""
        ...

    @abstractmethod
    def attribute_entries(self) -> tuple[AttributeEntry, ...]:
        """Declared entries, in declaration order."""
        ...

    def is_null(self) -> bool:
        return self.kind is MemberKind.NULL


# =============================================================================
# NULL MEMBER
# =============================================================================

@dataclass(frozen=True)
class NullMember(Member):
    """
    Sentinel for an unresolvable item.

    Behaves exactly like a member with zero attributes, so every query
    downstream returns its empty/false result instead of failing.
    """
    kind = MemberKind.NULL

    @property
    def name(self) -> str:
        return ""

    def attribute_entries(self) -> tuple[AttributeEntry, ...]:
        return ()


NULL_MEMBER = NullMember()


# =============================================================================
# TYPES AND FUNCTIONS
# =============================================================================

@dataclass(frozen=True)
class TypeMember(Member):
    cls: type
    kind = MemberKind.TYPE

    @property
    def name(self) -> str:
        return self.cls.__qualname__

    def attribute_entries(self) -> tuple[AttributeEntry, ...]:
        return declared_entries(self.cls)


@dataclass(frozen=True)
class FunctionMember(Member):
    function: Callable[..., Any]
    kind = MemberKind.FUNCTION

    @property
    def name(self) -> str:
        return getattr(self.function, "__qualname__", repr(self.function))

    def attribute_entries(self) -> tuple[AttributeEntry, ...]:
        return declared_entries(self.function)


# =============================================================================
# CLASS MEMBERS
# =============================================================================

@dataclass(frozen=True)
class MethodMember(Member):
    """A method found on owner (possibly inherited); function is unwrapped."""
    owner: type
    member_name: str
    function: Callable[..., Any]
    kind = MemberKind.METHOD

    @property
    def name(self) -> str:
        return self.member_name

    def attribute_entries(self) -> tuple[AttributeEntry, ...]:
        return declared_entries(self.function)


@dataclass(frozen=True)
class PropertyMember(Member):
    """
    A property of owner.

    Entries come from ``Annotated`` metadata on the field's annotation
    and, for ``property`` descriptors, from the getter.
    """
    owner: type
    member_name: str
    entries: tuple[AttributeEntry, ...] = ()
    static: bool = False
    kind = MemberKind.PROPERTY

    @property
    def name(self) -> str:
        return self.member_name

    def attribute_entries(self) -> tuple[AttributeEntry, ...]:
        return self.entries


@dataclass(frozen=True)
class ConstantMember(Member):
    """A ``Final``-annotated class constant of owner."""
    owner: type
    member_name: str
    entries: tuple[AttributeEntry, ...] = ()
    kind = MemberKind.CONSTANT

    @property
    def name(self) -> str:
        return self.member_name

    def attribute_entries(self) -> tuple[AttributeEntry, ...]:
        return self.entries
