"""
Sample attribute types and declarations shared by the test suite.
"""

from dataclasses import dataclass
from typing import Annotated, ClassVar, Final

from attrquery import attribute, get_attribute


# =============================================================================
# ATTRIBUTE TYPES
# =============================================================================

@dataclass
class UnusedAttribute:
    pass


@dataclass
class FirstAttribute:
    pass


@dataclass
class SecondAttribute:
    id: int = 0


@dataclass
class ThirdAttribute:
    pass


@dataclass
class FourthAttribute:
    pass


@dataclass
class ParentAttribute:
    pass


@dataclass
class ChildAttribute(ParentAttribute):
    id: int = 0


@dataclass
class RepeatableAttribute:
    value: int


# Lower-cased, its name collides with the builtin filter type
@dataclass
class Filter:
    field: str = ""


# Declared by name only; no such class exists
UNDECLARED_ATTRIBUTE = f"{__name__}.UndeclaredAttribute"


# =============================================================================
# CLASSES
# =============================================================================

@attribute(FirstAttribute)
@attribute(SecondAttribute, 1)
@attribute(RepeatableAttribute, 0)
@attribute(RepeatableAttribute, 1)
@attribute(ChildAttribute, 1)
@attribute(UNDECLARED_ATTRIBUTE)
class ClassWithAttributes:
    CLASS_CONSTANT: Final[Annotated[int, attribute(FirstAttribute), attribute(SecondAttribute, 1)]] = 1
    SECOND_CONSTANT: Final[Annotated[int, attribute(SecondAttribute), attribute(ChildAttribute)]] = 2

    class_property: Annotated[int, attribute(FirstAttribute), attribute(ChildAttribute, 1)] = 1
    second_class_property: Annotated[int, attribute(SecondAttribute, 1)] = 2
    third_class_property: Annotated[int, attribute(FirstAttribute), attribute(ThirdAttribute)] = 3
    _private_property: Annotated[str, attribute(FourthAttribute)] = "private"
    static_class_property: ClassVar[Annotated[str, attribute(SecondAttribute)]] = "static"

    @attribute(FirstAttribute)
    def first_method(self):
        return get_attribute(self, SecondAttribute)

    @attribute(SecondAttribute)
    @attribute(ChildAttribute)
    def second_method(self):
        pass

    @attribute(FirstAttribute)
    @attribute(SecondAttribute, 1)
    def third_method(self):
        pass


class ClassWithoutAttributes:
    pass


@attribute(ParentAttribute)
@attribute(ChildAttribute, 4)
class ClassWithParentAndChild:
    pass


class DerivedFromAttributes(ClassWithAttributes):
    pass


@attribute(Filter, "status")
class FilteredHandler:
    pass


class ServiceWithHelpers:
    @staticmethod
    @attribute(FirstAttribute)
    def build():
        return ServiceWithHelpers()

    @attribute(SecondAttribute, 2)
    @classmethod
    def create(cls):
        return cls()

    @property
    @attribute(ThirdAttribute)
    def computed(self):
        return 42

    @attribute(FirstAttribute)
    def _hidden(self):
        pass


# =============================================================================
# FUNCTIONS
# =============================================================================

@attribute(FirstAttribute)
def dummy_function():
    pass
