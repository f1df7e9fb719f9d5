"""
Metadata model of managed classes consumed by the generator

The model is built once by an ingestion front end (see loader.py) and is
read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum

from .errors import InternalBugError


class PrimitiveKind(Enum):
    """Primitive value kinds of the managed runtime"""
    BOOLEAN = "boolean"
    BYTE = "byte"
    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"


@dataclass(frozen=True)
class VoidType:
    """Return type of methods that produce no value"""


@dataclass(frozen=True)
class PrimitiveType:
    kind: PrimitiveKind


@dataclass(frozen=True)
class StringType:
    """The runtime's built-in string class"""
    qualified_name: str = "java.lang.String"


@dataclass(frozen=True)
class ClassType:
    """Reference to a class other than the string class

    superclasses holds the resolved ancestor chain, nearest first.
    """
    qualified_name: str
    superclasses: tuple[str, ...] = ()

    def is_subclass_of(self, qualified_name: str) -> bool:
        """True if this class is qualified_name or derives from it"""
        return qualified_name == self.qualified_name or qualified_name in self.superclasses


@dataclass(frozen=True)
class ArrayType:
    """Array of element with the given number of dimensions

    Arrays are kept flat: the element is never itself an array, nested
    construction is folded into the dimension count.
    """
    element: "TypeDescriptor"
    dimension: int = 1

    def __post_init__(self):
        if isinstance(self.element, ArrayType):
            # frozen, so go through object.__setattr__
            object.__setattr__(self, "dimension", self.dimension + self.element.dimension)
            object.__setattr__(self, "element", self.element.element)
        if self.dimension < 1:
            raise InternalBugError(f"Array dimension must be at least 1, got {self.dimension}")
        if isinstance(self.element, VoidType):
            raise InternalBugError("Array of void is not a valid type")


TypeDescriptor = VoidType | PrimitiveType | StringType | ClassType | ArrayType

# Shared instances for the common cases
VOID = VoidType()
STRING = StringType()
BOOLEAN = PrimitiveType(PrimitiveKind.BOOLEAN)
BYTE = PrimitiveType(PrimitiveKind.BYTE)
CHAR = PrimitiveType(PrimitiveKind.CHAR)
SHORT = PrimitiveType(PrimitiveKind.SHORT)
INT = PrimitiveType(PrimitiveKind.INT)
LONG = PrimitiveType(PrimitiveKind.LONG)
FLOAT = PrimitiveType(PrimitiveKind.FLOAT)
DOUBLE = PrimitiveType(PrimitiveKind.DOUBLE)


@dataclass(frozen=True)
class Field:
    name: str
    type: TypeDescriptor
    is_static: bool = False
    is_final: bool = False
    # Only known for static final fields with a compile-time value
    constant_value: bool | int | float | str | None = None


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeDescriptor


@dataclass(frozen=True)
class Method:
    name: str
    return_type: TypeDescriptor = VOID
    parameters: tuple[Parameter, ...] = ()
    is_static: bool = False
    is_tagged: bool = False


@dataclass(frozen=True, eq=False)
class ManagedClass:
    """A class of the managed program

    namespace is None when the class is not tagged for generation. A tagged
    class with an empty namespace is kept as-is and reported when emitted.
    """
    qualified_name: str
    simple_name: str
    namespace: tuple[str, ...] | None = None
    fields: tuple[Field, ...] = ()
    methods: tuple[Method, ...] = ()
    parent: "ManagedClass | None" = field(default=None, repr=False)

    @property
    def is_tagged(self) -> bool:
        return self.namespace is not None

    @property
    def tagged_methods(self) -> list[Method]:
        """Methods that get a binding, in declaration order"""
        return [method for method in self.methods if method.is_tagged]

    def as_type(self) -> ClassType:
        """Descriptor for references to this class"""
        superclasses = []
        ancestor = self.parent
        while ancestor is not None:
            superclasses.append(ancestor.qualified_name)
            ancestor = ancestor.parent
        return ClassType(self.qualified_name, tuple(superclasses))
