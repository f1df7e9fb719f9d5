"""
Type mapping logic for converting managed types to JNI types and signatures
"""

from .constants import (
    NativeTypeCategory,
    PRIMITIVE_CATEGORY_MAP,
    PRIMITIVE_ARRAY_CATEGORY_MAP,
    PRIMITIVE_SIGNATURE_MAP,
    VOID_SIGNATURE,
    THROWABLE_CLASS,
    CLASS_CLASS,
)
from .errors import InternalBugError
from .models import (
    ArrayType,
    ClassType,
    Method,
    PrimitiveType,
    StringType,
    VoidType,
)


class TypeMapper:
    """Maps managed type descriptors to JNI types and descriptor strings"""

    def __init__(self):
        self.category_map = PRIMITIVE_CATEGORY_MAP.copy()
        self.array_category_map = PRIMITIVE_ARRAY_CATEGORY_MAP.copy()
        self.signature_map = PRIMITIVE_SIGNATURE_MAP.copy()

    def category(self, t) -> NativeTypeCategory:
        """Classify a type descriptor into its native type category"""
        if isinstance(t, VoidType):
            return NativeTypeCategory.VOID

        if isinstance(t, PrimitiveType):
            return self.category_map[t.kind]

        if isinstance(t, StringType):
            return NativeTypeCategory.STRING

        if isinstance(t, ClassType):
            if t.is_subclass_of(THROWABLE_CLASS):
                return NativeTypeCategory.THROWABLE
            if t.is_subclass_of(CLASS_CLASS):
                return NativeTypeCategory.CLASS
            return NativeTypeCategory.OBJECT

        if isinstance(t, ArrayType):
            # Only one-dimensional primitive arrays get a typed handle;
            # everything else is an array of references
            if t.dimension == 1 and isinstance(t.element, PrimitiveType):
                return self.array_category_map[t.element.kind]
            if isinstance(t.element, (PrimitiveType, StringType, ClassType)):
                return NativeTypeCategory.OBJECT_ARRAY

        raise InternalBugError(f"Unknown type descriptor: {t!r}")

    def map_type(self, t) -> str:
        """Map a type descriptor to the JNI type used in declarations"""
        return self.category(t).native_name

    def type_signature(self, t) -> str:
        """Encode a type descriptor in the runtime's descriptor grammar"""
        if isinstance(t, VoidType):
            return VOID_SIGNATURE

        if isinstance(t, PrimitiveType):
            return self.signature_map[t.kind]

        if isinstance(t, (StringType, ClassType)):
            return "L" + internal_name(t.qualified_name) + ";"

        if isinstance(t, ArrayType):
            return "[" * t.dimension + self.type_signature(t.element)

        raise InternalBugError(f"Unknown type descriptor: {t!r}")

    def parameters_signature(self, method: Method) -> str:
        """Concatenated descriptors of a method's parameters, in order"""
        return "".join(self.type_signature(param.type) for param in method.parameters)

    def method_signature(self, method: Method) -> str:
        """Encode a method as "(<parameters>)<return>" """
        return f"({self.parameters_signature(method)}){self.type_signature(method.return_type)}"


def internal_name(qualified_name: str) -> str:
    """Slash-separated name the runtime uses to look classes up

    com.jnitest.Car -> com/jnitest/Car
    """
    return qualified_name.replace(".", "/")
