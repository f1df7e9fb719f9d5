"""
Constants and mappings for JNI peer generation
"""

from enum import Enum

from .models import PrimitiveKind


class NativeTypeCategory(Enum):
    """Closed set of native types a managed type can map to

    The value is the JNI type alias used in generated declarations.
    """
    VOID = "void"
    BOOLEAN = "jboolean"
    BYTE = "jbyte"
    CHAR = "jchar"
    SHORT = "jshort"
    INT = "jint"
    LONG = "jlong"
    FLOAT = "jfloat"
    DOUBLE = "jdouble"
    STRING = "jstring"
    THROWABLE = "jthrowable"
    CLASS = "jclass"
    OBJECT = "jobject"
    BOOLEAN_ARRAY = "jbooleanArray"
    BYTE_ARRAY = "jbyteArray"
    CHAR_ARRAY = "jcharArray"
    SHORT_ARRAY = "jshortArray"
    INT_ARRAY = "jintArray"
    LONG_ARRAY = "jlongArray"
    FLOAT_ARRAY = "jfloatArray"
    DOUBLE_ARRAY = "jdoubleArray"
    OBJECT_ARRAY = "jobjectArray"

    @property
    def native_name(self) -> str:
        return self.value


# Mapping from primitive kinds to native categories
PRIMITIVE_CATEGORY_MAP = {
    PrimitiveKind.BOOLEAN: NativeTypeCategory.BOOLEAN,
    PrimitiveKind.BYTE: NativeTypeCategory.BYTE,
    PrimitiveKind.CHAR: NativeTypeCategory.CHAR,
    PrimitiveKind.SHORT: NativeTypeCategory.SHORT,
    PrimitiveKind.INT: NativeTypeCategory.INT,
    PrimitiveKind.LONG: NativeTypeCategory.LONG,
    PrimitiveKind.FLOAT: NativeTypeCategory.FLOAT,
    PrimitiveKind.DOUBLE: NativeTypeCategory.DOUBLE,
}

# One-dimensional primitive arrays have dedicated handle types
PRIMITIVE_ARRAY_CATEGORY_MAP = {
    PrimitiveKind.BOOLEAN: NativeTypeCategory.BOOLEAN_ARRAY,
    PrimitiveKind.BYTE: NativeTypeCategory.BYTE_ARRAY,
    PrimitiveKind.CHAR: NativeTypeCategory.CHAR_ARRAY,
    PrimitiveKind.SHORT: NativeTypeCategory.SHORT_ARRAY,
    PrimitiveKind.INT: NativeTypeCategory.INT_ARRAY,
    PrimitiveKind.LONG: NativeTypeCategory.LONG_ARRAY,
    PrimitiveKind.FLOAT: NativeTypeCategory.FLOAT_ARRAY,
    PrimitiveKind.DOUBLE: NativeTypeCategory.DOUBLE_ARRAY,
}

# Single-letter type signatures used by the runtime's descriptor grammar
PRIMITIVE_SIGNATURE_MAP = {
    PrimitiveKind.BOOLEAN: "Z",
    PrimitiveKind.BYTE: "B",
    PrimitiveKind.CHAR: "C",
    PrimitiveKind.SHORT: "S",
    PrimitiveKind.INT: "I",
    PrimitiveKind.LONG: "J",
    PrimitiveKind.FLOAT: "F",
    PrimitiveKind.DOUBLE: "D",
}
VOID_SIGNATURE = "V"

# Roots of the class hierarchies with dedicated handle types
THROWABLE_CLASS = "java.lang.Throwable"
CLASS_CLASS = "java.lang.Class"
STRING_CLASS = "java.lang.String"
OBJECT_CLASS = "java.lang.Object"

# Return category -> (call kind, needs cast). The call kind selects the
# Env().Call<Kind>Method family used to invoke the managed method.
CALL_DISPATCH_MAP = {
    NativeTypeCategory.VOID: ("Void", False),
    NativeTypeCategory.BOOLEAN: ("Boolean", False),
    NativeTypeCategory.BYTE: ("Byte", False),
    NativeTypeCategory.CHAR: ("Char", False),
    NativeTypeCategory.SHORT: ("Short", False),
    NativeTypeCategory.INT: ("Int", False),
    NativeTypeCategory.LONG: ("Long", False),
    NativeTypeCategory.FLOAT: ("Float", False),
    NativeTypeCategory.DOUBLE: ("Double", False),
    NativeTypeCategory.OBJECT: ("Object", False),
    NativeTypeCategory.STRING: ("Object", False),
    NativeTypeCategory.THROWABLE: ("Object", True),
    NativeTypeCategory.CLASS: ("Object", True),
    NativeTypeCategory.BOOLEAN_ARRAY: ("Object", True),
    NativeTypeCategory.BYTE_ARRAY: ("Object", True),
    NativeTypeCategory.CHAR_ARRAY: ("Object", True),
    NativeTypeCategory.SHORT_ARRAY: ("Object", True),
    NativeTypeCategory.INT_ARRAY: ("Object", True),
    NativeTypeCategory.LONG_ARRAY: ("Object", True),
    NativeTypeCategory.FLOAT_ARRAY: ("Object", True),
    NativeTypeCategory.DOUBLE_ARRAY: ("Object", True),
    NativeTypeCategory.OBJECT_ARRAY: ("Object", True),
}

# File preamble
FILE_BANNER = "/* DO NOT EDIT THIS FILE - it is machine generated */"
INCLUDE_GUARD = "#pragma once"

# Headers of the native bridge included by every declaration file
DEFAULT_INCLUDES = ("JNIManagedPeer.h", "jni.h")

# Base class of every generated peer and the wrapper caching class handles
PEER_BASE_CLASS = "::JNI::ManagedPeer"
CLASS_HANDLE_WRAPPER = "::JNI::JClass"

# Generated file naming
PEER_SUFFIX = "ManagedPeer"
HEADER_EXTENSION = ".h"
SOURCE_EXTENSION = ".cpp"

# Local names used inside generated method bodies
RESERVED_LOCALS = frozenset({"once", "methodID"})

# C++ keywords that cannot be used as identifiers
CPP_KEYWORDS = frozenset({
    'alignas', 'alignof', 'and', 'and_eq', 'asm', 'auto', 'bitand', 'bitor',
    'bool', 'break', 'case', 'catch', 'char', 'char8_t', 'char16_t', 'char32_t',
    'class', 'compl', 'concept', 'const', 'consteval', 'constexpr', 'constinit',
    'const_cast', 'continue', 'co_await', 'co_return', 'co_yield', 'decltype',
    'default', 'delete', 'do', 'double', 'dynamic_cast', 'else', 'enum',
    'explicit', 'export', 'extern', 'false', 'float', 'for', 'friend', 'goto',
    'if', 'inline', 'int', 'long', 'mutable', 'namespace', 'new', 'noexcept',
    'not', 'not_eq', 'nullptr', 'operator', 'or', 'or_eq', 'private',
    'protected', 'public', 'register', 'reinterpret_cast', 'requires', 'return',
    'short', 'signed', 'sizeof', 'static', 'static_assert', 'static_cast',
    'struct', 'switch', 'template', 'this', 'thread_local', 'throw', 'true',
    'try', 'typedef', 'typeid', 'typename', 'union', 'unsigned', 'using',
    'virtual', 'void', 'volatile', 'wchar_t', 'while', 'xor', 'xor_eq',
})
