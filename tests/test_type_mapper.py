"""
Unit tests for TypeMapper
"""

import pytest

from jni_peer_generator.constants import NativeTypeCategory
from jni_peer_generator.errors import InternalBugError
from jni_peer_generator.models import (
    ArrayType,
    BOOLEAN,
    BYTE,
    CHAR,
    ClassType,
    DOUBLE,
    FLOAT,
    INT,
    LONG,
    Method,
    Parameter,
    SHORT,
    STRING,
    VOID,
)
from jni_peer_generator.type_mapper import TypeMapper, internal_name


CAR = ClassType("com.jnitest.Car", ("java.lang.Object",))
EXCEPTION = ClassType("java.lang.IllegalStateException",
                      ("java.lang.RuntimeException", "java.lang.Exception",
                       "java.lang.Throwable", "java.lang.Object"))


class TestTypeMapping:
    """Test mapping of type descriptors to JNI types"""

    def setup_method(self):
        self.mapper = TypeMapper()

    @pytest.mark.parametrize("t,expected", [
        (VOID, "void"),
        (BOOLEAN, "jboolean"),
        (BYTE, "jbyte"),
        (CHAR, "jchar"),
        (SHORT, "jshort"),
        (INT, "jint"),
        (LONG, "jlong"),
        (FLOAT, "jfloat"),
        (DOUBLE, "jdouble"),
    ])
    def test_void_and_primitives(self, t, expected):
        assert self.mapper.map_type(t) == expected

    def test_string(self):
        assert self.mapper.map_type(STRING) == "jstring"

    def test_plain_class_is_object(self):
        assert self.mapper.map_type(CAR) == "jobject"
        assert self.mapper.category(CAR) is NativeTypeCategory.OBJECT

    def test_throwable_subclass(self):
        """Classes deriving from Throwable map to jthrowable"""
        assert self.mapper.map_type(EXCEPTION) == "jthrowable"

    def test_throwable_itself(self):
        assert self.mapper.map_type(ClassType("java.lang.Throwable", ("java.lang.Object",))) == "jthrowable"

    def test_class_class(self):
        assert self.mapper.map_type(ClassType("java.lang.Class", ("java.lang.Object",))) == "jclass"

    def test_primitive_arrays(self):
        assert self.mapper.map_type(ArrayType(BOOLEAN)) == "jbooleanArray"
        assert self.mapper.map_type(ArrayType(INT)) == "jintArray"
        assert self.mapper.map_type(ArrayType(DOUBLE)) == "jdoubleArray"

    def test_multidimensional_primitive_array_is_object_array(self):
        assert self.mapper.map_type(ArrayType(INT, 2)) == "jobjectArray"
        assert self.mapper.map_type(ArrayType(ArrayType(INT))) == "jobjectArray"

    def test_reference_arrays(self):
        assert self.mapper.map_type(ArrayType(STRING)) == "jobjectArray"
        assert self.mapper.map_type(ArrayType(CAR)) == "jobjectArray"

    def test_unknown_descriptor_is_a_bug(self):
        with pytest.raises(InternalBugError):
            self.mapper.map_type("int")
        with pytest.raises(InternalBugError):
            self.mapper.type_signature(object())

    def test_mapping_is_deterministic(self):
        first = [self.mapper.map_type(t) for t in (INT, STRING, CAR, ArrayType(LONG))]
        second = [TypeMapper().map_type(t) for t in (INT, STRING, CAR, ArrayType(LONG))]
        assert first == second


class TestSignatures:
    """Test encoding of descriptors in the runtime's signature grammar"""

    def setup_method(self):
        self.mapper = TypeMapper()

    def test_primitive_letters(self):
        letters = [self.mapper.type_signature(t)
                   for t in (BOOLEAN, BYTE, CHAR, SHORT, INT, LONG, FLOAT, DOUBLE, VOID)]
        assert letters == ["Z", "B", "C", "S", "I", "J", "F", "D", "V"]

    def test_class_signatures(self):
        assert self.mapper.type_signature(STRING) == "Ljava/lang/String;"
        assert self.mapper.type_signature(CAR) == "Lcom/jnitest/Car;"

    def test_array_signatures(self):
        assert self.mapper.type_signature(ArrayType(INT)) == "[I"
        assert self.mapper.type_signature(ArrayType(STRING, 2)) == "[[Ljava/lang/String;"

    def test_no_argument_int_method(self):
        assert self.mapper.method_signature(Method("getCount", INT)) == "()I"

    def test_string_long_to_boolean_array(self):
        method = Method(
            "flags",
            ArrayType(BOOLEAN),
            parameters=(Parameter("name", STRING), Parameter("mask", LONG)),
        )
        assert self.mapper.method_signature(method) == "(Ljava/lang/String;J)[Z"

    def test_void_method_with_parameters(self):
        method = Method("setCost", VOID, parameters=(Parameter("cost", DOUBLE),))
        assert self.mapper.method_signature(method) == "(D)V"

    def test_internal_name(self):
        assert internal_name("com.jnitest.Car") == "com/jnitest/Car"
        assert internal_name("com.example.Outer$Inner") == "com/example/Outer$Inner"


class TestArrayType:
    """Test normalization of array descriptors"""

    def test_nested_arrays_fold_into_dimension(self):
        assert ArrayType(ArrayType(INT), 1) == ArrayType(INT, 2)

    def test_zero_dimension_rejected(self):
        with pytest.raises(InternalBugError):
            ArrayType(INT, 0)

    def test_void_array_rejected(self):
        with pytest.raises(InternalBugError):
            ArrayType(VOID)
