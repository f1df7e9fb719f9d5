"""
XML model description parsing

Turns a <peers> document into the class model the generator consumes:

    <peers>
        <class name="com.jnitest.Car" namespace="JNI.Test">
            <field name="WHEELS" type="int" static="true" final="true" value="4"/>
            <method name="getCost" returns="double" tagged="true"/>
            <method name="setCost" tagged="true">
                <param name="cost" type="double"/>
            </method>
        </class>
    </peers>

A class is tagged for generation when it has a namespace attribute or
tagged="true".

A char constant value of exactly one character is that character, so
value="5" is the digit '5' (code point 53). Longer values are read as integer
code points: value="65" or value="0x41" for 'A'.
"""

import math
import xml.etree.ElementTree as ET

from .config import split_namespace
from .constants import CLASS_CLASS, OBJECT_CLASS, STRING_CLASS, THROWABLE_CLASS
from .errors import ModelError
from .models import (
    ArrayType,
    ClassType,
    Field,
    ManagedClass,
    Method,
    Parameter,
    PrimitiveKind,
    PrimitiveType,
    STRING,
    VOID,
)

# Superclasses of well-known runtime classes, so that references to them map
# to the right handle type without being part of the model
BUILTIN_SUPERCLASSES = {
    OBJECT_CLASS: None,
    CLASS_CLASS: OBJECT_CLASS,
    THROWABLE_CLASS: OBJECT_CLASS,
    "java.lang.Exception": THROWABLE_CLASS,
    "java.lang.Error": THROWABLE_CLASS,
    "java.lang.RuntimeException": "java.lang.Exception",
    "java.lang.IllegalArgumentException": "java.lang.RuntimeException",
    "java.lang.IllegalStateException": "java.lang.RuntimeException",
    "java.lang.NullPointerException": "java.lang.RuntimeException",
    "java.lang.UnsupportedOperationException": "java.lang.RuntimeException",
    "java.lang.IndexOutOfBoundsException": "java.lang.RuntimeException",
    "java.io.IOException": "java.lang.Exception",
}

PRIMITIVE_NAMES = {kind.value: kind for kind in PrimitiveKind}


def _parse_bool(element, name: str) -> bool:
    value = element.get(name, "false").strip().lower()
    if value not in ("true", "false"):
        raise ModelError(f"Attribute '{name}' must be 'true' or 'false', got '{value}'")
    return value == "true"


def _required(element, name: str, context: str) -> str:
    value = element.get(name)
    if value is None or not value.strip():
        raise ModelError(f"{context} element missing '{name}' attribute")
    return value.strip()


def simple_name(qualified_name: str) -> str:
    """com.example.Outer$Inner -> Inner"""
    return qualified_name.rsplit(".", 1)[-1].rsplit("$", 1)[-1]


class ModelLoader:
    """Builds ManagedClass objects from <class> elements"""

    def __init__(self):
        self.elements = {}       # qualified name -> <class> element
        self.superclass_of = dict(BUILTIN_SUPERCLASSES)
        self.classes = {}        # qualified name -> ManagedClass

    def qualify(self, name: str) -> str:
        """Resolve short java.lang names (Exception -> java.lang.Exception)"""
        if "." not in name and name not in self.superclass_of:
            candidate = "java.lang." + name
            if candidate in self.superclass_of:
                return candidate
        return name

    def superclasses(self, qualified_name: str) -> tuple[str, ...]:
        """Ancestor chain of a class, nearest first"""
        chain = []
        current = self.superclass_of.get(qualified_name)
        while current is not None:
            if current == qualified_name or current in chain:
                raise ModelError(f"Cyclic class hierarchy at {qualified_name}")
            chain.append(current)
            current = self.superclass_of.get(current)
        return tuple(chain)

    def parse_type(self, spelling: str):
        """Parse a source-style type spelling such as int, String or long[][]"""
        base = spelling.replace(" ", "")
        dimension = 0
        while base.endswith("[]"):
            base = base[:-2]
            dimension += 1
        if not base:
            raise ModelError(f"Invalid type '{spelling}'")

        if base == "void":
            if dimension:
                raise ModelError(f"Invalid type '{spelling}'")
            t = VOID
        elif base in PRIMITIVE_NAMES:
            t = PrimitiveType(PRIMITIVE_NAMES[base])
        elif base in ("String", STRING_CLASS):
            t = STRING
        else:
            name = self.qualify(base)
            t = ClassType(name, self.superclasses(name))

        if dimension:
            return ArrayType(t, dimension)
        return t

    def parse_constant(self, field_type, value: str):
        """Convert a value attribute to the Python value of the field's type"""
        if not isinstance(field_type, PrimitiveType):
            return value

        kind = field_type.kind
        text = value.strip()
        try:
            if kind is PrimitiveKind.BOOLEAN:
                if text not in ("true", "false"):
                    raise ValueError(text)
                return text == "true"
            # Single characters are literal, anything longer is a code point
            if kind is PrimitiveKind.CHAR and len(value) == 1:
                return value
            if kind in (PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE):
                if text in ("Infinity", "+Infinity"):
                    return math.inf
                if text == "-Infinity":
                    return -math.inf
                return float(text)
            return int(text, 0)
        except ValueError:
            raise ModelError(f"Invalid {kind.value} constant '{value}'")

    def parse_field(self, element, class_name: str) -> Field:
        name = _required(element, "name", f"Field in class '{class_name}'")
        field_type = self.parse_type(_required(element, "type", f"Field '{name}'"))
        is_static = _parse_bool(element, "static")
        is_final = _parse_bool(element, "final")

        constant_value = None
        value = element.get("value")
        if value is not None:
            if not (is_static and is_final):
                raise ModelError(f"Field {class_name}.{name} has a value but is not static final")
            constant_value = self.parse_constant(field_type, value)

        return Field(name, field_type, is_static, is_final, constant_value)

    def parse_method(self, element, class_name: str) -> Method:
        name = _required(element, "name", f"Method in class '{class_name}'")
        return_type = self.parse_type(element.get("returns", "void"))

        parameters = []
        for param in element.findall("param"):
            param_name = _required(param, "name", f"Parameter of method '{name}'")
            param_type = self.parse_type(_required(param, "type", f"Parameter '{param_name}'"))
            if param_type == VOID:
                raise ModelError(f"Parameter '{param_name}' of {class_name}.{name} cannot be void")
            parameters.append(Parameter(param_name, param_type))

        return Method(
            name=name,
            return_type=return_type,
            parameters=tuple(parameters),
            is_static=_parse_bool(element, "static"),
            is_tagged=_parse_bool(element, "tagged"),
        )

    def build_class(self, qualified_name: str, building: tuple = ()) -> ManagedClass:
        """Build a class after its superclass, which must exist first"""
        if qualified_name in self.classes:
            return self.classes[qualified_name]
        if qualified_name in building:
            raise ModelError(f"Cyclic class hierarchy at {qualified_name}")

        element = self.elements[qualified_name]
        parent = None
        parent_name = self.superclass_of.get(qualified_name)
        if parent_name in self.elements:
            parent = self.build_class(parent_name, building + (qualified_name,))

        namespace = None
        if element.get("namespace") is not None:
            text = element.get("namespace").strip()
            namespace = split_namespace(text) if text else ()
        elif _parse_bool(element, "tagged"):
            namespace = ()

        cls = ManagedClass(
            qualified_name=qualified_name,
            simple_name=element.get("simple", simple_name(qualified_name)).strip(),
            namespace=namespace,
            fields=tuple(self.parse_field(f, qualified_name) for f in element.findall("field")),
            methods=tuple(self.parse_method(m, qualified_name) for m in element.findall("method")),
            parent=parent,
        )
        self.classes[qualified_name] = cls
        return cls

    def load(self, root) -> list[ManagedClass]:
        if root.tag != "peers":
            raise ModelError(f"Expected root element 'peers', got '{root.tag}'")

        # First pass: names and superclasses, so types can be resolved
        for element in root.findall("class"):
            name = _required(element, "name", "Class")
            if name in self.elements:
                raise ModelError(f"Class '{name}' is defined more than once")
            self.elements[name] = element
            self.superclass_of[name] = self.qualify(element.get("extends", OBJECT_CLASS).strip())

        for name in self.elements:
            self.superclasses(name)

        return [self.build_class(name) for name in self.elements]


def parse_model_element(root) -> list[ManagedClass]:
    """Build the class model from a parsed <peers> element"""
    return ModelLoader().load(root)


def parse_model_file(model_path) -> list[ManagedClass]:
    """Parse an XML model description file, in document order"""
    try:
        tree = ET.parse(model_path)
    except ET.ParseError as e:
        raise ModelError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Model file not found: {model_path}")
    return parse_model_element(tree.getroot())
