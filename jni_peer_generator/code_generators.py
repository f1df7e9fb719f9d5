"""
Code generation functions for JNI managed peers
"""

from collections import Counter

from .config import GeneratorConfig
from .constants import (
    CALL_DISPATCH_MAP,
    CLASS_HANDLE_WRAPPER,
    CPP_KEYWORDS,
    FILE_BANNER,
    HEADER_EXTENSION,
    INCLUDE_GUARD,
    NativeTypeCategory,
    PEER_BASE_CLASS,
    RESERVED_LOCALS,
    SOURCE_EXTENSION,
)
from .errors import InternalBugError, ModelError
from .fields import get_all_fields
from .literals import define_for_static
from .mangle import MangleContext, escape_local, mangle
from .models import ManagedClass, Method
from .type_mapper import TypeMapper, internal_name

# Members of the peer base class that generated bodies rely on
RESERVED_MEMBERS = frozenset({"GetClass", "Object", "Env", "GetMethodID", "GetStaticMethodID"})


class CodeGenerator:
    """Generates the declaration and definition of a managed peer class"""

    def __init__(self, config: GeneratorConfig, type_mapper: TypeMapper = None):
        self.config = config
        self.type_mapper = type_mapper or TypeMapper()

    def base_file_name(self, cls: ManagedClass) -> str:
        """Peer class name, also the base name of both generated files"""
        return mangle(cls.simple_name, MangleContext.CLASS) + self.config.peer_suffix

    def header_file_name(self, cls: ManagedClass) -> str:
        return self.base_file_name(cls) + HEADER_EXTENSION

    def source_file_name(self, cls: ManagedClass) -> str:
        return self.base_file_name(cls) + SOURCE_EXTENSION

    def get_namespace(self, cls: ManagedClass) -> tuple[str, ...]:
        """Namespace segments the peer class is placed in"""
        if not cls.is_tagged:
            raise InternalBugError(f"Tried to generate a peer for untagged class {cls.qualified_name}")

        namespace = self.config.namespace_override or cls.namespace
        if not namespace:
            raise ModelError(f"Tagged class {cls.qualified_name} does not define a namespace")
        for segment in namespace:
            if not (segment.isascii() and segment.isidentifier()) or segment in CPP_KEYWORDS:
                raise ModelError(f"Namespace segment '{segment}' of {cls.qualified_name} is not a valid C++ identifier")
        return namespace

    def get_method_names(self, cls: ManagedClass) -> list[str]:
        """Native member names of the tagged methods, in declaration order

        Overloads keep the managed name (they become C++ overloads) unless
        disambiguate_overloads is set, which appends the mangled parameter
        signature the way long JNI symbol names do. Two methods ending up
        with the same prototype are reported instead of emitted.
        """
        methods = cls.tagged_methods
        overloads = Counter(method.name for method in methods)
        reserved = RESERVED_MEMBERS | {self.base_file_name(cls)}

        names = []
        prototypes = {}
        for method in methods:
            name = mangle(method.name, MangleContext.MEMBER)
            if self.config.disambiguate_overloads and overloads[method.name] > 1:
                signature = self.type_mapper.parameters_signature(method)
                name += "__" + (mangle(signature, MangleContext.SIGNATURE) if signature else "")

            if name in reserved:
                raise ModelError(f"Method {cls.qualified_name}.{method.name} clashes with a peer base member")

            key = (name, tuple(self.type_mapper.map_type(param.type) for param in method.parameters))
            if key in prototypes:
                raise ModelError(
                    f"Methods {cls.qualified_name}.{method.name} and {prototypes[key].name} "
                    f"map to the same native prototype {name}({', '.join(key[1])})"
                )
            prototypes[key] = method
            names.append(name)
        return names

    def get_parameter_names(self, method: Method) -> list[str]:
        # Parameters must not hide the locals or base members the body refers to
        reserved = RESERVED_LOCALS | RESERVED_MEMBERS
        return [escape_local(mangle(param.name, MangleContext.MEMBER), reserved)
                for param in method.parameters]

    def get_arguments_signature(self, method: Method, include_types: bool) -> str:
        """Parameter list for a prototype, or argument list for a call"""
        names = self.get_parameter_names(method)
        if not include_types:
            return ", ".join(names)
        return ", ".join(f"{self.type_mapper.map_type(param.type)} {name}"
                         for param, name in zip(method.parameters, names))

    def generate_constants(self, cls: ManagedClass) -> list[str]:
        """#undef/#define pairs for static final constants, inherited ones included

        Only part of the declaration when emit_constants is set.
        """
        defines = []
        for field in get_all_fields(cls):
            if field.is_static and field.is_final:
                define = define_for_static(cls.qualified_name, field, self.config.windows)
                if define is not None:
                    defines.append(define)
        return defines

    def generate_method_declaration(self, method: Method, name: str) -> str:
        modifiers = "static " if method.is_static else ""
        return_type = self.type_mapper.map_type(method.return_type)
        return f"\t{modifiers}{return_type} {name}({self.get_arguments_signature(method, True)});"

    def generate_declaration(self, cls: ManagedClass) -> str:
        """Generate the peer class declaration, wrapped in its namespace"""
        cname = self.base_file_name(cls)
        namespace = self.get_namespace(cls)
        names = self.get_method_names(cls)

        lines = []
        if self.config.emit_constants:
            lines.extend(self.generate_constants(cls))
            if lines:
                lines.append("")

        lines.append(OutputBuilder.namespace_begin(namespace))
        lines.append("")

        # All peers derive from the base JNI::ManagedPeer class
        lines.append(f"class {cname} : public {PEER_BASE_CLASS}")
        lines.append("{")
        lines.append("public:")
        lines.append(f"\texplicit {cname}(jobject object);")
        lines.append(f"\t~{cname}();")
        lines.append("")
        lines.append("\tstatic jclass GetClass();")

        if names:
            lines.append("")
        for method, name in zip(cls.tagged_methods, names):
            lines.append(self.generate_method_declaration(method, name))

        lines.append("};")
        lines.append("")
        lines.append(OutputBuilder.namespace_end(namespace))
        return "\n".join(lines)

    def generate_get_class(self, cls: ManagedClass, cname: str) -> list[str]:
        """Class handle accessor, looked up once and cached for the process"""
        if self.config.internal_class_names:
            lookup_name = internal_name(cls.qualified_name)
        else:
            lookup_name = self.type_mapper.type_signature(cls.as_type())
        lines = [f"jclass {cname}::GetClass()", "{"]
        if self.config.explicit_once_guard:
            lines.append("\tstatic std::once_flag once;")
            lines.append("\tstatic jclass clazz;")
            lines.append(f'\tstd::call_once(once, [] {{ static {CLASS_HANDLE_WRAPPER} instance("{lookup_name}"); clazz = instance; }});')
        else:
            lines.append(f'\tstatic {CLASS_HANDLE_WRAPPER} clazz("{lookup_name}");')
        lines.append("\treturn clazz;")
        lines.append("}")
        return lines

    def get_call_statement(self, method: Method) -> str:
        """Statement invoking the managed method through the JNI environment"""
        category = self.type_mapper.category(method.return_type)
        if category not in CALL_DISPATCH_MAP:
            raise InternalBugError(f"No call dispatch for {category!r}")
        call_kind, needs_cast = CALL_DISPATCH_MAP[category]

        arguments = [] if method.is_static else ["Object()"]
        arguments.append("methodID")
        forwarded = self.get_arguments_signature(method, False)
        if forwarded:
            arguments.append(forwarded)

        static = "Static" if method.is_static else ""
        statement = f"Env().Call{static}{call_kind}Method({', '.join(arguments)});"
        if needs_cast:
            statement = f"({category.native_name})" + statement
        if category is not NativeTypeCategory.VOID:
            statement = "return " + statement
        return statement

    def generate_method_definition(self, method: Method, name: str, cname: str) -> list[str]:
        return_type = self.type_mapper.map_type(method.return_type)
        signature = self.type_mapper.method_signature(method)
        lookup = "GetStaticMethodID" if method.is_static else "GetMethodID"
        resolve = f'{lookup}(GetClass(), "{method.name}", "{signature}")'

        lines = [f"{return_type} {cname}::{name}({self.get_arguments_signature(method, True)})", "{"]
        # Resolve the jmethodID once on first use
        if self.config.explicit_once_guard:
            lines.append("\tstatic std::once_flag once;")
            lines.append("\tstatic jmethodID methodID;")
            lines.append(f"\tstd::call_once(once, [] {{ methodID = {resolve}; }});")
        else:
            lines.append(f"\tstatic jmethodID methodID({resolve});")
        lines.append("\t" + self.get_call_statement(method))
        lines.append("}")
        return lines

    def generate_definition(self, cls: ManagedClass) -> str:
        """Generate the peer member definitions, wrapped in the namespace"""
        cname = self.base_file_name(cls)
        namespace = self.get_namespace(cls)
        names = self.get_method_names(cls)

        lines = [OutputBuilder.namespace_begin(namespace), ""]

        # Constructor with the managed object
        lines.append(f"{cname}::{cname}(jobject object)")
        lines.append(f"\t: {PEER_BASE_CLASS}(object)")
        lines.append("{")
        lines.append("}")
        lines.append("")

        # Destructor
        lines.append(f"{cname}::~{cname}()")
        lines.append("{")
        lines.append("}")
        lines.append("")

        lines.extend(self.generate_get_class(cls, cname))
        lines.append("")

        for method, name in zip(cls.tagged_methods, names):
            lines.extend(self.generate_method_definition(method, name, cname))
            lines.append("")

        lines.append(OutputBuilder.namespace_end(namespace))
        return "\n".join(lines)


class OutputBuilder:
    """Builds the final contents of generated files"""

    @staticmethod
    def namespace_begin(namespace) -> str:
        return " ".join(f"namespace {segment} {{" for segment in namespace)

    @staticmethod
    def namespace_end(namespace) -> str:
        return "}" * len(namespace) + " // namespace " + ".".join(namespace)

    @staticmethod
    def include_directive(header: str) -> str:
        """#include line; bare names are treated as system headers"""
        if header.startswith(("<", '"')):
            return f"#include {header}"
        return f"#include <{header}>"

    @staticmethod
    def build_header(includes, declaration: str) -> str:
        """Build the header file: banner, include guard, includes, declaration"""
        parts = [FILE_BANNER, INCLUDE_GUARD, ""]
        parts.extend(OutputBuilder.include_directive(header) for header in includes)
        parts.append("")
        parts.append(declaration)
        return "\n".join(parts) + "\n"

    @staticmethod
    def build_source(header_name: str, definition: str, pch: str = None,
                     once_guard: bool = True) -> str:
        """Build the source file: banner, includes, definition"""
        parts = [FILE_BANNER]
        if pch:
            parts.append(f'#include "{pch}"')
        parts.append(f'#include "{header_name}"')
        if once_guard:
            parts.append("#include <mutex>")
        parts.append("")
        parts.append(definition)
        return "\n".join(parts) + "\n"

    @staticmethod
    def encode(text: str, file_name: str) -> bytes:
        """Encode as ISO-8859-1, the encoding native compilers expect"""
        try:
            return text.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ModelError(f"{file_name} contains a character that cannot be written as ISO-8859-1: {e}")
