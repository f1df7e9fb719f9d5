"""
Formatting of compile-time constants as native literals
"""

import math
import struct
import sys
from decimal import Decimal

from .errors import InternalBugError, ModelError
from .mangle import MangleContext, mangle
from .models import Field, PrimitiveKind, PrimitiveType

# Visual C++ spells 64-bit literals with i64; sampled once for the whole run
IS_WINDOWS = sys.platform == "win32"

_INTEGER_RANGES = {
    PrimitiveKind.BYTE: (-(1 << 7), (1 << 7) - 1),
    PrimitiveKind.CHAR: (0, 0xFFFF),
    PrimitiveKind.SHORT: (-(1 << 15), (1 << 15) - 1),
    PrimitiveKind.INT: (-(1 << 31), (1 << 31) - 1),
    PrimitiveKind.LONG: (-(1 << 63), (1 << 63) - 1),
}


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        raise ModelError(f"Float constant out of range: {value!r}")


def _shortest_float32_digits(value: float) -> str:
    """Fewest significant digits that read back as the same 32-bit float"""
    for precision in range(1, 10):
        text = f"{value:.{precision - 1}e}"
        if _to_float32(float(text)) == value:
            return text
    return repr(value)


def _runtime_decimal(text: str, negative_zero: bool = False) -> str:
    """Render a shortest round-trip number the way the managed runtime prints it

    Plain notation with at least one fractional digit for 1e-3 <= |v| < 1e7,
    otherwise d.dddE<exp>.
    """
    value = Decimal(text)
    if value.is_zero():
        return "-0.0" if negative_zero else "0.0"

    sign, digits, exponent = value.as_tuple()
    ds = "".join(map(str, digits)).rstrip("0") or "0"
    # exponent of the leading digit in scientific notation
    sci = len(digits) + exponent - 1
    prefix = "-" if sign else ""

    if -3 <= sci < 7:
        point = sci + 1
        if point <= 0:
            body = "0." + "0" * (-point) + ds
        elif point >= len(ds):
            body = ds + "0" * (point - len(ds)) + ".0"
        else:
            body = ds[:point] + "." + ds[point:]
        return prefix + body

    return f"{prefix}{ds[0]}.{ds[1:] or '0'}E{sci}"


def _check_integer(kind: PrimitiveKind, value) -> int:
    if kind is PrimitiveKind.CHAR and isinstance(value, str):
        if len(value) != 1:
            raise ModelError(f"char constant must be a single character, got {value!r}")
        value = ord(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ModelError(f"{kind.value} constant must be an integer, got {value!r}")
    low, high = _INTEGER_RANGES[kind]
    if not low <= value <= high:
        raise ModelError(f"{kind.value} constant out of range: {value}")
    return value


def format_constant(kind: PrimitiveKind, value, windows: bool = IS_WINDOWS) -> str:
    """Format a constant of the given primitive kind as a native literal"""
    if kind is PrimitiveKind.BOOLEAN:
        if not isinstance(value, bool):
            raise ModelError(f"boolean constant must be true or false, got {value!r}")
        return "1L" if value else "0L"

    if kind in (PrimitiveKind.BYTE, PrimitiveKind.CHAR, PrimitiveKind.SHORT, PrimitiveKind.INT):
        return f"{_check_integer(kind, value)}L"

    if kind is PrimitiveKind.LONG:
        suffix = "i64" if windows else "LL"
        return f"{_check_integer(kind, value)}{suffix}"

    if kind in (PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ModelError(f"{kind.value} constant must be a number, got {value!r}")
        value = float(value)
        is_float = kind is PrimitiveKind.FLOAT
        # bug for bug: infinities are written the way the runtime displays them
        if math.isinf(value):
            return ("-" if value < 0 else "") + ("Inff" if is_float else "InfD")
        if math.isnan(value):
            return "NaNf" if is_float else "NaN"
        negative_zero = math.copysign(1.0, value) < 0
        if is_float:
            narrowed = _to_float32(value)
            if math.isinf(narrowed):
                raise ModelError(f"Float constant out of range: {value!r}")
            return _runtime_decimal(_shortest_float32_digits(narrowed), negative_zero) + "f"
        return _runtime_decimal(repr(value), negative_zero)

    raise InternalBugError(f"Unknown primitive kind: {kind!r}")


def constant_symbol(class_name: str, field_name: str) -> str:
    """Preprocessor symbol for a constant: <mangled class>_<mangled field>"""
    return mangle(class_name, MangleContext.CLASS) + "_" + mangle(field_name, MangleContext.MEMBER)


def define_for_static(class_name: str, field: Field, windows: bool = IS_WINDOWS) -> str | None:
    """Build the #undef/#define pair for a static final field

    Returns None when the field has no constant value or its type has no
    literal form (string constants, for example).
    """
    if not (field.is_static and field.is_final):
        raise InternalBugError(f"Tried to define non static final field {field.name}")

    if field.constant_value is None or not isinstance(field.type, PrimitiveType):
        return None

    symbol = constant_symbol(class_name, field.name)
    literal = format_constant(field.type.kind, field.constant_value, windows)
    return f"#undef {symbol}\n#define {symbol} {literal}"
