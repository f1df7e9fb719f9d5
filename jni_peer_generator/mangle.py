"""
Identifier mangling for native symbols

Every context uses an injective escaping, so two different identifiers never
produce the same symbol within one context:

    letters and digits   unchanged
    any other character  _0xxxx (UTF-16 code unit in hex)

CLASS     '.' -> '_' ('_2' before 0-3 or at the end), '_' -> '_1'
MEMBER    '_' kept ('_1' before 0-3), '.' -> '_2'
SIGNATURE '/' -> '_', '_' -> '_1', ';' -> '_2', '[' -> '_3'

CLASS and MEMBER results that are C++ keywords get a '_3' suffix.
"""

from enum import Enum

from .constants import CPP_KEYWORDS
from .errors import InternalBugError

# Digits that follow '_' in an escape sequence
_ESCAPE_DIGITS = "0123"


class MangleContext(Enum):
    CLASS = "class"
    MEMBER = "member"
    SIGNATURE = "signature"


def _isalnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def mangle_char(ch: str) -> str:
    """Escape a single character as one or two _0xxxx sequences"""
    code = ord(ch)
    if code > 0xFFFF:
        # Split into a UTF-16 surrogate pair
        code -= 0x10000
        return mangle_char(chr(0xD800 + (code >> 10))) + mangle_char(chr(0xDC00 + (code & 0x3FF)))
    return f"_0{code:04x}"


def _next_is_escape_digit(name: str, i: int) -> bool:
    return i + 1 < len(name) and name[i + 1] in _ESCAPE_DIGITS


def mangle(name: str, context: MangleContext) -> str:
    """Mangle an identifier into a valid native symbol for the given context"""
    if not name:
        raise InternalBugError("Cannot mangle an empty identifier")

    result = []
    for i, ch in enumerate(name):
        if _isalnum(ch):
            result.append(ch)
        elif context is MangleContext.CLASS:
            if ch == ".":
                at_end = i + 1 == len(name)
                result.append("_2" if at_end or _next_is_escape_digit(name, i) else "_")
            elif ch == "_":
                result.append("_1")
            else:
                result.append(mangle_char(ch))
        elif context is MangleContext.MEMBER:
            if ch == "_":
                result.append("_1" if _next_is_escape_digit(name, i) else "_")
            elif ch == ".":
                result.append("_2")
            else:
                result.append(mangle_char(ch))
        elif context is MangleContext.SIGNATURE:
            if ch == "/":
                result.append("_")
            elif ch == "_":
                result.append("_1")
            elif ch == ";":
                result.append("_2")
            elif ch == "[":
                result.append("_3")
            else:
                result.append(mangle_char(ch))
        else:
            raise InternalBugError(f"Unknown mangle context: {context!r}")

    mangled = "".join(result)
    if context is not MangleContext.SIGNATURE and mangled in CPP_KEYWORDS:
        mangled += "_3"
    return mangled


def escape_local(name: str, reserved) -> str:
    """Rename a mangled parameter that would clash with a generated local or base member

    Names made of a reserved word plus trailing underscores are shifted too,
    keeping the renaming one-to-one.
    """
    if name.rstrip("_") in reserved:
        return name + "_"
    return name
