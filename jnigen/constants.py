"""Named constants for the declaration grammar and the generated identifiers."""

from __future__ import annotations

CALLCONV_KEYWORD = "JNICALL"
CONST_KEYWORD = "const"
ELLIPSIS = "..."
DECLARATION_SEPARATOR = ";"

VOID = "void"
CHAR = "char"
VA_LIST = "va_list"
JVALUE = "jvalue"
JBOOLEAN = "jboolean"

ENV_TYPE = "JNIEnv"
VM_TYPE = "JavaVM"

IS_COPY_PARAM = "isCopy"
C_NULL = "NULL"
C_FALSE = "C.JNI_FALSE"

DEFAULT_PACKAGE = "jni"

ARRAY_REGION_PREFIXES: tuple[str, ...] = ("Get", "Set")
ARRAY_REGION_SUFFIX = "ArrayRegion"
VALUE_ARRAY_CALL_PREFIXES: tuple[str, ...] = ("Call", "New")
VALUE_ARRAY_CALL_SUFFIX = "A"

HOST_HANDLE_PREFIX = "J"
NATIVE_HANDLE_PREFIX = "j"

STRING_PARAM_PREFIX = "cstr_"
VARIADIC_HOST_TYPE = "...Jvalue"
VALUE_ARRAY_HELPER = "cvals"

# Parameter names that cannot be used verbatim in the generated Go code.
RESERVED_PARAM_RENAMES: dict[str, str] = {
    "string": "str",
    "break": "brk",
    "case": "cse",
    "chan": "ch",
    "const": "cnst",
    "continue": "cont",
    "default": "dflt",
    "defer": "dfr",
    "else": "els",
    "fallthrough": "fallthru",
    "for": "fr",
    "func": "fn",
    "go": "g",
    "goto": "gto",
    "if": "cond",
    "import": "imp",
    "interface": "iface",
    "map": "m",
    "package": "pkg",
    "range": "rng",
    "return": "ret",
    "select": "sel",
    "struct": "strct",
    "switch": "sw",
    "type": "typ",
    "var": "v",
}
