"""Type rendering for both output targets.

One ``render_*`` function per concern, each taking the :class:`RenderTarget`
explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants
from .ir import CType


class RenderTarget(str, Enum):
    C = "c"
    GO = "go"


@dataclass(frozen=True)
class Primitive:
    """A JNI primitive with its host scalar type and bulk-array mapping."""

    label: str  # Boolean, Int, ...
    c_name: str  # jboolean, jint, ...
    host_scalar: str  # bool, int, ...
    host_element: str  # slice element type for bulk access

    @property
    def array_helper(self) -> str:
        return f"c{self.label}Array"

    @property
    def array_type(self) -> str:
        return f"{self.c_name}Array"


PRIMITIVES: tuple[Primitive, ...] = (
    Primitive("Boolean", "jboolean", "bool", "bool"),
    Primitive("Byte", "jbyte", "byte", "byte"),
    Primitive("Char", "jchar", "uint16", "uint16"),
    Primitive("Short", "jshort", "int16", "int16"),
    Primitive("Int", "jint", "int", "int32"),
    Primitive("Long", "jlong", "int64", "int64"),
    Primitive("Float", "jfloat", "float32", "float32"),
    Primitive("Double", "jdouble", "float64", "float64"),
)

PRIMITIVES_BY_C_NAME: dict[str, Primitive] = {p.c_name: p for p in PRIMITIVES}

# Non-pointer scalar aliases -> host scalar types.
HOST_SCALARS: dict[str, str] = {
    constants.VOID: "",
    "jsize": "int",
    **{p.c_name: p.host_scalar for p in PRIMITIVES},
}

# Pointer types with a dedicated host representation.
HOST_POINTERS: dict[str, str] = {
    constants.ENV_TYPE: "Env",
    constants.VM_TYPE: "VM",
    constants.VOID: "unsafe.Pointer",
    constants.CHAR: "string",
}

# Ordered: the host preamble declares one alias per entry in this order.
HANDLE_TYPE_NAMES: tuple[str, ...] = (
    "jobject",
    "jclass",
    "jthrowable",
    "jstring",
    "jarray",
    *(p.array_type for p in PRIMITIVES),
    "jobjectArray",
    "jweak",
    "jmethodID",
    "jfieldID",
)

HANDLE_TYPES: frozenset[str] = frozenset(HANDLE_TYPE_NAMES)


def host_handle_name(type_name: str) -> str:
    """``jobject`` -> ``Jobject``; the generator-defined alias for a handle type."""
    return constants.HOST_HANDLE_PREFIX + type_name[len(constants.NATIVE_HANDLE_PREFIX) :]


def is_handle(ctype: CType) -> bool:
    return not ctype.is_ptr and ctype.type_name in HANDLE_TYPES


def is_string(ctype: CType) -> bool:
    return ctype.is_ptr and ctype.type_name == constants.CHAR


def is_dispatch_handle(ctype: CType) -> bool:
    return ctype.is_ptr and ctype.type_name in (constants.ENV_TYPE, constants.VM_TYPE)


def render_type(ctype: CType, target: RenderTarget) -> str:
    """Render the type of a declaration slot.

    The C rendering drops ``const`` so wrappers accept and return non-const
    pointers. The Go rendering returns ``""`` for ``void``.
    """
    if target == RenderTarget.C:
        return f"{ctype.type_name} *" if ctype.is_ptr else ctype.type_name

    if ctype.is_ptr and ctype.type_name in HOST_POINTERS:
        return HOST_POINTERS[ctype.type_name]
    if not ctype.is_ptr:
        if ctype.type_name in HOST_SCALARS:
            return HOST_SCALARS[ctype.type_name]
        if ctype.type_name in HANDLE_TYPES:
            return host_handle_name(ctype.type_name)

    foreign = f"C.{ctype.type_name}"
    return f"*{foreign}" if ctype.is_ptr else foreign


def render_argument(ctype: CType, expr: str, target: RenderTarget) -> str:
    """Marshal a host-side value *expr* into the native argument type."""
    if target == RenderTarget.C:
        return expr

    if ctype.is_ptr:
        if is_dispatch_handle(ctype):
            return f"(*C.{ctype.type_name})(unsafe.Pointer({expr}))"
        if is_string(ctype):
            return f"{constants.STRING_PARAM_PREFIX}{expr}"
        return expr

    if ctype.type_name == constants.JBOOLEAN:
        return f"cbool({expr})"
    if ctype.type_name in HOST_SCALARS:
        return f"C.{ctype.type_name}({expr})"
    if ctype.type_name in HANDLE_TYPES:
        return f"C.{ctype.type_name}(unsafe.Pointer({expr}))"
    return expr


def render_result(ctype: CType, expr: str, target: RenderTarget) -> str:
    """Convert the native return value *expr* into the target's return type."""
    if target == RenderTarget.C:
        if ctype.is_const:
            return f"({render_type(ctype, target)}) {expr}"
        return expr

    if ctype.is_ptr:
        if is_string(ctype):
            return f"C.GoString({expr})"
        if is_dispatch_handle(ctype):
            return f"{HOST_POINTERS[ctype.type_name]}(uintptr(unsafe.Pointer({expr})))"
        return expr

    if ctype.type_name == constants.JBOOLEAN:
        return f"{expr} != {constants.C_FALSE}"
    if ctype.type_name in HOST_SCALARS and not ctype.is_void:
        return f"{HOST_SCALARS[ctype.type_name]}({expr})"
    if ctype.type_name in HANDLE_TYPES:
        return f"{host_handle_name(ctype.type_name)}(uintptr(unsafe.Pointer({expr})))"
    return expr


def bulk_primitive(ctype: CType) -> Primitive | None:
    """The primitive behind a buffer pointer such as ``jint *buf``, if any."""
    if not ctype.is_ptr:
        return None
    return PRIMITIVES_BY_C_NAME.get(ctype.type_name)
