"""Method-level rendering: wrapper stubs and host bindings."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from . import constants
from .codegen import CodeGen
from .ir import Method, Param
from .types import (
    RenderTarget,
    bulk_primitive,
    is_string,
    render_argument,
    render_result,
    render_type,
)


class UnsupportedMethodError(ValueError):
    """Raised when asked to render a method flagged unsupported for generation."""


class HostStrategy(Enum):
    """How a method's parameters map onto the host signature."""

    DIRECT = "direct"
    ARRAY_REGION = "array_region"
    VALUE_ARRAY_CALL = "value_array_call"


def host_strategy(method: Method) -> HostStrategy:
    if method.is_array_region and len(method.params) >= 3:
        if bulk_primitive(method.params[-1].ctype) is not None:
            return HostStrategy.ARRAY_REGION
    if method.is_value_array_call and len(method.params) >= 2:
        return HostStrategy.VALUE_ARRAY_CALL
    return HostStrategy.DIRECT


def render_param(param: Param, target: RenderTarget) -> str:
    """Render one formal parameter; ``""`` when the parameter is elided."""
    if param.is_copy_flag:
        return ""
    type_desc = render_type(param.ctype, target)
    if target == RenderTarget.C:
        return f"{type_desc} {param.name}"
    return f"{param.name} {type_desc}"


def render_call_arg(param: Param, target: RenderTarget) -> str:
    """Render one actual argument of the forwarded call; ``""`` when elided."""
    if param.is_copy_flag:
        return constants.C_NULL if target == RenderTarget.C else ""
    return render_argument(param.ctype, param.name, target)


def _join(parts: Iterable[str]) -> str:
    return ", ".join(p for p in parts if p)


def _ensure_supported(method: Method) -> None:
    if method.is_unsupported:
        raise UnsupportedMethodError(f"{method.name}: variadic parameters are not supported")
    if not method.params:
        raise UnsupportedMethodError(f"{method.name}: missing dispatch handle parameter")


# ── normalized C ─────────────────────────────────────────────────


def c_signature(method: Method) -> str:
    _ensure_supported(method)
    params = _join(render_param(p, RenderTarget.C) for p in method.params)
    return f"static inline {render_type(method.ret, RenderTarget.C)} {method.name}({params})"


def render_c_stub(method: Method, gen: CodeGen) -> None:
    """Emit a stub that forwards through the dispatch handle's function table."""
    header = c_signature(method)
    args = _join(render_call_arg(p, RenderTarget.C) for p in method.params)
    call = f"(*{method.handle.name})->{method.name}({args})"
    expr = render_result(method.ret, call, RenderTarget.C)
    with gen.block(f"{header} {{"):
        gen.line(f"return {expr};" if method.has_return_value else f"{expr};")


# ── host binding ─────────────────────────────────────────────────


def host_params(method: Method) -> list[str]:
    """Host formal parameters, excluding the receiver."""
    _ensure_supported(method)
    strategy = host_strategy(method)
    rest = method.params[1:]
    if strategy == HostStrategy.ARRAY_REGION:
        buf = method.params[-1]
        prim = bulk_primitive(buf.ctype)
        tail = [f"{buf.name} []{prim.host_element}"]
        rest = rest[:-2]
    elif strategy == HostStrategy.VALUE_ARRAY_CALL:
        tail = [f"{method.params[-1].name} {constants.VARIADIC_HOST_TYPE}"]
        rest = rest[:-1]
    else:
        tail = []
    return [d for d in (render_param(p, RenderTarget.GO) for p in rest) if d] + tail


def host_call_args(method: Method) -> list[str]:
    """Arguments passed to the C stub, including the converted receiver."""
    _ensure_supported(method)
    strategy = host_strategy(method)
    fixed = method.params
    if strategy == HostStrategy.ARRAY_REGION:
        buf = method.params[-1]
        prim = bulk_primitive(buf.ctype)
        tail = [f"C.jsize(len({buf.name}))", f"{prim.array_helper}({buf.name})"]
        fixed = fixed[:-2]
    elif strategy == HostStrategy.VALUE_ARRAY_CALL:
        tail = [f"{constants.VALUE_ARRAY_HELPER}({method.params[-1].name})"]
        fixed = fixed[:-1]
    else:
        tail = []
    return [a for a in (render_call_arg(p, RenderTarget.GO) for p in fixed) if a] + tail


def go_signature(method: Method) -> str:
    receiver = method.handle
    ret = render_type(method.ret, RenderTarget.GO)
    ret_suffix = f" {ret}" if method.has_return_value else ""
    return (
        f"func ({receiver.name} {render_type(receiver.ctype, RenderTarget.GO)}) "
        f"{method.name}({', '.join(host_params(method))}){ret_suffix}"
    )


def render_go_func(method: Method, gen: CodeGen) -> None:
    """Emit a host method on the dispatch handle type that calls the C stub."""
    header = go_signature(method)
    with gen.block(f"{header} {{"):
        for param in method.params:
            if is_string(param.ctype):
                cstr = f"{constants.STRING_PARAM_PREFIX}{param.name}"
                gen.line(f"{cstr} := C.CString({param.name})")
                gen.line(f"defer C.free(unsafe.Pointer({cstr}))")
        call = f"C.{method.name}({', '.join(host_call_args(method))})"
        expr = render_result(method.ret, call, RenderTarget.GO)
        gen.line(f"return {expr}" if method.has_return_value else expr)
