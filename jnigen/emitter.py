"""Generator / Emitter — filters parsed methods and assembles both artifacts."""

from __future__ import annotations

import logging
from typing import Sequence

from .codegen import CodeGen
from .gen_types import Diagnostic, DiagnosticKind, GenerationResult, GeneratorConfig
from .ir import Method
from .preamble import c_preamble, host_epilogue, host_preamble
from .signature import render_c_stub, render_go_func

logger = logging.getLogger(__name__)

C_INDENT = "    "
GO_INDENT = "\t"


def _unsupported_diagnostic(method: Method) -> Diagnostic:
    reason = "variadic parameter list" if method.is_varargs else "va_list parameter"
    return Diagnostic(
        kind=DiagnosticKind.UNSUPPORTED_VARIADIC,
        subject=method.name,
        message=f"cannot generate bindings for {reason}",
    )


def emit(
    methods: Sequence[Method],
    config: GeneratorConfig = GeneratorConfig(),
    diagnostics: Sequence[Diagnostic] = (),
) -> GenerationResult:
    """Render every retained method into the C and host artifacts, in order.

    Args:
        methods: Parsed methods in declaration order.
        config: Package name and suppression policy.
        diagnostics: Diagnostics from earlier stages, carried into the result.

    Returns:
        A GenerationResult holding both artifacts and all diagnostics.
    """
    policy = config.policy
    result = GenerationResult(package=config.package, c_source="", host_source="")
    result.diagnostics.extend(diagnostics)

    c_gen = CodeGen(C_INDENT)
    c_gen.raw(c_preamble(policy))
    host_gen = CodeGen(GO_INDENT)
    host_preamble(host_gen, policy)

    for method in methods:
        if method.is_unsupported:
            diag = _unsupported_diagnostic(method)
            logger.warning("Skipping %s: %s", method.name, diag.message)
            result.diagnostics.append(diag)
            continue

        if not policy.emits_c(method.name):
            logger.debug("Suppressed %s from both artifacts", method.name)
            continue
        render_c_stub(method, c_gen)
        c_gen.line()
        result.c_methods.append(method.name)

        if not policy.emits_host(method.name):
            logger.debug("Suppressed %s from the host artifact", method.name)
            continue
        render_go_func(method, host_gen)
        host_gen.line()
        result.host_methods.append(method.name)

    host_epilogue(host_gen)

    result.c_source = c_gen.output()
    result.host_source = host_gen.output()
    logger.info(
        "Emitted %d C stubs and %d host functions (package %s)",
        len(result.c_methods),
        len(result.host_methods),
        config.package,
    )
    return result
