"""Composable API functions for the binding generator pipeline.

Each function corresponds to a CLI workflow (--ir-only, --stats, the default
combined document) but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging

from . import constants
from .emitter import emit
from .gen_types import GenerationResult, GenerationStats, GeneratorConfig
from .header import load_declarations
from .ir import Method
from .parser import parse_declarations
from .policy import DEFAULT_POLICY, PolicyTables
from .stats import count_classifications

logger = logging.getLogger(__name__)


def parse_source(text: str) -> list[Method]:
    """Parse declaration text into methods, dropping malformed declarations.

    Args:
        text: ``;``-separated function-pointer declarations.

    Returns:
        Methods in declaration order.
    """
    return parse_declarations(text).methods


def dump_ir(text: str) -> str:
    """Parse declarations and return one method per line."""
    return "\n".join(f"  {method}" for method in parse_source(text))


def generate(text: str, config: GeneratorConfig = GeneratorConfig()) -> GenerationResult:
    """Parse *text* and emit both artifacts.

    Args:
        text: Declaration text.
        config: Package name and suppression policy.

    Returns:
        A GenerationResult carrying parse and generation diagnostics.
    """
    logger.info("Generating bindings (package=%s)", config.package)
    parsed = parse_declarations(text)
    return emit(parsed.methods, config, parsed.diagnostics)


def generate_code(
    text: str | None = None,
    package: str = constants.DEFAULT_PACKAGE,
    policy: PolicyTables = DEFAULT_POLICY,
) -> str:
    """Return the combined cgo document.

    Args:
        text: Declaration text; the bundled JNI function table when None.
        package: Go package name of the generated file.
        policy: Suppression policy.

    Returns:
        The generated Go source with the C stubs in its cgo preamble.
    """
    if text is None:
        text = load_declarations()
    return generate(text, GeneratorConfig(package=package, policy=policy)).document()


def method_stats(text: str, policy: PolicyTables = DEFAULT_POLICY) -> GenerationStats:
    """Parse *text* and count methods per generation category."""
    parsed = parse_declarations(text)
    return GenerationStats(
        counts=count_classifications(parsed.methods, policy),
        diagnostics=len(parsed.diagnostics),
    )
