"""Generator pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict

from . import constants
from .ir import Method
from .policy import DEFAULT_POLICY, PolicyTables


class DiagnosticKind(str, Enum):
    MISSING_IDENTIFIER = "missing_identifier"
    MULTI_LEVEL_POINTER = "multi_level_pointer"
    CONST_POINTER = "const_pointer"
    MISSING_NAME_PATTERN = "missing_name_pattern"
    UNSUPPORTED_VARIADIC = "unsupported_variadic"
    TRAILING_TOKENS = "trailing_tokens"


class Diagnostic(BaseModel):
    """One anomaly observed while parsing or generating.

    ``subject`` is the method name when known, otherwise the raw declaration
    text.
    """

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    subject: str
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.subject}: {self.message}"


@dataclass(frozen=True)
class GeneratorConfig:
    """Groups the inputs that shape generated output besides the declarations."""

    package: str = constants.DEFAULT_PACKAGE
    policy: PolicyTables = DEFAULT_POLICY


@dataclass
class ParseResult:
    methods: list[Method] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Both generated artifacts plus everything reported along the way."""

    package: str
    c_source: str
    host_source: str
    c_methods: list[str] = field(default_factory=list)
    host_methods: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def document(self) -> str:
        """Combine the artifacts into one cgo source file.

        The C artifact becomes the ``//``-prefixed preamble directly above
        ``import "C"``.
        """
        lines = [f"package {self.package}", "", "//"]
        for line in self.c_source.rstrip("\n").split("\n"):
            lines.append(f"// {line}" if line else "//")
        lines.append("//")
        return "\n".join(lines) + "\n" + self.host_source


@dataclass
class GenerationStats:
    """Counts per classification for one run."""

    counts: dict[str, int] = field(default_factory=dict)
    diagnostics: int = 0

    def report(self) -> str:
        lines = [
            "═══ Generation Statistics ═══",
            f"  {'Category':<20} {'Count':>8}",
            f"  {'─' * 20} {'─' * 8}",
        ]
        for name, count in self.counts.items():
            lines.append(f"  {name:<20} {count:>8}")
        lines.append(f"  {'─' * 20} {'─' * 8}")
        lines.append(f"  {'diagnostics':<20} {self.diagnostics:>8}")
        return "\n".join(lines)
