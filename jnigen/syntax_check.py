"""Syntax validation of generated artifacts via tree-sitter."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel

from .gen_types import GenerationResult

logger = logging.getLogger(__name__)

ERROR_NODE = "ERROR"


class SyntaxIssue(BaseModel):
    """An ``ERROR`` or missing node in a parsed artifact (1-based line)."""

    language: str
    line: int
    column: int
    kind: str
    text: str = ""

    def __str__(self) -> str:
        return f"{self.language}:{self.line}:{self.column}: {self.kind} {self.text!r}"


class ParserFactory(ABC):
    """Abstract factory for obtaining a language parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory that delegates to tree-sitter-language-pack."""

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


def check_syntax(
    source: str, language: str, parser_factory: ParserFactory | None = None
) -> list[SyntaxIssue]:
    """Parse *source* and collect every error or missing node.

    Args:
        source: Generated source text.
        language: tree-sitter language name ("c" or "go").
        parser_factory: Parser source; tree-sitter-language-pack by default.

    Returns:
        Issues in document order; empty when the text parses cleanly.
    """
    factory = parser_factory or TreeSitterParserFactory()
    source_bytes = source.encode("utf-8")
    tree = factory.get_parser(language).parse(source_bytes)

    issues: list[SyntaxIssue] = []
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == ERROR_NODE or node.is_missing:
            issues.append(
                SyntaxIssue(
                    language=language,
                    line=node.start_point[0] + 1,
                    column=node.start_point[1],
                    kind="missing" if node.is_missing else "error",
                    text=source_bytes[node.start_byte : node.end_byte].decode("utf-8")[:60],
                )
            )
            continue
        if node.has_error:
            stack.extend(reversed(node.children))

    issues.sort(key=lambda i: (i.line, i.column))
    logger.info("Syntax check (%s): %d issue(s)", language, len(issues))
    return issues


def check_artifacts(
    result: GenerationResult, parser_factory: ParserFactory | None = None
) -> list[SyntaxIssue]:
    """Check the C artifact on its own and the combined Go document."""
    return check_syntax(result.c_source, "c", parser_factory) + check_syntax(
        result.document(), "go", parser_factory
    )
