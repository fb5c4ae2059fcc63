"""Declaration Parser — recursive descent over function-pointer declarations.

Grammar (one ``;``-terminated segment)::

    declaration := type_spec name_clause '(' param_list ')'
    type_spec   := ['const'] IDENT ['*']
    name_clause := '(' 'JNICALL' '*' IDENT ')'
    param_list  := param {',' param}
    param       := '...' | type_spec IDENT

Segments are parsed independently, so a malformed declaration never affects
its neighbours.
"""

from __future__ import annotations

import logging
import re

from . import constants
from .gen_types import Diagnostic, DiagnosticKind, ParseResult
from .ir import CType, Method, Param

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\.\.\.|\w+|\S")
_IDENT_RE = re.compile(r"\w+")


class DeclarationSyntaxError(Exception):
    """Raised when a single declaration does not match the grammar."""

    kind: DiagnosticKind = DiagnosticKind.MISSING_IDENTIFIER


class MissingIdentifierError(DeclarationSyntaxError):
    kind = DiagnosticKind.MISSING_IDENTIFIER


class MultiLevelPointerError(DeclarationSyntaxError):
    kind = DiagnosticKind.MULTI_LEVEL_POINTER


class ConstPointerError(DeclarationSyntaxError):
    kind = DiagnosticKind.CONST_POINTER


class MissingNamePatternError(DeclarationSyntaxError):
    kind = DiagnosticKind.MISSING_NAME_PATTERN


def safe_param_name(name: str) -> str:
    """Rename identifiers that collide with the host language's reserved words."""
    return constants.RESERVED_PARAM_RENAMES.get(name, name)


class DeclarationParser:
    """Parses one declaration segment into a :class:`Method`."""

    def __init__(self, segment: str):
        self._segment = segment
        self._tokens: list[str] = _TOKEN_RE.findall(segment)
        self._pos = 0

    # ── cursor ───────────────────────────────────────────────────

    def _peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _advance(self) -> str | None:
        tok = self._peek()
        if tok is not None:
            self._pos += 1
        return tok

    def _accept(self, expected: str) -> bool:
        if self._peek() == expected:
            self._pos += 1
            return True
        return False

    def _expect_identifier(self, what: str) -> str:
        tok = self._peek()
        if tok is None or not _IDENT_RE.fullmatch(tok):
            raise MissingIdentifierError(f"expected {what}, found {tok!r}")
        self._pos += 1
        return tok

    # ── productions ──────────────────────────────────────────────

    @property
    def trailing_tokens(self) -> list[str]:
        """Tokens left over after the closing parenthesis."""
        return self._tokens[self._pos :]

    def parse(self) -> Method:
        ret = self._parse_type_spec()
        name = self._parse_name_clause()
        params = self._parse_param_list()
        return Method(name=name, ret=ret, params=tuple(params))

    def _parse_type_spec(self) -> CType:
        is_const = self._accept(constants.CONST_KEYWORD)
        if is_const and self._peek() == "*":
            raise ConstPointerError("const pointer unsupported")
        type_name = self._expect_identifier("type name")
        is_ptr = self._accept("*")
        if is_ptr and self._peek() == "*":
            raise MultiLevelPointerError("double pointer unsupported")
        return CType(type_name=type_name, is_ptr=is_ptr, is_const=is_const)

    def _parse_name_clause(self) -> str:
        start = self._pos
        if (
            self._accept("(")
            and self._accept(constants.CALLCONV_KEYWORD)
            and self._accept("*")
        ):
            tok = self._advance()
            if tok is not None and _IDENT_RE.fullmatch(tok) and self._accept(")"):
                return tok
        self._pos = start
        raise MissingNamePatternError("function-pointer name pattern not found")

    def _parse_param_list(self) -> list[Param]:
        if not self._accept("("):
            raise MissingIdentifierError("expected '(' before parameter list")

        params: list[Param] = []
        while True:
            if self._accept(constants.ELLIPSIS):
                params.append(Param(ctype=CType(is_varargs=True)))
                if not self._accept(")"):
                    raise MissingIdentifierError("'...' must be the final parameter")
                return params

            ctype = self._parse_type_spec()
            name = safe_param_name(self._expect_identifier("parameter name"))
            params.append(Param(ctype=ctype, name=name))

            if self._accept(")"):
                return params
            if not self._accept(","):
                raise MissingIdentifierError(
                    f"expected ',' or ')' after parameter {name!r}, found {self._peek()!r}"
                )


def parse_declaration(segment: str) -> Method:
    """Parse one declaration; raises :class:`DeclarationSyntaxError`."""
    return DeclarationParser(segment).parse()


def split_declarations(text: str) -> list[str]:
    """Return the trimmed, non-empty ``;``-separated segments of *text*."""
    segments = (s.strip() for s in text.split(constants.DECLARATION_SEPARATOR))
    return [s for s in segments if s]


def parse_declarations(text: str) -> ParseResult:
    """Parse every declaration in *text*, dropping (and reporting) bad ones.

    Returns:
        A ParseResult whose methods preserve input order.
    """
    result = ParseResult()
    segments = split_declarations(text)
    for segment in segments:
        parser = DeclarationParser(segment)
        try:
            method = parser.parse()
        except DeclarationSyntaxError as err:
            subject = " ".join(segment.split())
            logger.warning("Dropped declaration %r: %s", subject, err)
            result.diagnostics.append(
                Diagnostic(kind=err.kind, subject=subject, message=str(err))
            )
            continue

        result.methods.append(method)
        leftover = parser.trailing_tokens
        if leftover:
            message = f"ignored trailing tokens {' '.join(leftover)!r}"
            logger.warning("Kept %s with %s", method.name, message)
            result.diagnostics.append(
                Diagnostic(kind=DiagnosticKind.TRAILING_TOKENS, subject=method.name, message=message)
            )
    logger.info(
        "Parsed %d of %d declarations", len(result.methods), len(segments)
    )
    return result
