"""Line buffer with indentation support for emitting generated source."""

from __future__ import annotations


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self, indent_str: str = "    "):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str = indent_str

    def line(self, text: str = ""):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append("")

    def raw(self, text: str):
        """Add pre-formatted text verbatim, one entry per line."""
        self._lines.extend(text.split("\n"))

    def indent(self):
        self._indent += 1

    def dedent(self):
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = "}"):
        """Context manager for ``header { ... }`` blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Generated code, newline-terminated."""
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"


class _BlockContext:
    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)
