"""Command-line entry point for the JNI binding generator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import constants
from .api import dump_ir, generate, method_stats
from .gen_types import GeneratorConfig
from .header import load_declarations
from .syntax_check import check_artifacts

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jnigen", description="Generate cgo bindings for the JNI function table"
    )
    parser.add_argument("--package", "-p", default=constants.DEFAULT_PACKAGE,
                        help="Go package name of the generated file (default: jni)")
    parser.add_argument("--decls", type=Path, default=None,
                        help="Declaration list to read instead of the bundled JNI table")
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Write the generated text to this file instead of stdout")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--ir-only", action="store_true",
                        help="Only print the parsed declarations")
    output.add_argument("--c-only", action="store_true",
                        help="Only print the C wrapper artifact")
    output.add_argument("--host-only", action="store_true",
                        help="Only print the Go binding artifact")
    output.add_argument("--stats", action="store_true",
                        help="Print per-category method counts")
    parser.add_argument("--check", action="store_true",
                        help="Parse the generated code with tree-sitter and report errors")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log suppressed methods and pipeline details")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    text = load_declarations(args.decls)

    status = 0
    if args.ir_only:
        rendered = dump_ir(text) + "\n"
    elif args.stats:
        rendered = method_stats(text).report() + "\n"
    else:
        result = generate(text, GeneratorConfig(package=args.package))
        if args.c_only:
            rendered = result.c_source
        elif args.host_only:
            rendered = result.host_source
        else:
            rendered = result.document()
        if args.check:
            issues = check_artifacts(result)
            for issue in issues:
                logger.error("%s", issue)
            status = 1 if issues else 0

    if args.output is None:
        sys.stdout.write(rendered)
    else:
        args.output.write_text(rendered, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    return status


if __name__ == "__main__":
    sys.exit(main())
