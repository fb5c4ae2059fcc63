"""JNI binding generator package."""

from .api import (  # noqa: F401
    parse_source,
    dump_ir,
    generate,
    generate_code,
    method_stats,
)
