"""Bundled JNI function-table declarations."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DECLARATIONS_PATH = Path(__file__).parent / "data" / "jni_functions.txt"


def load_declarations(path: Path | None = None) -> str:
    """Read a declaration list; defaults to the bundled JNIEnv function table."""
    target = path or DECLARATIONS_PATH
    logger.info("Loading declarations: %s", target)
    return target.read_text(encoding="utf-8")
