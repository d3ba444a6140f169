"""Scrollpad CLI entry point.

Allows running via `python -m scrollpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from .version import get_version_string


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scrollpad", description="Terminal text editor with Emacs key bindings.")
    parser.add_argument("--version", "-V", action="store_true", help="print version and exit")
    parser.add_argument("--log", metavar="FILE", help="write a debug log to FILE")
    parser.add_argument("file", nargs="?", help="file to edit (created on first save)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return 0

    from .logging_config import setup_logging
    setup_logging(args.log, level="DEBUG" if args.log else "WARNING")

    # Lazy import to avoid importing UI deps for --version
    from .clipboard import SystemClipboard, set_clipboard
    from .editor import Editor
    set_clipboard(SystemClipboard())
    editor = Editor()
    if args.file:
        editor.load_file(args.file)
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
