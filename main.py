#!/usr/bin/env python3
"""Scrollpad - a terminal text editor.

Usage:
    python main.py [--log FILE] [filename]

Controls:
    Arrow keys, Ctrl-B/F/N/P: Move the cursor (keeps the column on up/down)
    Ctrl-Space: Set mark; Alt-W copy region; Ctrl-W kill region
    Ctrl-K: Kill to end of line; Ctrl-Y: Yank
    Ctrl-S: Save file
    Ctrl-Q: Quit (prompts to save if modified)
"""

import sys

from scrollpad.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
