"""Scrollpad - a multi-line text editing widget and terminal editor."""

from .buffer import TextBuffer
from .clipboard import Clipboard, SystemClipboard, get_clipboard, set_clipboard
from .region import Position, decode, encode
from .session import EditSession
from .view import Cell, plan
from .widget import EditorView, Painter

__all__ = [
    'TextBuffer',
    'Clipboard',
    'SystemClipboard',
    'get_clipboard',
    'set_clipboard',
    'Position',
    'encode',
    'decode',
    'EditSession',
    'Cell',
    'plan',
    'EditorView',
    'Painter',
]
