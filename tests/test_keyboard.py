"""Test keyboard input handling."""

import pytest
from unittest.mock import Mock

from scrollpad.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token, key_type, value", [
    ('a', KeyType.REGULAR, 'a'),
    ('中', KeyType.REGULAR, '中'),
    ('<SPACE>', KeyType.REGULAR, ' '),
    ('<TAB>', KeyType.REGULAR, '\t'),
    ('\t', KeyType.REGULAR, '\t'),
    ('<LEFT>', KeyType.SPECIAL, 'left'),
    ('<PAGEDOWN>', KeyType.SPECIAL, 'page_down'),
    ('<PAGEUP>', KeyType.SPECIAL, 'page_up'),
    ('<BACKSPACE>', KeyType.SPECIAL, 'backspace'),
    ('<DELETE>', KeyType.SPECIAL, 'delete'),
    ('<Ctrl-a>', KeyType.CTRL, 'a'),
    ('<Ctrl-SPACE>', KeyType.CTRL, 'space'),
    ('<Ctrl-j>', KeyType.SPECIAL, 'enter'),
    ('<Esc+f>', KeyType.ALT, 'f'),
    ('<Esc+LEFT>', KeyType.ALT, 'left'),
    ('<Meta-w>', KeyType.ALT, 'w'),
    ('\x00', KeyType.CTRL, 'space'),
    ('\x0b', KeyType.CTRL, 'k'),
    ('\r', KeyType.SPECIAL, 'enter'),
    ('\n', KeyType.SPECIAL, 'enter'),
    ('\x7f', KeyType.SPECIAL, 'backspace'),
    ('\x1b', KeyType.SPECIAL, 'escape'),
    ('\x1bV', KeyType.ALT, 'v'),
])
def test_parse_key(handler, token, key_type, value):
    event = handler.parse_key(token)
    assert event.key_type == key_type
    assert event.value == value
    assert event.raw == token


def test_modifier_flags(handler):
    assert handler.parse_key('<Ctrl-k>').is_ctrl
    assert handler.parse_key('<Esc+w>').is_alt
    assert not handler.parse_key('x').is_alt


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal()
    terminal.add_key('<Ctrl-y>')
    handler = KeyboardHandler(terminal)
    event = handler.get_key_event(timeout=0)
    assert event == KeyEvent(KeyType.CTRL, 'y', '<Ctrl-y>', is_ctrl=True)
    assert handler.get_key_event(timeout=0) is None


def test_key_objects_are_stringified():
    key = Mock()
    key.__str__ = Mock(return_value='<RIGHT>')
    event = KeyboardHandler(MockTerminal()).parse_key(key)
    assert (event.key_type, event.value) == (KeyType.SPECIAL, 'right')
