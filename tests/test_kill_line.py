"""Test kill-line (Ctrl-K) and yank (Ctrl-Y)."""

from scrollpad.buffer import TextBuffer
from scrollpad.clipboard import Clipboard
from scrollpad.region import Position
from scrollpad.session import EditSession


def create_session(lines):
    """Create a session with its own clipboard."""
    return EditSession(TextBuffer(lines), clipboard=Clipboard())


def test_kill_line_basic():
    """Kill from the cursor to end of line."""
    session = create_session(["hello world"])
    session.move_to(0, 5)
    session.kill_to_line_end()
    assert session.buffer.lines == ["hello"]
    assert session.cursor == Position(0, 5)
    assert session.clipboard.contents == " world"


def test_kill_empty_line_removes_it():
    session = create_session(["", "second"])
    session.kill_to_line_end()
    assert session.buffer.lines == ["second"]
    assert session.clipboard.contents == "\n"


def test_consecutive_kills_accumulate():
    """Killing a line's text, then the empty line, then the next line collects all of it."""
    session = create_session(["first", "second", "third"])
    session.kill_to_line_end()
    assert session.clipboard.contents == "first"
    session.kill_to_line_end()
    assert session.clipboard.contents == "first\n"
    session.kill_to_line_end()
    assert session.clipboard.contents == "first\nsecond"
    assert session.buffer.lines == ["", "third"]


def test_intervening_move_resets_accumulation():
    session = create_session(["abc", "def"])
    session.kill_to_line_end()
    session.move_down()
    session.kill_to_line_end()
    assert session.clipboard.contents == "def"
    assert session.last_was_kill


def test_kill_at_end_of_nonempty_line_kills_nothing():
    session = create_session(["abc", "def"])
    session.move_to(0, 3)
    session.kill_to_line_end()
    assert session.buffer.lines == ["abc", "def"]
    assert session.clipboard.contents == ""


def test_kill_last_empty_line_moves_cursor_up():
    session = create_session(["abc", ""])
    session.move_to(1, 0)
    session.kill_to_line_end()
    assert session.buffer.lines == ["abc"]
    assert session.cursor.row == 0


def test_kill_only_empty_line_keeps_one_line():
    session = create_session([""])
    session.kill_to_line_end()
    assert session.buffer.lines == [""]
    assert session.clipboard.contents == "\n"


def test_yank_restores_killed_text():
    session = create_session(["one", "two"])
    session.kill_to_line_end()
    session.kill_to_line_end()
    session.kill_to_line_end()
    assert session.buffer.lines == [""]
    session.yank()
    assert session.buffer.lines == ["one", "two"]
    assert session.cursor == Position(1, 3)


def test_yank_multiline_in_middle_of_line():
    session = create_session(["[]"])
    session.clipboard.set("a\nb")
    session.move_to(0, 1)
    session.yank()
    assert session.buffer.lines == ["[a", "b]"]
    assert session.cursor == Position(1, 1)


def test_kill_ring_is_shared_between_sessions():
    clipboard = Clipboard()
    source = EditSession(TextBuffer(["shared"]), clipboard=clipboard)
    target = EditSession(TextBuffer([""]), clipboard=clipboard)
    source.kill_to_line_end()
    target.yank()
    assert target.buffer.lines == ["shared"]
