"""Editing commands as plain values, and the key bindings that produce them.

Commands carry no behavior; ``EditSession.execute`` dispatches on the
command's type.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .keyboard import KeyEvent, KeyType


class Command:
    """Base class for editing commands."""


@dataclass(frozen=True)
class MoveLeft(Command):
    pass


@dataclass(frozen=True)
class MoveRight(Command):
    pass


@dataclass(frozen=True)
class MoveUp(Command):
    pass


@dataclass(frozen=True)
class MoveDown(Command):
    pass


@dataclass(frozen=True)
class PageUp(Command):
    pass


@dataclass(frozen=True)
class PageDown(Command):
    pass


@dataclass(frozen=True)
class MoveLineStart(Command):
    pass


@dataclass(frozen=True)
class MoveLineEnd(Command):
    pass


@dataclass(frozen=True)
class MoveWordForward(Command):
    pass


@dataclass(frozen=True)
class MoveWordBackward(Command):
    pass


@dataclass(frozen=True)
class MoveTo(Command):
    row: int
    column: int


@dataclass(frozen=True)
class InsertRune(Command):
    rune: str


@dataclass(frozen=True)
class InsertText(Command):
    text: str


@dataclass(frozen=True)
class DeleteBackward(Command):
    pass


@dataclass(frozen=True)
class DeleteForward(Command):
    pass


@dataclass(frozen=True)
class SplitLine(Command):
    pass


@dataclass(frozen=True)
class StartSelection(Command):
    pass


@dataclass(frozen=True)
class CopyRegion(Command):
    pass


@dataclass(frozen=True)
class KillRegion(Command):
    pass


@dataclass(frozen=True)
class KillToLineEnd(Command):
    pass


@dataclass(frozen=True)
class Yank(Command):
    pass


# Commands that keep the desired column alive
VERTICAL_COMMANDS = (MoveUp, MoveDown, PageUp, PageDown)

KeyBinding = Tuple[KeyType, str]


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[KeyBinding, Command] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default Emacs-style key bindings."""
        bindings = {
            # Movement
            (KeyType.SPECIAL, 'left'): MoveLeft(),
            (KeyType.CTRL, 'b'): MoveLeft(),
            (KeyType.SPECIAL, 'right'): MoveRight(),
            (KeyType.CTRL, 'f'): MoveRight(),
            (KeyType.SPECIAL, 'up'): MoveUp(),
            (KeyType.CTRL, 'p'): MoveUp(),
            (KeyType.SPECIAL, 'down'): MoveDown(),
            (KeyType.CTRL, 'n'): MoveDown(),
            (KeyType.SPECIAL, 'home'): MoveLineStart(),
            (KeyType.CTRL, 'a'): MoveLineStart(),
            (KeyType.SPECIAL, 'end'): MoveLineEnd(),
            (KeyType.CTRL, 'e'): MoveLineEnd(),
            (KeyType.SPECIAL, 'page_down'): PageDown(),
            (KeyType.CTRL, 'v'): PageDown(),
            (KeyType.SPECIAL, 'page_up'): PageUp(),
            (KeyType.ALT, 'v'): PageUp(),
            (KeyType.ALT, 'b'): MoveWordBackward(),
            (KeyType.ALT, 'left'): MoveWordBackward(),
            (KeyType.ALT, 'f'): MoveWordForward(),
            (KeyType.ALT, 'right'): MoveWordForward(),
            # Editing
            (KeyType.SPECIAL, 'backspace'): DeleteBackward(),
            (KeyType.SPECIAL, 'delete'): DeleteForward(),
            (KeyType.CTRL, 'd'): DeleteForward(),
            (KeyType.SPECIAL, 'enter'): SplitLine(),
            (KeyType.CTRL, 'k'): KillToLineEnd(),
            (KeyType.CTRL, 'y'): Yank(),
            # Region
            (KeyType.CTRL, 'space'): StartSelection(),
            (KeyType.ALT, 'w'): CopyRegion(),
            (KeyType.CTRL, 'w'): KillRegion(),
        }
        for key, command in bindings.items():
            self.register(key, command)

    def register(self, key: KeyBinding, command: Command):
        """Register a command for a key combination."""
        self._commands[key] = command

    def unregister(self, key: KeyBinding):
        self._commands.pop(key, None)

    def get_command(self, key_type: KeyType, value: str) -> Optional[Command]:
        """Get the command bound to a key combination."""
        return self._commands.get((key_type, value))

    def resolve(self, key_event: KeyEvent) -> Optional[Command]:
        """Map a key event to a command.

        Unbound printable characters insert themselves; anything else
        unbound resolves to None.
        """
        key_type = KeyType.ALT if key_event.is_alt else key_event.key_type
        command = self.get_command(key_type, key_event.value)
        if command is not None:
            return command
        if key_event.key_type == KeyType.REGULAR and _is_printable(key_event.value):
            return InsertRune(key_event.value)
        return None


def _is_printable(value: str) -> bool:
    return len(value) == 1 and (value == '\t' or ord(value) >= 32) and value != '\x7f'


AnyCommand = Union[
    MoveLeft, MoveRight, MoveUp, MoveDown, PageUp, PageDown, MoveLineStart,
    MoveLineEnd, MoveWordForward, MoveWordBackward, MoveTo, InsertRune,
    InsertText, DeleteBackward, DeleteForward, SplitLine, StartSelection,
    CopyRegion, KillRegion, KillToLineEnd, Yank,
]
