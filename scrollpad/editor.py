"""Main editor controller: event loop, file handling and prompts."""

import errno
import logging
import os
import select
import signal
import sys
import tempfile
import termios
from typing import Optional

from .clipboard import Clipboard, get_clipboard
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .session import EditSession
from .settings_persistence import SettingsPersistence, get_persistence
from .terminal import TerminalInterface
from .widget import EditorView

logger = logging.getLogger(__name__)


class Editor:
    """Full-screen text editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 persistence: Optional[SettingsPersistence] = None,
                 clipboard: Optional[Clipboard] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.clipboard = clipboard if clipboard is not None else get_clipboard()
        self.session = EditSession(clipboard=self.clipboard,
                                   width=self.terminal.width, height=self.terminal.height)
        self.view = EditorView(self.session)
        self.view.set_focus(True)
        self.persistence = persistence or get_persistence()
        self.running = False
        self.error_mode = False  # True when terminal is too small
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        # File handling
        self.filename: Optional[str] = None
        self._saved_version = self.session.buffer.version
        self.status_message: Optional[str] = None
        self.prompt_mode = None  # None, 'save_filename', 'save_filename_quit' or 'quit_confirm'
        self.prompt_input = ""

    @property
    def modified(self) -> bool:
        return self.session.buffer.version != self._saved_version

    def _mark_saved(self) -> None:
        self._saved_version = self.session.buffer.version

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                self._sync_size()
                self.session.dirty.mark_all()
                need_draw = True
                try:
                    while self.running:
                        if need_draw:
                            self._draw()
                            need_draw = False

                        # Wait for input on stdin or resize pipe
                        ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                        if self._resize_pipe_r in ready:
                            os.read(self._resize_pipe_r, 1024)
                            self._sync_size()
                            need_draw = True
                        elif 0 in ready:
                            key_event = self.keyboard.get_key_event(timeout=0)
                            if key_event:
                                self._handle_key_event(key_event)
                                need_draw = True
                finally:
                    if old_settings:
                        try:
                            termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                        except (termios.error, OSError) as e:
                            logger.warning(f"Could not restore terminal settings: {e}")
        except KeyboardInterrupt:
            # Ctrl-C leaves without the quit prompt
            self._remember_position()
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()

    def _disable_flow_control(self):
        """Let Ctrl-S, Ctrl-Q and Ctrl-V reach the editor; returns the old termios settings."""
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            # Disable IXON/IXOFF in input flags (index 0) to allow Ctrl-S and Ctrl-Q
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            # Disable IEXTEN in local flags so Ctrl-V (VLNEXT) is not intercepted by tty
            new_settings[3] &= ~termios.IEXTEN
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, AttributeError, OSError) as e:
            logger.warning(f"Could not disable terminal flow control: {e}")
            return None

    def _sync_size(self):
        """Fit the edit session to the terminal, or enter error mode if it is too small."""
        width, height = self.terminal.width, self.terminal.height
        too_small = (width < EditorConstants.MIN_TERMINAL_WIDTH
                     or height < EditorConstants.MIN_TERMINAL_HEIGHT)
        was_error = self.error_mode
        self.error_mode = too_small
        if too_small:
            return
        if was_error or (width, height) != (self.session.width, self.session.height):
            self.terminal.clear_screen()
            self.session.resize(width, height)

    def _status_text(self) -> Optional[str]:
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            return f" File to save in: {self.prompt_input}"
        if self.prompt_mode == 'quit_confirm':
            return EditorConstants.QUIT_CONFIRM_MESSAGE
        if self.status_message:
            return f" {self.status_message}"
        return None

    def _draw(self):
        """Repaint what changed and place the cursor."""
        if self.error_mode:
            self.terminal.draw_error_message(
                EditorConstants.TERMINAL_TOO_SMALL_MESSAGE.format(
                    EditorConstants.MIN_TERMINAL_WIDTH, EditorConstants.MIN_TERMINAL_HEIGHT + 1))
            return
        status = self._status_text()
        self.terminal.draw_status(status)
        self.view.redraw(self.terminal)
        if self.prompt_mode:
            # Cursor goes to the end of the prompt input
            self.terminal.set_cursor(len(status), self.terminal.height)

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event."""
        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        if self._handle_prompt_mode(key_event):
            return

        if self.error_mode:
            if key_event.key_type == KeyType.CTRL and key_event.value == 'q':
                self._handle_quit()
            return

        if key_event.key_type == KeyType.CTRL and key_event.value == 's':
            self._handle_save()
        elif key_event.key_type == KeyType.CTRL and key_event.value == 'q':
            self._handle_quit()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            return
        else:
            self.view.process_key(key_event)

    def _handle_prompt_mode(self, key_event: KeyEvent) -> bool:
        """Handle input in prompt mode.

        Returns:
            True if in prompt mode and event was handled
        """
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            self._handle_filename_prompt(key_event)
            return True
        elif self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return True
        return False

    def load_file(self, filename: str) -> bool:
        """Load a file into the editor and restore the stored cursor position.

        A file that does not exist yet starts an empty document under
        that name.
        """
        self.filename = filename
        if not os.path.exists(filename):
            self.session.load_text("")
            self._mark_saved()
            return True
        if not self.session.load_file(filename):
            self.status_message = f"Error: Cannot read {filename}"
            return False
        self._mark_saved()
        self._restore_position()
        return True

    def _restore_position(self) -> None:
        settings = self.persistence.load_settings(self.filename)
        row = settings.get('cursor_row')
        column = settings.get('cursor_column')
        if row is None or column is None:
            return
        if not (self.persistence.validate_setting('cursor_row', row)
                and self.persistence.validate_setting('cursor_column', column)):
            logger.warning(f"Ignoring invalid stored cursor position {row!r}, {column!r}")
            return
        self.session.move_to(row, column)

    def _remember_position(self) -> None:
        if self.filename is None:
            return
        settings = self.persistence.load_settings(self.filename)
        settings['cursor_row'] = self.session.row
        settings['cursor_column'] = self.session.column
        self.persistence.save_settings(self.filename, settings)

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        temp_filename = None
        try:
            content = self.session.text.encode(EditorConstants.ENCODING)

            # Temp file in the target directory so the rename stays on one filesystem
            dir_name = os.path.dirname(filename) or '.'
            suffix = os.path.splitext(filename)[1]
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            os.replace(temp_filename, filename)

            self.filename = filename
            self._mark_saved()
            return True

        except PermissionError:
            self.status_message = f"Error: Permission denied saving {filename}"
        except OSError as e:
            if e.errno == errno.ENOSPC:
                self.status_message = "Error: No space left on device"
            else:
                self.status_message = f"Error: Cannot save to {filename}"
        logger.warning(f"Saving {filename} failed: {self.status_message}")
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {temp_filename}: {e}")
        return False

    def _handle_save(self):
        """Handle Ctrl-S save command."""
        if self.filename:
            if self.save_file(self.filename):
                self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)
        else:
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    def _handle_quit(self):
        """Handle Ctrl-Q; asks first when there are unsaved changes."""
        if self.modified:
            self.prompt_mode = 'quit_confirm'
        else:
            self._quit()

    def _quit(self):
        self._remember_position()
        self.running = False

    def _handle_filename_prompt(self, key_event):
        """Handle keypress during filename prompt."""
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_mode = None
            self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                quitting = self.prompt_mode == 'save_filename_quit'
                if self.save_file(self.prompt_input):
                    self.status_message = EditorConstants.SAVED_MESSAGE.format(self.prompt_input)
                    if quitting:
                        self._quit()
                self.prompt_mode = None
                self.prompt_input = ""
            else:
                self.status_message = EditorConstants.NO_FILENAME_MESSAGE
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if len(char) == 1 and ord(char) >= 32:
                self.prompt_input += char

    def _handle_quit_confirm(self, key_event):
        """Handle keypress during quit confirmation."""
        self.prompt_mode = None
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            if self.filename:
                if self.save_file(self.filename):
                    self._quit()
            else:
                self.prompt_mode = 'save_filename_quit'
                self.prompt_input = ""
        elif char == 'n':
            self._quit()
