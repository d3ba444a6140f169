"""Constants and configuration for the scrollpad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Buffer format
    LINE_SEPARATOR = "\n"  # Sole line separator on load and serialize
    KILLED_LINE = "\n"  # Kill-ring text for a killed empty line
    ENCODING = "utf-8"

    # Viewport
    DEFAULT_WIDTH = 80
    DEFAULT_HEIGHT = 24
    PAGE_OVERLAP = 1  # Rows kept visible when paging

    # Terminal requirements
    MIN_TERMINAL_WIDTH = 20
    MIN_TERMINAL_HEIGHT = 3

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}."
    SAVED_MESSAGE = "Saved to {}"
    NO_FILENAME_MESSAGE = "No file name"
    QUIT_CONFIRM_MESSAGE = " Save file? (y, n) "
    HELP_HINT = "^S save  ^Q quit"
