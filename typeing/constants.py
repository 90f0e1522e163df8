"""Constants and configuration for typeing."""


class TypeingConstants:
    """Central configuration constants for the typing test."""

    # Word block layout
    LINE_WIDTH_NUMERATOR = 2  # Lines use at most 2/5 (40%) of the terminal width
    LINE_WIDTH_DENOMINATOR = 5
    MAX_WORDS_PER_LINE = 10
    MIN_LINE_WIDTH = 50  # Absolute floor for the terminal width
    VERTICAL_MARGIN = 2  # Rows kept free around the word block

    # Cursor shapes (DECSCUSR); terminfo has no capability for these
    BLINKING_BAR = "\x1b[5 q"
    STEADY_BLOCK = "\x1b[2 q"

    # SGR resets for single attributes; terminfo has no capability for these
    NO_FAINT = "\x1b[22m"  # Normal intensity
    DEFAULT_FOREGROUND = "\x1b[39m"

    # Result colors
    CORRECT_COLOR = "green"
    INCORRECT_COLOR = "red"

    # Test defaults
    DEFAULT_NUM_WORDS = 15
    CHARS_PER_WORD = 5  # Standard word length used for WPM

    # Status messages
    TOO_FEW_ROWS_MESSAGE = "Terminal height too short! Typeing needs at least {} rows, got {} rows."
    TOO_FEW_COLUMNS_MESSAGE = "Terminal width too low! Typeing needs at least {} columns, got {} columns."
    RESIZE_HINT = "Resize the terminal and press any key to retry, ctrl-c to quit."
    HELP_LINE = "ctrl-c: quit   ctrl-r: restart   ctrl-w: delete word"
    RESULTS_HINT = "ctrl-r: new test   ctrl-c: quit"
