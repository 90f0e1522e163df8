"""Error types raised by typeing."""


class TypeingError(Exception):
    """Base error carrying a human readable message."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class TerminalIOError(TypeingError):
    """Writing to, querying, or switching the mode of the terminal failed."""


class TerminalTooSmallError(TypeingError):
    """The terminal is too small to show the word block.

    Attributes:
        dimension: "rows" or "columns"
        required: Minimum size needed along that dimension
        actual: Size currently available
    """

    def __init__(self, msg: str, dimension: str, required: int, actual: int):
        super().__init__(msg)
        self.dimension = dimension
        self.required = required
        self.actual = actual


class WordListError(TypeingError):
    """A word list could not be read or contained no usable words."""


class ConfigError(TypeingError):
    """Invalid command line arguments."""
