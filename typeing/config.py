"""Command line configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import TypeingConstants
from .errors import ConfigError
from .wordlists import BuiltInWordlist

USAGE = "usage: typeing [NUM_WORDS] [--wordlist NAME | --wordlist-file PATH] [--version]"

HELP = f"""A trustworthy terminal typing tester.

{USAGE}

arguments:
  NUM_WORDS             Number of words shown in each test (default {TypeingConstants.DEFAULT_NUM_WORDS})
  -w, --wordlist NAME   Built-in word list: top250, commonly-misspelled, os
  -f, --wordlist-file PATH
                        Read words from PATH, one word per line
  -V, --version         Show version and exit
  -h, --help            Show this help and exit

shortcuts:
  ctrl-c: quit
  ctrl-r: restart the test with a new set of words
  ctrl-w: delete the last word
"""


@dataclass
class TypeingConfig:
    """Settings for a typing session."""
    num_words: int = TypeingConstants.DEFAULT_NUM_WORDS
    wordlist: BuiltInWordlist = BuiltInWordlist.TOP250
    wordlist_file: Optional[Path] = None
    show_help: bool = False
    show_version: bool = False


def _option_value(args: list[str], i: int, option: str) -> str:
    if i + 1 >= len(args):
        raise ConfigError(f"{option} requires a value")
    return args[i + 1]


def parse_args(args: list[str]) -> TypeingConfig:
    """Build a TypeingConfig from command line arguments (without the program name).

    Raises:
        ConfigError: on unknown options, missing values or a bad word count
    """
    config = TypeingConfig()
    num_words_seen = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-h", "--help"):
            config.show_help = True
        elif arg in ("-V", "--version"):
            config.show_version = True
        elif arg in ("-w", "--wordlist"):
            value = _option_value(args, i, arg)
            try:
                config.wordlist = BuiltInWordlist.from_name(value)
            except ValueError as e:
                raise ConfigError(str(e)) from e
            i += 1
        elif arg in ("-f", "--wordlist-file"):
            config.wordlist_file = Path(_option_value(args, i, arg))
            i += 1
        elif arg.startswith("-") and not arg.lstrip("-").isdigit():
            raise ConfigError(f"Unknown option: {arg}")
        elif num_words_seen:
            raise ConfigError(f"Unexpected argument: {arg}")
        else:
            try:
                config.num_words = int(arg)
            except ValueError:
                raise ConfigError(f"NUM_WORDS must be a number, got '{arg}'") from None
            if config.num_words < 1:
                raise ConfigError(f"NUM_WORDS must be at least 1, got {config.num_words}")
            num_words_seen = True
        i += 1
    return config
