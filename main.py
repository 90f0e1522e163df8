#!/usr/bin/env python3
"""Typeing - A terminal typing speed tester.

Usage:
    python main.py [NUM_WORDS] [--wordlist NAME | --wordlist-file PATH]

Controls:
    Type the faint words shown in the middle of the screen
    Backspace: Delete character
    Ctrl-W: Delete word
    Ctrl-R: Restart with new words
    Ctrl-C: Quit
"""

import sys
from typeing.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
