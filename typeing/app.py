"""Typing test controller."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import TypeingConfig
from .constants import TypeingConstants
from .errors import TerminalTooSmallError
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .stats import TypingStats
from .terminal import TerminalSurface
from .text import StyledText
from .wordlists import RawWordSelector, WordSelector

logger = logging.getLogger(__name__)


class Mode:
    TYPING = "typing"
    RESULTS = "results"
    TOO_SMALL = "too_small"


class Typeing:
    """Runs typing tests on a TerminalSurface.

    The surface only knows how to draw and move the caret; this class decides
    what each keystroke means. ``text`` is the plain content of the word block
    and ``position`` the index of the character to type next, which always
    matches the surface's logical caret.
    """

    def __init__(self, config: TypeingConfig, surface: Optional[TerminalSurface] = None,
                 selector: Optional[WordSelector] = None):
        self.config = config
        self.surface = surface or TerminalSurface()
        self.keyboard = KeyboardHandler(self.surface)
        self.selector = selector or self._make_selector(config)
        self.words: list[str] = []
        self.lines: list[StyledText] = []
        self.text = ""
        self.position = 0
        self.stats = TypingStats()
        self.mode = Mode.TYPING
        self.too_small: Optional[TerminalTooSmallError] = None
        self.running = False
        self.geometry: Optional[tuple[int, int]] = None  # (width, height) of the last full redraw

    @staticmethod
    def _make_selector(config: TypeingConfig) -> WordSelector:
        if config.wordlist_file is not None:
            return RawWordSelector.from_file(config.wordlist_file)
        return RawWordSelector.from_builtin(config.wordlist)

    @property
    def term(self):
        return self.surface.term

    def run(self) -> None:
        """Run tests until the user quits."""
        self.running = True
        try:
            with self.surface:
                self.restart()
                while self.running:
                    key_event = self.keyboard.get_key_event()
                    if key_event:
                        self.handle_key_event(key_event)
        except KeyboardInterrupt:
            # Ctrl-C raises SIGINT in non-canonical mode; the surface is already restored
            pass
        finally:
            self.running = False

    def restart(self) -> None:
        """Start a new test with fresh words."""
        self.words = self.selector.new_words(self.config.num_words)
        logger.debug("Starting test with %d words", len(self.words))
        self.show_words()

    def show_words(self) -> None:
        """Draw the current words, or explain why they do not fit."""
        self.geometry = (self.surface.width, self.surface.height)
        self.stats = TypingStats()
        self.position = 0
        self.surface.clear_and_center_caret()
        self.surface.set_cursor_visible(True)
        self.surface.render_block_bottom_anchored(
            [StyledText.from_plain(TypeingConstants.HELP_LINE).with_faint(self.term)])
        try:
            self.lines = self.surface.display_word_block(self.words)
        except TerminalTooSmallError as e:
            logger.debug("Terminal too small: %s", e)
            self.too_small = e
            self.mode = Mode.TOO_SMALL
            self.lines = []
            self.text = ""
            self.surface.clear_and_center_caret()
            self.surface.set_cursor_visible(False)
            self.surface.render_block_centered([
                StyledText.from_plain(e.msg),
                StyledText.from_plain(TypeingConstants.RESIZE_HINT).with_faint(self.term),
            ])
            return
        self.too_small = None
        self.mode = Mode.TYPING
        self.text = "".join(line.plain_form for line in self.lines)

    def handle_key_event(self, key_event: KeyEvent) -> None:
        if key_event.key_type == KeyType.CTRL and key_event.value == 'c':
            self.running = False
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            self.running = False
        elif key_event.key_type == KeyType.CTRL and key_event.value == 'r':
            self.restart()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'resize':
            self.handle_resize()
        elif self.mode == Mode.TOO_SMALL:
            # Any other key retries after the user resized the terminal
            self.show_words()
        elif self.mode != Mode.TYPING:
            return
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.backspace()
        elif key_event.key_type == KeyType.CTRL and key_event.value == 'w':
            self.delete_word()
        elif key_event.key_type == KeyType.REGULAR and len(key_event.value) == 1:
            self.type_character(key_event.value)

    def _styled_result(self, expected: str, correct: bool) -> StyledText:
        text = StyledText.from_plain(expected)
        if correct:
            return text.with_color(self.term, TypeingConstants.CORRECT_COLOR)
        return text.with_underline(self.term).with_color(self.term, TypeingConstants.INCORRECT_COLOR)

    def type_character(self, char: str) -> None:
        """Check a typed character against the word block and mark it."""
        if not self.text:
            return
        expected = self.text[self.position]
        correct = char == expected
        self.stats.record(correct)
        if self.surface.at_last_character:
            self.finish()
            return
        self.surface.move_forward()
        self.surface.replace_preceding_character(self._styled_result(expected, correct))
        self.position += 1

    def backspace(self) -> None:
        """Step back one character and restore it to the untyped style."""
        if self.position == 0:
            return
        previous = StyledText.from_plain(self.text[self.position - 1]).with_faint(self.term)
        self.surface.replace_preceding_character(previous)
        self.surface.move_backward()
        self.position -= 1

    def delete_word(self) -> None:
        """Delete back to the start of the current (or just finished) word."""
        while self.position > 0 and self.text[self.position - 1] == ' ':
            self.backspace()
        while self.position > 0 and self.text[self.position - 1] != ' ':
            self.backspace()

    def finish(self) -> None:
        self.stats.finish()
        self.mode = Mode.RESULTS
        logger.debug("Test finished: %s", self.stats.summary())
        self.show_results(self.stats)

    def handle_resize(self) -> None:
        """Redraw after the terminal changed size.

        The recorded line positions no longer match the screen, so a test in
        progress starts over on the same words.
        """
        geometry = (self.surface.width, self.surface.height)
        if geometry == self.geometry:
            return
        logger.debug("Terminal resized from %s to %s", self.geometry, geometry)
        if self.mode == Mode.RESULTS:
            self.show_results(self.stats)
        else:
            self.show_words()

    def show_results(self, stats: TypingStats) -> None:
        self.geometry = (self.surface.width, self.surface.height)
        self.surface.clear_and_center_caret()
        self.surface.set_cursor_visible(False)
        rows: Sequence[StyledText] = [
            StyledText.from_plain(stats.summary()),
            StyledText.from_plain(TypeingConstants.RESULTS_HINT).with_faint(self.term),
        ]
        self.surface.render_block_centered(rows)
