"""Document snapshots as seen by the engine.

The host owns the real buffer. It keeps a ``TextDocument`` up to date with
the full current text and passes it along with change notifications; the
engine only ever reads whole snapshots, never diffs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tfwrsense.models.protocol import Position, Range

WORD_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass
class WordRange:
    word: str
    start: int
    end: int

    def to_range(self, line: int) -> Range:
        return Range(line=line, start=self.start, end=self.end)


class TextDocument:
    """Full-text snapshot of one open document, keyed by ``uri``."""

    def __init__(self, uri: str, text: str = "") -> None:
        self.uri = uri
        self.text = text

    def __repr__(self) -> str:
        return f"TextDocument(uri={self.uri!r}, length={len(self.text)})"

    def set_text(self, text: str) -> None:
        self.text = text

    @property
    def lines(self) -> list[str]:
        return _LINE_SPLIT.split(self.text)

    def line(self, number: int) -> str:
        lines = self.lines
        if 0 <= number < len(lines):
            return lines[number]
        return ""

    def text_before(self, position: Position) -> str:
        """The line's text from column 0 up to the cursor."""
        return self.line(position.line)[: position.character]

    def word_at(self, position: Position) -> WordRange | None:
        """The word touching the cursor, if any (cursor may sit just after it)."""
        for m in WORD_PATTERN.finditer(self.line(position.line)):
            if m.start() <= position.character <= m.end():
                return WordRange(m.group(0), m.start(), m.end())
        return None

    def word_until(self, position: Position) -> WordRange:
        """The part of the word under the cursor that precedes it.

        Returns an empty word at the cursor when no word touches it.
        """
        word = self.word_at(position)
        character = min(position.character, len(self.line(position.line)))
        if word is None or word.start > character:
            return WordRange("", character, character)
        return WordRange(word.word[: character - word.start], word.start, character)
