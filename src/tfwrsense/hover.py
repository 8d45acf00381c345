"""Hover provider for catalog names.

A ``Class.member`` token spanning the cursor takes precedence over the bare
word under it. Once such a token is found, it alone decides the answer: an
unknown class or member means no hover, rather than a fallback to the word.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tfwrsense.models.protocol import Hover, Range

if TYPE_CHECKING:
    from tfwrsense.document import TextDocument
    from tfwrsense.models.catalog import Catalog
    from tfwrsense.models.protocol import Position

_QUALIFIED_NAME = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)\.([A-Za-z_][A-Za-z0-9_]*)\b")


def _contents(title: str, doc: str | None) -> list[str]:
    return [title, doc] if doc else [title]


def provide_hover(catalog: Catalog, document: TextDocument, position: Position) -> Hover | None:
    line = document.line(position.line)

    for m in _QUALIFIED_NAME.finditer(line):
        if not m.start() <= position.character <= m.end():
            continue
        found = catalog.find_member(m.group(1), m.group(2))
        if found is None:
            return None
        entry, member = found
        return Hover(
            range=Range(line=position.line, start=m.start(), end=m.end()),
            contents=_contents(f"{entry.name}.{member}", entry.members[member]),
        )

    word = document.word_at(position)
    if word is None:
        return None
    span = word.to_range(position.line)

    fn = catalog.find_function(word.word)
    if fn is not None:
        return Hover(range=span, contents=_contents(f"{word.word}()", fn.doc))

    constant = catalog.find_constant(word.word)
    if constant is not None:
        return Hover(range=span, contents=_contents(word.word, constant.doc))

    return None
