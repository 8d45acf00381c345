"""Opens the completion list as soon as ``ClassName.`` is typed.

Failures are logged at debug level and otherwise ignored.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import structlog

if TYPE_CHECKING:
    from tfwrsense.document import TextDocument
    from tfwrsense.models.catalog import Catalog
    from tfwrsense.models.protocol import ContentChange, Position

log = structlog.get_logger()


class EditorHost(Protocol):
    """Callbacks the engine may invoke on the host editor."""

    def trigger_suggest(self) -> None: ...


def class_access_pattern(class_names: Sequence[str]) -> re.Pattern[str] | None:
    """Match a line prefix ending in ``<ClassName>.``; None when there are no classes."""
    if not class_names:
        return None
    alternatives = "|".join(re.escape(name) for name in class_names)
    return re.compile(rf"\b({alternatives})\.$", re.IGNORECASE)


class AutoTriggerWatcher:
    def __init__(self, catalog: Catalog, host: EditorHost) -> None:
        self._host = host
        self._pattern = class_access_pattern(catalog.class_names)

    def on_content_change(
        self,
        document: TextDocument,
        changes: Sequence[ContentChange],
        position: Position | None,
    ) -> bool:
        """Ask the host to open completions if the last edit typed ``ClassName.``.

        Returns whether the host was asked.
        """
        try:
            if not changes or changes[-1].text != ".":
                return False
            if position is None or self._pattern is None:
                return False
            if not self._pattern.search(document.text_before(position)):
                return False
            self._host.trigger_suggest()
            return True
        except Exception:
            log.debug("auto_trigger_failed", key=document.uri, exc_info=True)
            return False
