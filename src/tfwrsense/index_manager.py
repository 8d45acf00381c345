"""Per-document index cache with debounced rebuilds.

Everything runs on one asyncio event loop. Each document key has at most one
pending rebuild, a single-shot ``loop.call_later`` handle; scheduling a new
one cancels the old handle first, so of a burst of edits only the last one
causes a rebuild. The rebuild reads the document's text when the timer
fires, not when it was scheduled.

Indexes are replaced whole. A reader holding the previous ``DocumentIndex``
keeps a consistent snapshot; the cache simply points at the new one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import structlog

from tfwrsense.indexer import build_document_index

if TYPE_CHECKING:
    from tfwrsense.document import TextDocument
    from tfwrsense.models.index import DocumentIndex

log = structlog.get_logger()

IndexBuilder = Callable[[str], "DocumentIndex"]


class IndexManager:
    """Owns every document's ``DocumentIndex`` and its rebuild timer."""

    def __init__(
        self,
        debounce: float,
        loop: asyncio.AbstractEventLoop | None = None,
        builder: IndexBuilder = build_document_index,
    ) -> None:
        self._debounce = debounce
        self._loop = loop
        self._builder = builder
        self._indexes: dict[str, DocumentIndex] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self.active_key: str | None = None

    @property
    def debounce(self) -> float:
        return self._debounce

    # ------------------------------------------------------------------
    # Cache operations
    # ------------------------------------------------------------------

    def get(self, key: str) -> DocumentIndex | None:
        return self._indexes.get(key)

    def replace(self, key: str, index: DocumentIndex) -> None:
        self._indexes[key] = index

    def evict(self, key: str) -> None:
        """Drop a document's index and cancel its pending rebuild."""
        self._cancel_timer(key)
        self._indexes.pop(key, None)
        if self.active_key == key:
            self.active_key = None
        log.debug("index_evicted", key=key)

    def keys(self) -> Iterator[str]:
        return iter(list(self._indexes))

    def __contains__(self, key: object) -> bool:
        return key in self._indexes

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def get_or_build(self, document: TextDocument) -> DocumentIndex:
        """Cached index for ``document``, built synchronously on first access."""
        index = self._indexes.get(document.uri)
        if index is None:
            index = self.rebuild(document)
        return index

    def rebuild(self, document: TextDocument) -> DocumentIndex:
        index = self._builder(document.text)
        self.replace(document.uri, index)
        log.debug(
            "index_rebuilt",
            key=document.uri,
            functions=len(index.functions),
            variables=len(index.variables),
        )
        return index

    def switch_to(self, document: TextDocument) -> DocumentIndex:
        """Make ``document`` active, indexing its current text right away."""
        self.active_key = document.uri
        return self.rebuild(document)

    # ------------------------------------------------------------------
    # Debounce
    # ------------------------------------------------------------------

    def schedule_rebuild(self, document: TextDocument) -> None:
        """Rebuild ``document`` once no further change arrives for ``debounce`` seconds.

        Must be called from the event loop's thread.
        """
        key = document.uri
        self._cancel_timer(key)
        loop = self._loop or asyncio.get_running_loop()
        self._timers[key] = loop.call_later(self._debounce, self._run_scheduled, document)
        log.debug("index_rebuild_scheduled", key=key, delay=self._debounce)

    def has_pending(self, key: str) -> bool:
        return key in self._timers

    def _run_scheduled(self, document: TextDocument) -> None:
        self._timers.pop(document.uri, None)
        self.rebuild(document)

    def _cancel_timer(self, key: str) -> None:
        handle = self._timers.pop(key, None)
        if handle is not None:
            handle.cancel()

    def close(self) -> None:
        """Cancel all pending rebuilds and drop every index."""
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._indexes.clear()
        self.active_key = None
