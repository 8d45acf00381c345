"""Entry point for host editors.

The host forwards its events (document opened, content changed, active
document switched, document closed) and its three queries. Queries read
whatever index is cached for the document and never block on a rebuild.

No failure inside a provider reaches the host: it is logged and answered
with an empty result.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from tfwrsense.catalog import load_catalog
from tfwrsense.completion import provide_completions
from tfwrsense.config import Settings
from tfwrsense.hover import provide_hover
from tfwrsense.index_manager import IndexManager
from tfwrsense.logging_config import configure_logging
from tfwrsense.signature import provide_signature_help
from tfwrsense.state import EngineState
from tfwrsense.trigger import AutoTriggerWatcher

if TYPE_CHECKING:
    import asyncio

    from tfwrsense.document import TextDocument
    from tfwrsense.models.catalog import Catalog
    from tfwrsense.models.protocol import (
        CompletionItem,
        ContentChange,
        Hover,
        Position,
        SignatureHelp,
    )
    from tfwrsense.trigger import EditorHost

log = structlog.get_logger()


class Engine:
    def __init__(self, state: EngineState, host: EditorHost | None = None) -> None:
        self.state = state
        self._watcher: AutoTriggerWatcher | None = None
        if host is not None and state.settings.completion.auto_trigger:
            self._watcher = AutoTriggerWatcher(state.catalog, host)

    @property
    def catalog(self) -> Catalog:
        return self.state.catalog

    @property
    def indexes(self) -> IndexManager:
        return self.state.index_manager

    # ------------------------------------------------------------------
    # Editor events
    # ------------------------------------------------------------------

    def open(self, document: TextDocument) -> None:
        """Index a newly opened document and make it the active one."""
        self.indexes.switch_to(document)

    def on_document_switch(self, document: TextDocument) -> None:
        self.indexes.switch_to(document)

    def on_content_change(
        self,
        document: TextDocument,
        changes: Sequence[ContentChange] = (),
        position: Position | None = None,
    ) -> None:
        """``document`` already holds the new text; ``position`` is the cursor after the edit.

        Without a usable event loop the rebuild happens immediately instead.
        """
        try:
            self.indexes.schedule_rebuild(document)
        except Exception:
            log.warning("index_rebuild_schedule_failed", key=document.uri, exc_info=True)
            self.indexes.rebuild(document)
        if self._watcher is not None:
            self._watcher.on_content_change(document, changes, position)

    def close_document(self, uri: str) -> None:
        self.indexes.evict(uri)

    def dispose(self) -> None:
        self.indexes.close()
        self._watcher = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def complete(self, document: TextDocument, position: Position) -> list[CompletionItem]:
        try:
            index = self.indexes.get_or_build(document)
            return provide_completions(self.catalog, index, document, position)
        except Exception:
            log.warning("provider_error", provider="completion", key=document.uri, exc_info=True)
            return []

    def hover(self, document: TextDocument, position: Position) -> Hover | None:
        try:
            return provide_hover(self.catalog, document, position)
        except Exception:
            log.warning("provider_error", provider="hover", key=document.uri, exc_info=True)
            return None

    def signature_help(self, document: TextDocument, position: Position) -> SignatureHelp | None:
        try:
            index = self.indexes.get_or_build(document)
            return provide_signature_help(self.catalog, index, document, position)
        except Exception:
            log.warning("provider_error", provider="signature", key=document.uri, exc_info=True)
            return None


def create_engine(
    settings: Settings | None = None,
    host: EditorHost | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Engine:
    """Configure logging, load the reference catalog and wire up an engine.

    Raises ``TFWRSenseError`` if a configured reference file cannot be read.
    """
    settings = settings or Settings()
    configure_logging(settings.logging)
    catalog = load_catalog(settings.catalog.reference_path)
    index_manager = IndexManager(settings.indexer.debounce_seconds, loop=loop)
    log.info(
        "engine_ready",
        classes=len(catalog.classes),
        functions=len(catalog.functions),
        constants=len(catalog.constants),
        debounce_ms=settings.indexer.debounce_ms,
    )
    state = EngineState(settings=settings, catalog=catalog, index_manager=index_manager)
    return Engine(state, host)
