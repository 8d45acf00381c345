from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfwrsense.config import Settings
    from tfwrsense.index_manager import IndexManager
    from tfwrsense.models.catalog import Catalog


@dataclass
class EngineState:
    """Everything one engine instance owns.

    The catalog is shared read-only by all documents; per-document indexes
    live in the index manager and are only mutated through it.
    """

    settings: Settings
    catalog: Catalog
    index_manager: IndexManager
