from __future__ import annotations

from tfwrsense.models.catalog import Catalog, ClassEntry, ConstantEntry, FunctionEntry
from tfwrsense.models.index import (
    CONTAINER_TYPES,
    CoreType,
    DocumentIndex,
    LocalFunction,
    MethodInfo,
)
from tfwrsense.models.protocol import (
    CompletionItem,
    CompletionItemKind,
    ContentChange,
    Hover,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureInformation,
)

__all__ = [
    # catalog
    "Catalog",
    "ClassEntry",
    "FunctionEntry",
    "ConstantEntry",
    # index
    "CoreType",
    "CONTAINER_TYPES",
    "DocumentIndex",
    "LocalFunction",
    "MethodInfo",
    # protocol
    "Position",
    "Range",
    "ContentChange",
    "CompletionItem",
    "CompletionItemKind",
    "Hover",
    "ParameterInformation",
    "SignatureInformation",
    "SignatureHelp",
]
