from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class CoreType(StrEnum):
    """Inferred type of a document variable, used to target method completion."""

    LIST = "list"
    DICT = "dict"
    SET = "set"
    STR = "str"
    UNKNOWN = "unknown"


# Core types that have entries in the method metadata table
CONTAINER_TYPES = frozenset({CoreType.LIST, CoreType.DICT, CoreType.SET})


class LocalFunction(BaseModel):
    """A top-level ``def`` found in the edited document."""

    name: str
    params: list[str] = []
    label: str  # "name(paramsVerbatim)"


class DocumentIndex(BaseModel):
    """Declarations visible in one snapshot of a document.

    Rebuilt wholesale from text, never patched. Identifiers missing from
    ``variables`` are ``CoreType.UNKNOWN``.
    """

    variables: dict[str, CoreType] = {}
    functions: dict[str, LocalFunction] = {}

    def variable_type(self, name: str) -> CoreType:
        return self.variables.get(name, CoreType.UNKNOWN)


class MethodInfo(BaseModel):
    """Static metadata for one method of a container core type."""

    name: str
    label: str  # e.g. "list.insert(index: int, item: Any) -> None"
    params: list[str] = []
    doc: str | None = None
