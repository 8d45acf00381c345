from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ClassEntry(BaseModel):
    """A class from the reference source and its documented members."""

    name: str
    members: dict[str, str | None] = {}  # member name -> docstring


class FunctionEntry(BaseModel):
    name: str
    doc: str | None = None
    signature_label: str  # e.g. "plant(entity: Entity) -> bool"
    params: list[str] = []
    return_type: str | None = None


class ConstantEntry(BaseModel):
    name: str
    doc: str | None = None


class Catalog(BaseModel):
    """Parsed API surface of the reference source.

    Keys keep their declared spelling; the ``find_*`` helpers match names
    case-insensitively and return the first entry in declaration order.
    """

    classes: dict[str, ClassEntry] = {}
    functions: dict[str, FunctionEntry] = {}
    constants: dict[str, ConstantEntry] = {}

    @property
    def class_names(self) -> list[str]:
        return list(self.classes)

    def find_class(self, name: str) -> ClassEntry | None:
        return _find_ci(self.classes, name)

    def find_member(self, class_name: str, member: str) -> tuple[ClassEntry, str] | None:
        """Return the class and the canonical member name, or ``None``."""
        entry = self.find_class(class_name)
        if entry is None:
            return None
        wanted = member.lower()
        for key in entry.members:
            if key.lower() == wanted:
                return entry, key
        return None

    def find_function(self, name: str) -> FunctionEntry | None:
        return _find_ci(self.functions, name)

    def find_constant(self, name: str) -> ConstantEntry | None:
        return _find_ci(self.constants, name)


def _find_ci(table: dict[str, T], name: str) -> T | None:
    wanted = name.lower()
    for key, value in table.items():
        if key.lower() == wanted:
            return value
    return None
