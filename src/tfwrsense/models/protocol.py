"""Shapes exchanged with the host editor.

Positions are zero-based: ``line`` indexes the document's lines and
``character`` is an offset into that line's string.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, field_validator


class Position(BaseModel):
    line: int
    character: int

    @field_validator("line", "character")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("position coordinates must be >= 0")
        return v


class Range(BaseModel):
    """Half-open span on a single line."""

    line: int
    start: int
    end: int


class ContentChange(BaseModel):
    """One entry of a content-change event: the inserted text and where."""

    text: str
    range: Range | None = None


class CompletionItemKind(StrEnum):
    METHOD = "method"
    FUNCTION = "function"
    CLASS = "class"
    ENUM_MEMBER = "enum_member"
    CONSTANT = "constant"


class CompletionItem(BaseModel):
    label: str
    insert_text: str
    kind: CompletionItemKind
    detail: str | None = None
    documentation: str | None = None
    sort_text: str  # Hosts sort by this, so tiers stay grouped
    preselect: bool = False
    range: Range


class Hover(BaseModel):
    range: Range
    contents: list[str]  # Display lines: title first, then documentation


class ParameterInformation(BaseModel):
    label: str


class SignatureInformation(BaseModel):
    label: str
    parameters: list[ParameterInformation] = []
    documentation: str | None = None


class SignatureHelp(BaseModel):
    signatures: list[SignatureInformation]
    active_signature: int = 0
    active_parameter: int = 0
