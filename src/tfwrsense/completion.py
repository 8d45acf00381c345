"""Completion provider.

Two branches. After ``identifier.`` the identifier is resolved, first as a
container-typed document variable, then as a catalog class. Anywhere else, or
when the identifier resolves to nothing, the top-level vocabulary is offered
in four tiers: document functions, catalog classes, catalog functions,
catalog constants.

``sort_text`` is ``<tier>_<index>_<name>`` so the host's own alphabetical
sort keeps tiers together and each tier in declaration order.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tfwrsense.methods import methods_for
from tfwrsense.models.index import CONTAINER_TYPES
from tfwrsense.models.protocol import CompletionItem, CompletionItemKind

if TYPE_CHECKING:
    from tfwrsense.document import TextDocument
    from tfwrsense.models.catalog import Catalog
    from tfwrsense.models.index import DocumentIndex
    from tfwrsense.models.protocol import Position, Range

_MEMBER_ACCESS = re.compile(r"(?:^|\W)([A-Za-z_][A-Za-z0-9_]*)\.[A-Za-z_0-9]*$")

_TIER_LOCAL = 0
_TIER_CLASS = 1
_TIER_FUNCTION = 2
_TIER_CONSTANT = 3


def _sort_text(tier: int, idx: int, name: str) -> str:
    return f"{tier}_{idx:03d}_{name}"


def _member_completions(
    catalog: Catalog, index: DocumentIndex, identifier: str, replace: Range
) -> list[CompletionItem]:
    var_type = index.variable_type(identifier)
    if var_type in CONTAINER_TYPES:
        return [
            CompletionItem(
                label=method.name,
                insert_text=f"{method.name}()",
                kind=CompletionItemKind.METHOD,
                detail=f"{var_type} method",
                documentation=f"{method.label}\n\n{method.doc}" if method.doc else method.label,
                sort_text=_sort_text(0, idx, method.name),
                preselect=idx == 0,
                range=replace,
            )
            for idx, method in enumerate(methods_for(var_type))
        ]

    entry = catalog.find_class(identifier)
    if entry is None:
        return []
    return [
        CompletionItem(
            label=name,
            insert_text=name,
            kind=CompletionItemKind.ENUM_MEMBER,
            detail=f"{entry.name} member",
            documentation=doc,
            sort_text=_sort_text(0, idx, name),
            preselect=idx == 0,
            range=replace,
        )
        for idx, (name, doc) in enumerate(entry.members.items())
    ]


def _top_level_completions(
    catalog: Catalog, index: DocumentIndex, replace: Range
) -> list[CompletionItem]:
    items: list[CompletionItem] = []
    for idx, (name, fn) in enumerate(index.functions.items()):
        items.append(
            CompletionItem(
                label=name,
                insert_text=f"{name}()",
                kind=CompletionItemKind.FUNCTION,
                detail="function (document)",
                documentation=fn.label,
                sort_text=_sort_text(_TIER_LOCAL, idx, name),
                range=replace,
            )
        )
    for idx, name in enumerate(catalog.class_names):
        items.append(
            CompletionItem(
                label=name,
                insert_text=name,
                kind=CompletionItemKind.CLASS,
                detail="class",
                sort_text=_sort_text(_TIER_CLASS, idx, name),
                range=replace,
            )
        )
    for idx, (name, entry) in enumerate(catalog.functions.items()):
        items.append(
            CompletionItem(
                label=name,
                insert_text=f"{name}()",
                kind=CompletionItemKind.FUNCTION,
                detail="function",
                documentation=entry.doc,
                sort_text=_sort_text(_TIER_FUNCTION, idx, name),
                range=replace,
            )
        )
    for idx, (name, constant) in enumerate(catalog.constants.items()):
        items.append(
            CompletionItem(
                label=name,
                insert_text=name,
                kind=CompletionItemKind.CONSTANT,
                detail="constant",
                documentation=constant.doc,
                sort_text=_sort_text(_TIER_CONSTANT, idx, name),
                range=replace,
            )
        )
    return items


def provide_completions(
    catalog: Catalog,
    index: DocumentIndex,
    document: TextDocument,
    position: Position,
) -> list[CompletionItem]:
    replace = document.word_until(position).to_range(position.line)
    prefix = document.text_before(position).rstrip()

    if m := _MEMBER_ACCESS.search(prefix):
        members = _member_completions(catalog, index, m.group(1), replace)
        if members:
            return members

    return _top_level_completions(catalog, index, replace)
