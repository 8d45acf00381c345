"""Signature help for the call the cursor is inside.

Only the current line up to the cursor is examined, and only an unclosed
call with no nested parentheses (``name(a, b``) is recognised. The active
parameter is the number of commas typed so far, clamped to the last
parameter.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tfwrsense.methods import find_method
from tfwrsense.models.index import CONTAINER_TYPES
from tfwrsense.models.protocol import ParameterInformation, SignatureHelp, SignatureInformation

if TYPE_CHECKING:
    from tfwrsense.document import TextDocument
    from tfwrsense.models.catalog import Catalog
    from tfwrsense.models.index import DocumentIndex
    from tfwrsense.models.protocol import Position

_METHOD_CALL = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\.([A-Za-z_][A-Za-z0-9_]*)\s*\([^()]*$")
_FUNCTION_CALL = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*\([^()]*$")


def active_parameter(text_before: str, param_count: int) -> int:
    """Index of the parameter being typed after the last ``(``."""
    open_idx = text_before.rfind("(")
    args_so_far = text_before[open_idx + 1 :] if open_idx >= 0 else ""
    return min(args_so_far.count(","), max(0, param_count - 1))


def _signature_help(
    label: str, params: list[str], doc: str | None, text_before: str
) -> SignatureHelp:
    return SignatureHelp(
        signatures=[
            SignatureInformation(
                label=label,
                parameters=[ParameterInformation(label=p) for p in params],
                documentation=doc,
            )
        ],
        active_signature=0,
        active_parameter=active_parameter(text_before, len(params)),
    )


def provide_signature_help(
    catalog: Catalog,
    index: DocumentIndex,
    document: TextDocument,
    position: Position,
) -> SignatureHelp | None:
    text_before = document.text_before(position)

    if m := _METHOD_CALL.search(text_before):
        var_type = index.variable_type(m.group(1))
        if var_type in CONTAINER_TYPES:
            method = find_method(var_type, m.group(2))
            if method is not None:
                return _signature_help(method.label, method.params, method.doc, text_before)

    m = _FUNCTION_CALL.search(text_before)
    if m is None:
        return None
    name = m.group(1)

    builtin = catalog.find_function(name)
    if builtin is not None:
        return _signature_help(
            builtin.signature_label or f"{name}()", builtin.params, builtin.doc, text_before
        )

    local = index.functions.get(name)
    if local is not None:
        return _signature_help(local.label, local.params, None, text_before)

    return None
