"""Per-document symbol index: local functions and inferred variable types.

A set of independent regex rules is run over the whole text. Each rule writes
into the same maps, so when two rules bind the same identifier the rule that
runs later wins. Rules run in this order: annotations, then list, dict, set
and str assignments. That is rule order, not line order: ``x = []`` on line 9
and ``x = "a"`` on line 1 still types ``x`` as ``str``.
"""

from __future__ import annotations

import re

import structlog

from tfwrsense.catalog import split_params
from tfwrsense.models.index import CoreType, DocumentIndex, LocalFunction

log = structlog.get_logger()

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"

_FUNCTION_DEF = re.compile(rf"^def\s+({_IDENT})\s*\(([^)]*)\)\s*:", re.MULTILINE)
_ANNOTATION = re.compile(rf"^({_IDENT})\s*:\s*(list|dict|set|str)\b", re.MULTILINE)


def _assign(rhs: str) -> re.Pattern[str]:
    return re.compile(rf"^({_IDENT})\s*=\s*{rhs}", re.MULTILINE)


_ASSIGNMENT_RULES: tuple[tuple[CoreType, tuple[re.Pattern[str], ...]], ...] = (
    (
        CoreType.LIST,
        (
            _assign(r"\[\s*\]\s*$"),
            _assign(r"\[[^\]]*\]\s*$"),
            _assign(r"list\s*\("),
        ),
    ),
    (
        CoreType.DICT,
        (
            _assign(r"\{\s*\}\s*$"),
            _assign(r"\{[^}]*:[^}]*\}\s*$"),
            _assign(r"dict\s*\("),
        ),
    ),
    (CoreType.SET, (_assign(r"set\s*\("),)),
    (
        CoreType.STR,
        (
            _assign(r"(\"[^\"]*\"|'[^']*')\s*$"),
            _assign(r"str\s*\("),
        ),
    ),
)


def _scan(text: str) -> DocumentIndex:
    variables: dict[str, CoreType] = {}
    functions: dict[str, LocalFunction] = {}

    for m in _FUNCTION_DEF.finditer(text):
        name = m.group(1)
        params_raw = (m.group(2) or "").strip()
        functions[name] = LocalFunction(
            name=name,
            params=split_params(params_raw),
            label=f"{name}({params_raw})",
        )

    for m in _ANNOTATION.finditer(text):
        variables[m.group(1)] = CoreType(m.group(2))

    for core_type, patterns in _ASSIGNMENT_RULES:
        for pattern in patterns:
            for m in pattern.finditer(text):
                variables[m.group(1)] = core_type

    return DocumentIndex(variables=variables, functions=functions)


def build_document_index(text: str) -> DocumentIndex:
    """Index one document snapshot. Never raises; failures give an empty index."""
    try:
        return _scan(text)
    except Exception:
        log.warning("index_build_error", exc_info=True)
        return DocumentIndex()
