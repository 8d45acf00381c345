"""Reference catalog: classes, functions and constants of the game API.

The reference source is an annotated stub file. It is read line by line in a
single forward pass; nothing here is a real parser. A line either matches one
of the declaration patterns below or is skipped.

``parse_catalog`` never raises. An unexpected failure is logged and an empty
catalog is returned so the editor keeps working without built-in suggestions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

import structlog

from tfwrsense.errors import ErrorCode, TFWRSenseError
from tfwrsense.models.catalog import Catalog, ClassEntry, ConstantEntry, FunctionEntry

log = structlog.get_logger()

_CLASS_DECL = re.compile(r"^class\s+([A-Za-z_][A-Za-z0-9_]*)\s*:")
_MEMBER_DECL = re.compile(r"^(\s{4}|\t)([A-Za-z_][A-Za-z0-9_]*)\s*:\s*[A-Za-z_][A-Za-z0-9_\[\]]*")
_DEF_DECL = re.compile(
    r"^def\s+([A-Za-z_][A-Za-z0-9_]*)\s*\(([^)]*)\)\s*(?:->\s*([^:]+))?\s*:"
)
_CONST_DECL = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*=\s*[A-Za-z_][A-Za-z0-9_]*\(")

_LINE_SPLIT = re.compile(r"\r?\n")
_TRIPLE_QUOTES = ('"""', "'''")

_MEMBER_DOC_INDENT = 4

_BUNDLED_REFERENCE = "builtins.pyi"


@dataclass
class _DocString:
    doc: str | None
    next_line: int  # First line after whatever was consumed


def split_params(params_raw: str) -> list[str]:
    """Split a verbatim parameter list on commas; ``""`` gives ``[]``."""
    params_raw = params_raw.strip()
    if not params_raw:
        return []
    return [p.strip() for p in params_raw.split(",")]


def _read_docstring(lines: list[str], start: int, min_indent: int = 0) -> _DocString:
    j = start
    while j < len(lines) and not lines[j].strip():
        j += 1
    if j >= len(lines):
        return _DocString(None, j)

    raw = lines[j]
    stripped = raw.lstrip()
    if len(raw) - len(stripped) < min_indent:
        return _DocString(None, j)

    triple = next((q for q in _TRIPLE_QUOTES if stripped.startswith(q)), None)
    if triple is None:
        return _DocString(None, j)

    content = stripped[3:]
    if triple in content:
        return _DocString(content[: content.index(triple)].strip(), j + 1)

    j += 1
    parts: list[str] = []
    while j < len(lines):
        text = lines[j].lstrip()
        j += 1
        end = text.find(triple)
        if end != -1:
            parts.append(text[:end])
            break
        parts.append(text)
    return _DocString("\n".join(parts).strip(), j)


def _parse(text: str) -> Catalog:
    classes: dict[str, ClassEntry] = {}
    functions: dict[str, FunctionEntry] = {}
    constants: dict[str, ConstantEntry] = {}

    lines = _LINE_SPLIT.split(text)
    current: ClassEntry | None = None
    i = 0
    while i < len(lines):
        line = lines[i]

        if m := _CLASS_DECL.match(line):
            name = m.group(1)
            current = classes.setdefault(name, ClassEntry(name=name))
            i += 1
            continue

        if current is not None:
            if m := _MEMBER_DECL.match(line):
                docstring = _read_docstring(lines, i + 1, _MEMBER_DOC_INDENT)
                current.members[m.group(2)] = docstring.doc
                i = docstring.next_line
                continue
            if line.strip() and not line[0].isspace():
                # Dedent closes the class; re-read this line at top level
                current = None
                continue
            i += 1
            continue

        if m := _DEF_DECL.match(line):
            name = m.group(1)
            params_raw = (m.group(2) or "").strip()
            return_type = (m.group(3) or "").strip() or None
            label = f"{name}({params_raw})"
            if return_type:
                label += f" -> {return_type}"
            docstring = _read_docstring(lines, i + 1)
            functions[name] = FunctionEntry(
                name=name,
                doc=docstring.doc,
                signature_label=label,
                params=split_params(params_raw),
                return_type=return_type,
            )
            i = docstring.next_line
            continue

        if m := _CONST_DECL.match(line):
            name = m.group(1)
            docstring = _read_docstring(lines, i + 1)
            constants[name] = ConstantEntry(name=name, doc=docstring.doc)
            i = docstring.next_line
            continue

        i += 1

    return Catalog(classes=classes, functions=functions, constants=constants)


def parse_catalog(text: str) -> Catalog:
    """Build a catalog from reference text. Never raises."""
    try:
        catalog = _parse(text)
    except Exception:
        log.warning("catalog_parse_error", exc_info=True)
        return Catalog()
    log.debug(
        "catalog_parsed",
        classes=len(catalog.classes),
        functions=len(catalog.functions),
        constants=len(catalog.constants),
    )
    return catalog


def read_reference(path: str | Path | None = None) -> str:
    """Return the reference text from ``path``, or the bundled reference."""
    if path is None:
        return resources.files("tfwrsense.data").joinpath(_BUNDLED_REFERENCE).read_text(
            encoding="utf-8"
        )

    ref = Path(path).expanduser()
    if not ref.is_file():
        raise TFWRSenseError(
            ErrorCode.CATALOG_NOT_FOUND,
            f"Reference file not found: {ref}",
            recoverable=False,
        )
    try:
        return ref.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TFWRSenseError(
            ErrorCode.CATALOG_UNREADABLE,
            f"Cannot read reference file {ref}: {exc}",
            recoverable=False,
        ) from exc


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Read and parse the reference source. Raises only if it cannot be read."""
    return parse_catalog(read_reference(path))
