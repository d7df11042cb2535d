"""Document Codec — JSON-safe dict form of a Document and back.

Invariants:
    - document_to_dict produces {"type": "cell", "value": v} or
      {"type": "horiz" | "vert", "children": [...]} (order preserved)
    - document_from_dict rebuilds an equal Document from that form
    - Decoding checks shape only; empty containers decode fine (validate() rejects them)
    - Malformed input raises DocumentDecodeError carrying the child-index path
    - document_from_json never leaks JSONDecodeError or RecursionError (too-deep nesting)

Design Decisions:
    - Encoding is a catamorphism; decoding recurses so errors can name their path
"""

import json
from typing import Any

from docmatrix.core.document import Cell, Document, Horiz, Vert
from docmatrix.core.errors import DocumentDecodeError
from docmatrix.core.recursion_schemes import cata

_CONTAINERS = {"horiz": Horiz, "vert": Vert}


def document_to_dict(doc: Document) -> dict:
    return cata(
        lambda layer: {
            "type": "horiz" if isinstance(layer, Horiz) else "vert",
            "children": list(layer.children),
        },
        lambda value: {"type": "cell", "value": value},
        doc,
    )


def document_from_dict(data: Any, path: tuple[int, ...] = ()) -> Document:
    if not isinstance(data, dict):
        raise DocumentDecodeError(
            f"Expected an object, got {type(data).__name__}", path,
        )
    kind = data.get("type")
    if not isinstance(kind, str):
        raise DocumentDecodeError(f"Unknown node type: {kind!r}", path)
    if kind == "cell":
        if "value" not in data:
            raise DocumentDecodeError("Cell is missing 'value'", path)
        return Cell(data["value"])
    if kind in _CONTAINERS:
        children = data.get("children")
        if not isinstance(children, list):
            raise DocumentDecodeError(
                f"'{kind}' requires a 'children' list", path,
            )
        return _CONTAINERS[kind](
            document_from_dict(child, path + (index,))
            for index, child in enumerate(children)
        )
    raise DocumentDecodeError(f"Unknown node type: {kind!r}", path)


def document_to_json(doc: Document, indent: int | None = None) -> str:
    return json.dumps(
        document_to_dict(doc), indent=indent, ensure_ascii=False, default=str,
    )


def document_from_json(text: str) -> Document:
    try:
        return document_from_dict(json.loads(text))
    except json.JSONDecodeError as exc:
        raise DocumentDecodeError(f"Invalid JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise DocumentDecodeError("Document is nested too deeply to decode") from exc
