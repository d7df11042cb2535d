"""Document Rendering — pure text renderers over the three document shapes.

Invariants:
    - Every renderer handles Cell, Horiz and Vert exhaustively
    - Output order follows child order
    - render_html escapes cell values; other formats render str(value)
    - All functions are pure (no IO, no styling codes)
"""

import html
from enum import Enum

from docmatrix.core.analytics import distinct_values
from docmatrix.core.codec import document_to_json
from docmatrix.core.document import Cell, Document, Horiz, Vert, orientation
from docmatrix.core.recursion_schemes import cata, count_cells, flatten, max_depth

SEPARATOR = "═" * 50
_LABELS = {"horiz": "Horizontal", "vert": "Vertical"}


class RenderFormat(str, Enum):
    TREE = "tree"
    COMPACT = "compact"
    JSON = "json"
    HTML = "html"
    STATS = "stats"
    FULL = "full"


def render_tree(doc: Document) -> str:
    """Box-drawing tree, one node per line."""
    lines: list[str] = []
    stack: list[tuple[Document, str, bool]] = [(doc, "", True)]
    while stack:
        node, prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        child_prefix = prefix + ("    " if is_last else "│   ")
        match node:
            case Cell(value=value):
                lines.append(f"{prefix}{connector}{value}")
            case Horiz(children=children) | Vert(children=children):
                lines.append(f"{prefix}{connector}{_LABELS[orientation(node)]}")
                last = len(children) - 1
                stack.extend(
                    (child, child_prefix, index == last)
                    for index, child in reversed(list(enumerate(children)))
                )
    return "\n".join(lines)


def render_compact(doc: Document) -> str:
    """Single line: [a | b] for Horiz, {a / b} for Vert."""
    return cata(
        lambda layer: (
            "[" + " | ".join(layer.children) + "]"
            if isinstance(layer, Horiz)
            else "{" + " / ".join(layer.children) + "}"
        ),
        str,
        doc,
    )


def render_json(doc: Document, indent: int | None = 2) -> str:
    return document_to_json(doc, indent)


def render_html(doc: Document) -> str:
    """HTML table: Vert children become rows, Horiz children become cells."""
    def _cell(value) -> str:
        return (
            '<td style="border: 1px solid #ccc; padding: 8px;">'
            f"{html.escape(str(value))}</td>"
        )

    body = cata(
        lambda layer: (
            "".join(layer.children)
            if isinstance(layer, Horiz)
            else "".join(f"<tr>{child}</tr>" for child in layer.children)
        ),
        _cell,
        doc,
    )
    return (
        '<table style="border-collapse: collapse; font-family: monospace;">\n'
        f"{body}\n"
        "</table>"
    )


def render_stats(doc: Document) -> str:
    return "\n".join([
        f"Total cells: {count_cells(doc)}",
        f"Max depth: {max_depth(doc)}",
        f"Unique values: {len(distinct_values(doc))}",
        f"Total values: {len(flatten(doc))}",
    ])


def render_full(doc: Document) -> str:
    return f"{render_tree(doc)}\n\n{SEPARATOR}\n{render_stats(doc)}"


_RENDERERS = {
    RenderFormat.TREE: render_tree,
    RenderFormat.COMPACT: render_compact,
    RenderFormat.JSON: render_json,
    RenderFormat.HTML: render_html,
    RenderFormat.STATS: render_stats,
    RenderFormat.FULL: render_full,
}


def render(doc: Document, fmt: RenderFormat | str = RenderFormat.TREE) -> str:
    """Render in the requested format. Unknown format strings raise ValueError."""
    return _RENDERERS[RenderFormat(fmt)](doc)
