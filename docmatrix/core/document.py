"""Document — the immutable cell / horizontal / vertical tree.

Invariants:
    - Exactly three shapes: Cell (one payload), Horiz and Vert (ordered children)
    - Every node is a frozen dataclass; children are always stored as a tuple
    - Construction is total: empty containers are representable, validate() rejects them
    - Child order is significant and never reordered by any operation

Design Decisions:
    - Structural pattern matching on frozen dataclasses instead of a visitor hierarchy
    - Horiz/Vert coerce any iterable of children to a tuple in __post_init__,
      so Horiz([a, b]) == Horiz((a, b))
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar, Union

A = TypeVar("A")


@dataclass(frozen=True)
class Cell(Generic[A]):
    """Leaf holding exactly one payload value."""
    value: A


@dataclass(frozen=True)
class Horiz(Generic[A]):
    """Horizontal subdivision — children laid out left to right."""
    children: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Vert(Generic[A]):
    """Vertical subdivision — children laid out top to bottom."""
    children: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


Document = Union[Cell[A], Horiz[A], Vert[A]]
Container = Union[Horiz[A], Vert[A]]

CONTAINER_TYPES = (Horiz, Vert)


# ─── Construction ───────────────────────────────────────────────

def cell(value: A) -> Cell[A]:
    return Cell(value)


def horiz(*docs: Document) -> Horiz:
    return Horiz(docs)


def vert(*docs: Document) -> Vert:
    return Vert(docs)


# ─── Shape helpers ──────────────────────────────────────────────

def is_container(doc: Document) -> bool:
    return isinstance(doc, CONTAINER_TYPES)


def children_of(doc: Document) -> tuple:
    """Children of a container; a Cell has none."""
    if isinstance(doc, CONTAINER_TYPES):
        return doc.children
    return ()


def rebuild(container: Container, children: Iterable) -> Container:
    """Same container kind around new children (Horiz stays Horiz, Vert stays Vert)."""
    return type(container)(tuple(children))


def orientation(doc: Document) -> str:
    match doc:
        case Cell():
            return "cell"
        case Horiz():
            return "horiz"
        case Vert():
            return "vert"
    raise TypeError(f"Not a document node: {type(doc).__name__}")
