"""Recursion Schemes — cata, ana, hylo, para and the concrete folds built on them.

Invariants:
    - A "layer" is one level of a document: Horiz or Vert whose children are plain values
      (reduced results for cata, seeds for ana/hylo, (subtree, result) pairs for para)
    - Folds are strict, eager and bottom-up; leaves are visited left to right
    - All four schemes run on an explicit work stack (no Python recursion)
    - ana/hylo terminate only if stop() eventually returns a non-None value on every branch;
      divergence is the caller's responsibility and is not detected
    - Depth convention: Cell = 1, container = 1 + max(children), empty container = 0

Design Decisions:
    - stop() follows the OPTION convention: None means "keep unfolding"
    - ana is hylo with the identity algebra, so the unfold engine exists once
    - cata and para share one fold engine; para additionally pairs each result with its subtree
"""

from typing import Any, Callable, Iterator

from docmatrix.core.document import (
    Cell, Container, Document, Horiz, Vert, rebuild,
)
from docmatrix.core.errors import UnfoldShapeError

Algebra = Callable[[Container], Any]
Coalgebra = Callable[[Any], Container]

_VISIT = 0
_COMBINE = 1


def _fold(algebra: Algebra, leaf: Callable[[Any], Any], doc: Document, keep_subtrees: bool):
    results: list = []
    stack: list = [(_VISIT, doc)]
    while stack:
        step, node = stack.pop()
        if step == _COMBINE:
            split = len(results) - len(node.children)
            reduced = results[split:]
            del results[split:]
            if keep_subtrees:
                reduced = list(zip(node.children, reduced))
            results.append(algebra(rebuild(node, reduced)))
            continue
        match node:
            case Cell(value=value):
                results.append(leaf(value))
            case Horiz(children=children) | Vert(children=children):
                stack.append((_COMBINE, node))
                stack.extend((_VISIT, child) for child in reversed(children))
            case _:
                raise TypeError(f"Not a document node: {type(node).__name__}")
    return results[0]


def cata(algebra: Algebra, leaf: Callable[[Any], Any], doc: Document):
    """Catamorphism: reduce every subtree to a value, bottom-up.

    The algebra receives a layer of the same kind as the container whose
    children are the already-reduced child values, in order.
    """
    return _fold(algebra, leaf, doc, keep_subtrees=False)


def para(algebra: Algebra, leaf: Callable[[Any], Any], doc: Document):
    """Paramorphism: like cata, but layer children are (original_subtree, reduced) pairs."""
    return _fold(algebra, leaf, doc, keep_subtrees=True)


def hylo(
    algebra: Algebra,
    coalgebra: Coalgebra,
    stop: Callable[[Any], Any],
    leaf: Callable[[Any], Any],
    seed: Any,
):
    """Hylomorphism: unfold from seed and fold the result in one pass.

    No intermediate document is built: each layer produced by the coalgebra is
    reduced by the algebra as soon as its children are reduced.
    """
    results: list = []
    stack: list = [(_VISIT, seed)]
    while stack:
        step, item = stack.pop()
        if step == _COMBINE:
            layer = item
            split = len(results) - len(layer.children)
            reduced = results[split:]
            del results[split:]
            results.append(algebra(rebuild(layer, reduced)))
            continue
        stopped = stop(item)
        if stopped is not None:
            results.append(leaf(stopped))
            continue
        layer = coalgebra(item)
        if not isinstance(layer, (Horiz, Vert)):
            raise UnfoldShapeError(type(layer).__name__)
        stack.append((_COMBINE, layer))
        stack.extend((_VISIT, child_seed) for child_seed in reversed(layer.children))
    return results[0]


def ana(coalgebra: Coalgebra, stop: Callable[[Any], Any], seed: Any) -> Document:
    """Anamorphism: grow a document from a seed, top-down.

    stop(seed) returning a value ends the branch with Cell(value); otherwise
    coalgebra(seed) must return a Horiz/Vert layer whose children are the next seeds.
    """
    return hylo(lambda layer: layer, coalgebra, stop, Cell, seed)


# ─── Concrete folds ─────────────────────────────────────────────

def count_cells(doc: Document) -> int:
    return cata(lambda layer: sum(layer.children), lambda _: 1, doc)


def _depth_algebra(layer: Container) -> int:
    if not layer.children:
        return 0
    return 1 + max(layer.children)


def max_depth(doc: Document) -> int:
    """Cell = 1, container = 1 + deepest child, empty container = 0."""
    return cata(_depth_algebra, lambda _: 1, doc)


def flatten(doc: Document) -> list:
    """Leaf values in left-to-right traversal order."""
    return cata(
        lambda layer: [value for part in layer.children for value in part],
        lambda value: [value],
        doc,
    )


def map_cells(fn: Callable[[Any], Any], doc: Document) -> Document:
    """Apply a pure function to every leaf, keeping the shape."""
    return cata(lambda layer: layer, lambda value: Cell(fn(value)), doc)


def iter_cells(doc: Document) -> Iterator:
    stack = [doc]
    while stack:
        node = stack.pop()
        match node:
            case Cell(value=value):
                yield value
            case Horiz(children=children) | Vert(children=children):
                stack.extend(reversed(children))


def fold_left(fn: Callable[[Any, Any], Any], initial: Any, doc: Document):
    """Left fold over leaf values in order: fn(fn(initial, v0), v1) ..."""
    acc = initial
    for value in iter_cells(doc):
        acc = fn(acc, value)
    return acc
