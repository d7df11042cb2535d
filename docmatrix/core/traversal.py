"""Traversal Engine — effectful, structure-preserving walk over a Document.

Invariants:
    - Cell(a) becomes ctx.map(f(a), Cell); Horiz stays Horiz, Vert stays Vert
    - Children are traversed strictly left to right through ctx.sequence
    - traverse_m never fails on its own: failures come only from f, through ctx
    - Laws: identity, option short-circuit, composition (tests/core/test_traversal_laws.py)

Design Decisions:
    - Each child traversal is deferred as a thunk so short-circuiting contexts
      stop visiting leaves after the first failure
    - Recursion depth follows tree depth; the folds in recursion_schemes are the
      stack-safe path for pathologically deep trees
"""

from functools import partial
from typing import Any, Callable

from docmatrix.core.document import Cell, Document, Horiz, Vert, rebuild
from docmatrix.core.effects import EffectContext


def traverse_m(ctx: EffectContext, f: Callable[[Any], Any], doc: Document) -> Any:
    """Apply f to every leaf inside ctx, rebuilding the same shape. Returns M[Document]."""
    match doc:
        case Cell(value=value):
            return ctx.map(f(value), Cell)
        case Horiz(children=children) | Vert(children=children):
            thunks = [partial(traverse_m, ctx, f, child) for child in children]
            return ctx.map(
                ctx.sequence(thunks), lambda docs: rebuild(doc, docs),
            )
    raise TypeError(f"Not a document node: {type(doc).__name__}")


def sequence_document(ctx: EffectContext, doc: Document) -> Any:
    """Document of wrapped values -> wrapped Document."""
    return traverse_m(ctx, lambda wrapped: wrapped, doc)
