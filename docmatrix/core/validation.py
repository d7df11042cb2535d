"""Structural Validation — reports the first empty container in a document.

Invariants:
    - Depth-first, left-to-right; the first empty Horiz/Vert found is the one reported
    - A valid document is returned as the identical object (Ok(doc).value is doc)
    - Reporting only: never repairs, prunes or copies
    - Pure: no IO, no logging, never raises for a well-typed document
"""

from dataclasses import dataclass
from enum import Enum

from docmatrix.core.document import Cell, Document, Horiz, Vert
from docmatrix.core.result import Err, Ok, Result


class StructuralErrorCode(str, Enum):
    EMPTY_HORIZ = "EMPTY_HORIZ"
    EMPTY_VERT = "EMPTY_VERT"


_MESSAGES = {
    StructuralErrorCode.EMPTY_HORIZ: "Horizontal container cannot be empty",
    StructuralErrorCode.EMPTY_VERT: "Vertical container cannot be empty",
}


@dataclass(frozen=True)
class StructuralError:
    """An empty container, located by child indexes from the root."""
    code: StructuralErrorCode
    message: str
    path: tuple[int, ...] = ()

    def location(self) -> str:
        if not self.path:
            return "/"
        return "/" + "/".join(str(index) for index in self.path)

    def describe(self) -> str:
        return f"{self.message} at {self.location()}"


def _empty(code: StructuralErrorCode, path: tuple[int, ...]) -> Err:
    return Err(StructuralError(code, _MESSAGES[code], path))


def validate(doc: Document) -> Result:
    """Ok(doc) when every container is non-empty, else Err(StructuralError)."""
    stack: list[tuple[Document, tuple[int, ...]]] = [(doc, ())]
    while stack:
        node, path = stack.pop()
        match node:
            case Cell():
                continue
            case Horiz(children=()):
                return _empty(StructuralErrorCode.EMPTY_HORIZ, path)
            case Vert(children=()):
                return _empty(StructuralErrorCode.EMPTY_VERT, path)
            case Horiz(children=children) | Vert(children=children):
                stack.extend(
                    (child, path + (index,))
                    for index, child in reversed(list(enumerate(children)))
                )
            case _:
                raise TypeError(f"Not a document node: {type(node).__name__}")
    return Ok(doc)


def is_valid(doc: Document) -> bool:
    return validate(doc).is_ok
