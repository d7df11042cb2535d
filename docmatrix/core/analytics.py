"""Document Analytics — pure structural summary of a document.

Invariants:
    - Never raises for a well-typed document; empty containers count as zero cells
    - complexity buckets: Simple <= 3 cells, Moderate <= 10, Complex <= 20, else Very Complex
    - is_balanced looks at the root's children only: largest cell count <= 2 * smallest
    - orientation_changes counts container children whose kind differs from their parent
"""

from dataclasses import asdict, dataclass

from docmatrix.core.document import Document, Horiz, Vert, children_of, is_container
from docmatrix.core.recursion_schemes import cata, count_cells, fold_left, max_depth, para


@dataclass(frozen=True)
class StructureAnalysis:
    has_horizontal_divisions: bool
    has_vertical_divisions: bool
    is_balanced: bool
    complexity: str
    orientation_changes: int


@dataclass(frozen=True)
class DocumentAnalytics:
    total_cells: int
    max_depth: int
    unique_values: int
    structure: StructureAnalysis

    def to_dict(self) -> dict:
        return asdict(self)


def _add_unseen(seen: list, value) -> list:
    if value not in seen:
        seen.append(value)
    return seen


def distinct_values(doc: Document) -> list:
    """Leaf values in first-seen order, deduplicated by equality (need not be hashable)."""
    return fold_left(_add_unseen, [], doc)


def _contains(kind: type, doc: Document) -> bool:
    return cata(
        lambda layer: isinstance(layer, kind) or any(layer.children),
        lambda _: False,
        doc,
    )


def classify_complexity(cell_count: int) -> str:
    if cell_count <= 3:
        return "Simple"
    if cell_count <= 10:
        return "Moderate"
    if cell_count <= 20:
        return "Complex"
    return "Very Complex"


def is_balanced(doc: Document) -> bool:
    sizes = [count_cells(child) for child in children_of(doc)]
    if len(sizes) <= 1:
        return True
    return max(sizes) <= min(sizes) * 2


def orientation_changes(doc: Document) -> int:
    """Containers nested directly inside a container of the other orientation."""
    def algebra(layer) -> int:
        flips = sum(
            1 for subtree, _ in layer.children
            if is_container(subtree) and type(subtree) is not type(layer)
        )
        return flips + sum(count for _, count in layer.children)

    return para(algebra, lambda _: 0, doc)


def analyze_structure(doc: Document) -> StructureAnalysis:
    return StructureAnalysis(
        has_horizontal_divisions=_contains(Horiz, doc),
        has_vertical_divisions=_contains(Vert, doc),
        is_balanced=is_balanced(doc),
        complexity=classify_complexity(count_cells(doc)),
        orientation_changes=orientation_changes(doc),
    )


def analyze_document(doc: Document) -> DocumentAnalytics:
    return DocumentAnalytics(
        total_cells=count_cells(doc),
        max_depth=max_depth(doc),
        unique_values=len(distinct_values(doc)),
        structure=analyze_structure(doc),
    )
