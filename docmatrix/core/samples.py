"""Sample Documents — fixed trees served by the API and the CLI.

Invariants:
    - Every sample in SAMPLES is structurally valid (no empty containers)
    - Samples are module-level immutable values shared by all callers
"""

from dataclasses import dataclass
from decimal import Decimal

from docmatrix.core.document import Document, Horiz, Vert, cell, horiz, vert
from docmatrix.core.errors import DocumentNotFoundError
from docmatrix.core.recursion_schemes import ana


@dataclass(frozen=True)
class FinancialEntry:
    account: str
    amount: Decimal
    currency: str = "USD"

    def __str__(self) -> str:
        return f"{self.account}: {self.amount} {self.currency}"


SAMPLE: Document[str] = vert(
    cell("Document Header"),
    horiz(
        cell("Left Panel"),
        vert(cell("Top Right"), cell("Bottom Right")),
    ),
    cell("Document Footer"),
)

COMPLEX: Document[str] = vert(
    cell("Complex Document"),
    horiz(
        vert(cell("Chart 1"), cell("Data 1")),
        vert(
            cell("Chart 2"),
            horiz(cell("Metrics A"), cell("Metrics B")),
        ),
        cell("Summary"),
    ),
)

INVOICE: Document[str] = vert(
    cell("Invoice Header"),
    horiz(cell("Customer: John Doe"), cell("Date: 2025-06-17")),
    vert(
        cell("Items:"),
        horiz(cell("Apples"), cell("$5.00")),
        horiz(cell("Bananas"), cell("$3.00")),
    ),
    cell("Total: $8.00"),
)

API: Document[str] = vert(
    cell("API Header"),
    horiz(cell("Left cell"), cell("Right cell")),
    cell("Footer"),
)

FINANCIAL: Document[FinancialEntry] = vert(
    cell(FinancialEntry("Header", Decimal("0"))),
    horiz(
        vert(
            cell(FinancialEntry("Revenue", Decimal("100000"))),
            cell(FinancialEntry("Costs", Decimal("60000"))),
        ),
        vert(
            cell(FinancialEntry("Assets", Decimal("500000"))),
            cell(FinancialEntry("Liabilities", Decimal("200000"))),
        ),
    ),
    cell(FinancialEntry("Net Profit", Decimal("40000"))),
)

SAMPLES: dict[str, Document[str]] = {
    "sample": SAMPLE,
    "complex": COMPLEX,
    "invoice": INVOICE,
    "api": API,
}


def get_sample(name: str) -> Document[str]:
    try:
        return SAMPLES[name]
    except KeyError:
        raise DocumentNotFoundError(name) from None


def balanced_grid(
    depth: int, branching: int = 2, orientation: str = "horiz", leaf: str = "leaf",
) -> Document:
    """Unfold a full tree: `depth` container levels, `branching` children each.

    orientation is "horiz", "vert", or "alternate" (Horiz at even levels,
    Vert at odd levels).
    """
    def kind_at(level: int) -> type:
        if orientation == "alternate":
            return Horiz if level % 2 == 0 else Vert
        return Horiz if orientation == "horiz" else Vert

    def stop(seed: tuple[int, int]):
        remaining, _ = seed
        return leaf if remaining <= 0 else None

    def coalgebra(seed: tuple[int, int]):
        remaining, level = seed
        return kind_at(level)([(remaining - 1, level + 1)] * branching)

    return ana(coalgebra, stop, (depth, 0))

