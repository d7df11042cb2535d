"""Document Service — imperative shell around the pure document core.

Invariants:
    - Every operation that builds or rejects a document logs what it did
    - Core failures are turned into DocMatrixError subclasses here, never deeper
    - transform_document runs in the RESULT context: one blank cell fails the whole tree
    - enrich_document and convert_currency run in the ASYNC context, cells in document order
    - run_pipeline runs validate, RESULT transform, ASYNC enrich, then IDENTITY finalize;
      the first failing stage stops the pipeline with its own error

Design Decisions:
    - Plain module functions over a service class: no state to hold
    - Transform operations are an explicit dict (no getattr on str)
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable

from docmatrix.core.document import Document
from docmatrix.core.effects import ASYNC, IDENTITY, RESULT
from docmatrix.core.errors import CellTransformError, InvalidDocumentError
from docmatrix.core.recursion_schemes import count_cells, iter_cells, max_depth
from docmatrix.core.render import RenderFormat, render
from docmatrix.core.result import Err, Ok
from docmatrix.core.samples import FINANCIAL, FinancialEntry, balanced_grid, get_sample
from docmatrix.core.traversal import traverse_m
from docmatrix.core.validation import validate

logger = logging.getLogger(__name__)

OPERATIONS: dict[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
    "title": str.title,
    "strip": str.strip,
    "reverse": lambda value: value[::-1],
}


def load_sample(name: str) -> Document:
    doc = get_sample(name)
    logger.info(f"Loaded sample '{name}'", extra={"sample": name})
    return doc


def render_document(doc: Document, fmt: RenderFormat | str = RenderFormat.TREE) -> str:
    fmt = RenderFormat(fmt)
    text = render(doc, fmt)
    logger.info(f"Rendered document as {fmt.value}", extra={"format": fmt.value})
    return text


def check_document(doc: Document):
    """validate() plus a log line; returns the Result unchanged."""
    result = validate(doc)
    match result:
        case Ok():
            logger.info("Document is structurally valid")
        case Err(error=violation):
            logger.info(
                f"Document rejected: {violation.describe()}",
                extra={"error_code": violation.code.value},
            )
    return result


def require_valid(doc: Document) -> Document:
    match check_document(doc):
        case Ok(value=valid):
            return valid
        case Err(error=violation):
            raise InvalidDocumentError(violation)


def _checked(operation: Callable[[str], str]) -> Callable[[object], Ok | Err]:
    def run(value) -> Ok | Err:
        text = str(value)
        if not text.strip():
            return Err(f"Empty cell value: '{text}'")
        return Ok(operation(text))
    return run


def transform_document(doc: Document, operation: str) -> Document:
    """Apply a named string operation to every cell; blank cells fail the transform."""
    if operation not in OPERATIONS:
        raise CellTransformError(
            f"unknown operation (choose from {', '.join(sorted(OPERATIONS))})",
            operation,
        )
    match traverse_m(RESULT, _checked(OPERATIONS[operation]), doc):
        case Ok(value=transformed):
            logger.info(
                f"Transformed document with '{operation}'",
                extra={"operation": operation},
            )
            return transformed
        case Err(error=reason):
            logger.warning(
                f"Transform '{operation}' failed: {reason}",
                extra={"operation": operation, "error_code": "CELL_TRANSFORM_FAILED"},
            )
            raise CellTransformError(reason, operation)


async def enrich_document(
    doc: Document, prefix: str = "Processed: ", delay_seconds: float = 0.0,
) -> Document:
    """Prefix every cell asynchronously; cells are awaited one after another."""
    async def enrich(value) -> str:
        if delay_seconds:
            await asyncio.sleep(delay_seconds)
        return f"{prefix}{value}"

    enriched = await traverse_m(ASYNC, enrich, doc)
    logger.info(
        "Enriched document", extra={"operation": "enrich", "cell_count": count_cells(doc)},
    )
    return enriched


async def convert_currency(
    doc: Document, rate: Decimal, currency: str = "EUR",
) -> Document:
    """Convert every FinancialEntry amount by `rate` into `currency`."""
    async def convert(entry: FinancialEntry) -> FinancialEntry:
        return replace(entry, amount=entry.amount * rate, currency=currency)

    converted = await traverse_m(ASYNC, convert, doc)
    logger.info(
        f"Converted document to {currency} at rate {rate}",
        extra={"operation": "convert_currency"},
    )
    return converted


@dataclass(frozen=True)
class FinancialReport:
    original: Document
    converted: Document
    rate: Decimal
    currency: str


async def financial_report(rate: Decimal, currency: str = "EUR") -> FinancialReport:
    """The FINANCIAL sample next to its conversion into `currency`."""
    converted = await convert_currency(FINANCIAL, rate, currency)
    return FinancialReport(FINANCIAL, converted, rate, currency)


FINAL_PREVIEW_LENGTH = 50


def _finalize(value) -> str:
    text = str(value)
    if len(text) > FINAL_PREVIEW_LENGTH:
        text = text[:FINAL_PREVIEW_LENGTH] + "..."
    return f"Final: {text}"


async def run_pipeline(
    doc: Document, operation: str = "upper", prefix: str = "Processed: ",
) -> Document:
    """Validate, transform every cell, enrich every cell, then mark it final."""
    valid = require_valid(doc)
    transformed = transform_document(valid, operation)
    enriched = await enrich_document(transformed, prefix)
    finalized = traverse_m(IDENTITY, _finalize, enriched)
    logger.info(
        f"Pipeline '{operation}' finished",
        extra={"operation": "pipeline", "cell_count": count_cells(finalized)},
    )
    return finalized


def unfold_document(
    depth: int, branching: int = 2, orientation: str = "horiz", leaf: str = "leaf",
) -> Document:
    doc = balanced_grid(depth, branching, orientation, leaf)
    logger.info(
        f"Unfolded document depth={depth} branching={branching}",
        extra={"operation": "unfold", "cell_count": count_cells(doc)},
    )
    return doc


def summarize(doc: Document) -> dict:
    return {
        "cell_count": count_cells(doc),
        "max_depth": max_depth(doc),
        "values": [str(value) for value in iter_cells(doc)],
    }
