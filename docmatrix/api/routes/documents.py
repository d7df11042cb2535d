"""Document Routes — render, inspect, validate and transform documents.

Invariants:
    - Sample documents are read-only; every request builds new trees
    - GET /{name}?format=json returns codec JSON; every other format returns text/plain
    - POST /validate always answers 200 with {"valid", "error"}; structural problems
      are data here, not HTTP errors
    - POST /render, /transform, /enrich, /pipeline reject invalid trees (400 via InvalidDocumentError)
    - Fixed routes (/financial, /pipeline, ...) are declared before /{name}

Design Decisions:
    - Thin routes: all document logic lives in services.document_service and core
"""

import logging
from decimal import Decimal

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, PlainTextResponse

from docmatrix.config import get_settings
from docmatrix.core.analytics import analyze_document
from docmatrix.core.codec import document_to_dict
from docmatrix.core.recursion_schemes import iter_cells
from docmatrix.core.render import RenderFormat
from docmatrix.core.result import Err
from docmatrix.core.samples import SAMPLES
from docmatrix.schemas.document import (
    AnalyticsResponse, DocumentRequest, DocumentResponse, EnrichRequest,
    FinancialResponse, PipelineRequest, RenderRequest, SampleListResponse,
    StatsResponse, StructuralErrorBody, TransformRequest, UnfoldRequest,
    ValidationResponse,
)
from docmatrix.services import document_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


def _rendered(doc, fmt: RenderFormat):
    if fmt == RenderFormat.JSON:
        return JSONResponse(content=document_to_dict(doc))
    return PlainTextResponse(document_service.render_document(doc, fmt))


@router.get("/", response_model=SampleListResponse)
async def list_samples():
    """Names of the built-in sample documents."""
    return SampleListResponse(
        samples=sorted(SAMPLES), default=get_settings().default_sample,
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_document(body: DocumentRequest):
    """Structural check; the first empty container is reported with its path."""
    result = document_service.check_document(body.to_document())
    if isinstance(result, Err):
        violation = result.error
        return ValidationResponse(
            valid=False,
            error=StructuralErrorBody(
                code=violation.code.value, message=violation.message,
                path=list(violation.path),
            ),
        )
    return ValidationResponse(valid=True)


@router.post("/render")
async def render_document(body: RenderRequest):
    doc = document_service.require_valid(body.to_document())
    return _rendered(doc, body.format)


@router.post("/transform", response_model=DocumentResponse)
async def transform_document(body: TransformRequest):
    """Apply a string operation to every cell (blank cells fail with 422)."""
    doc = document_service.require_valid(body.to_document())
    transformed = document_service.transform_document(doc, body.operation)
    return DocumentResponse.from_document(transformed)


@router.post("/enrich", response_model=DocumentResponse)
async def enrich_document(body: EnrichRequest):
    doc = document_service.require_valid(body.to_document())
    enriched = await document_service.enrich_document(doc, body.prefix)
    return DocumentResponse.from_document(enriched)


@router.post("/unfold", response_model=DocumentResponse)
async def unfold_document(body: UnfoldRequest):
    """Grow a full tree from depth/branching parameters."""
    doc = document_service.unfold_document(
        body.depth, body.branching, body.orientation, body.leaf,
    )
    return DocumentResponse.from_document(doc)


@router.post("/pipeline", response_model=DocumentResponse)
async def run_pipeline(body: PipelineRequest):
    """Validate, transform (422 on a blank cell), enrich, then finalize every cell."""
    doc = await document_service.run_pipeline(
        body.to_document(), body.operation, body.prefix,
    )
    return DocumentResponse.from_document(doc)


@router.get("/financial", response_model=FinancialResponse)
async def financial_report(
    rate: Decimal = Query(Decimal("0.85"), gt=0),
    currency: str = Query("EUR", min_length=3, max_length=3),
):
    """The financial statement sample with every amount converted at `rate`."""
    report = await document_service.financial_report(rate, currency.upper())
    return FinancialResponse(
        rate=str(report.rate),
        currency=report.currency,
        original=[str(entry) for entry in iter_cells(report.original)],
        converted=[str(entry) for entry in iter_cells(report.converted)],
    )


@router.get("/{name}")
async def get_document(name: str, format: RenderFormat = Query(RenderFormat.TREE)):
    """Render a sample document in the requested format."""
    doc = document_service.load_sample(name)
    return _rendered(doc, format)


@router.get("/{name}/stats", response_model=StatsResponse)
async def document_stats(name: str):
    doc = document_service.load_sample(name)
    return StatsResponse(**document_service.summarize(doc))


@router.get("/{name}/analytics", response_model=AnalyticsResponse)
async def document_analytics(name: str):
    doc = document_service.load_sample(name)
    return AnalyticsResponse(**analyze_document(doc).to_dict())
