"""Document Schemas — Pydantic models for document request/response bodies.

Invariants:
    - DocumentPayload mirrors the codec form: discriminated on "type" (cell | horiz | vert)
    - Payloads validate shape only; empty children lists pass here and are
      reported by the validate endpoint or rejected by require_valid()
    - UnfoldRequest bounds depth (0-8) and branching (1-6) so responses stay small

Design Decisions:
    - Literal discriminator over a str Enum: Pydantic handles validation natively
    - Conversion to core Documents goes through core.codec (one decoding path)
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from docmatrix.core.codec import document_from_dict, document_to_dict
from docmatrix.core.document import Document
from docmatrix.core.render import RenderFormat

CellValue = Union[str, int, float, bool]


class CellPayload(BaseModel):
    type: Literal["cell"]
    value: CellValue


class HorizPayload(BaseModel):
    type: Literal["horiz"]
    children: list["DocumentPayload"]


class VertPayload(BaseModel):
    type: Literal["vert"]
    children: list["DocumentPayload"]


DocumentPayload = Annotated[
    Union[CellPayload, HorizPayload, VertPayload],
    Field(discriminator="type"),
]

HorizPayload.model_rebuild()
VertPayload.model_rebuild()


def payload_to_document(payload: CellPayload | HorizPayload | VertPayload) -> Document:
    return document_from_dict(payload.model_dump())


# --- Requests -----------------------------------------------------------------

class DocumentRequest(BaseModel):
    """Body carrying a single document."""
    document: DocumentPayload

    def to_document(self) -> Document:
        return payload_to_document(self.document)


class RenderRequest(DocumentRequest):
    format: RenderFormat = RenderFormat.TREE


class TransformRequest(DocumentRequest):
    operation: Literal["upper", "lower", "title", "strip", "reverse"] = "upper"


class EnrichRequest(DocumentRequest):
    prefix: str = Field("Processed: ", max_length=100)


class PipelineRequest(DocumentRequest):
    """Validate, transform, enrich and finalize in one call."""
    operation: Literal["upper", "lower", "title", "strip", "reverse"] = "upper"
    prefix: str = Field("Processed: ", max_length=100)


class UnfoldRequest(BaseModel):
    depth: int = Field(3, ge=0, le=8)
    branching: int = Field(2, ge=1, le=6)
    orientation: Literal["horiz", "vert", "alternate"] = "horiz"
    leaf: str = Field("leaf", min_length=1, max_length=100)


# --- Responses ----------------------------------------------------------------

class DocumentResponse(BaseModel):
    document: DocumentPayload

    @classmethod
    def from_document(cls, doc: Document) -> "DocumentResponse":
        return cls(document=document_to_dict(doc))


class SampleListResponse(BaseModel):
    samples: list[str]
    default: str


class StructuralErrorBody(BaseModel):
    code: str
    message: str
    path: list[int] = []


class ValidationResponse(BaseModel):
    valid: bool
    error: StructuralErrorBody | None = None


class FinancialResponse(BaseModel):
    rate: str
    currency: str
    original: list[str]
    converted: list[str]


class StatsResponse(BaseModel):
    cell_count: int
    max_depth: int
    values: list[str]


class StructureBody(BaseModel):
    has_horizontal_divisions: bool
    has_vertical_divisions: bool
    is_balanced: bool
    complexity: str
    orientation_changes: int


class AnalyticsResponse(BaseModel):
    total_cells: int
    max_depth: int
    unique_values: int
    structure: StructureBody
