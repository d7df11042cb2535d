"""Tests for document request/response schemas."""

import pytest
from pydantic import ValidationError

from docmatrix.core.document import Horiz, cell, horiz, vert
from docmatrix.core.render import RenderFormat
from docmatrix.schemas.document import (
    DocumentRequest, DocumentResponse, RenderRequest, TransformRequest,
    UnfoldRequest,
)


def test_request_converts_to_document():
    body = DocumentRequest(document={
        "type": "vert",
        "children": [
            {"type": "cell", "value": "a"},
            {"type": "horiz", "children": [{"type": "cell", "value": 2}]},
        ],
    })
    assert body.to_document() == vert(cell("a"), horiz(cell(2)))


def test_empty_children_pass_schema_validation():
    body = DocumentRequest(document={"type": "horiz", "children": []})
    assert body.to_document() == Horiz()


def test_unknown_node_type_rejected():
    with pytest.raises(ValidationError):
        DocumentRequest(document={"type": "grid", "children": []})


def test_cell_requires_value():
    with pytest.raises(ValidationError):
        DocumentRequest(document={"type": "cell"})


def test_render_request_defaults_to_tree():
    body = RenderRequest(document={"type": "cell", "value": "x"})
    assert body.format == RenderFormat.TREE


def test_transform_request_restricts_operation():
    with pytest.raises(ValidationError):
        TransformRequest(document={"type": "cell", "value": "x"}, operation="shout")


def test_unfold_request_bounds():
    assert UnfoldRequest().depth == 3
    with pytest.raises(ValidationError):
        UnfoldRequest(depth=-1)
    with pytest.raises(ValidationError):
        UnfoldRequest(branching=0)
    with pytest.raises(ValidationError):
        UnfoldRequest(orientation="diagonal")


def test_document_response_from_document():
    resp = DocumentResponse.from_document(horiz(cell("a"), vert(cell("b"))))
    assert resp.model_dump() == {"document": {
        "type": "horiz",
        "children": [
            {"type": "cell", "value": "a"},
            {"type": "vert", "children": [{"type": "cell", "value": "b"}]},
        ],
    }}
