"""Tests for the error hierarchy — codes, categories and the REST envelope."""

from docmatrix.core.errors import (
    CellTransformError, DocMatrixError, DocumentNotFoundError, ErrorCategory,
    ErrorSeverity, InvalidDocumentError, UnfoldShapeError,
)
from docmatrix.core.validation import StructuralError, StructuralErrorCode


def test_not_found_envelope():
    body = DocumentNotFoundError("ledger").to_response()["error"]
    assert body["code"] == "DOCUMENT_NOT_FOUND"
    assert body["message"] == "Document 'ledger' not found"
    assert body["category"] == "resource_not_found"
    assert body["severity"] == "error"
    assert body["context"] == {"sample": "ledger", "operation": None, "path": None}


def test_invalid_document_uses_violation():
    violation = StructuralError(
        StructuralErrorCode.EMPTY_VERT, "Vertical container cannot be empty", (0, 2),
    )
    err = InvalidDocumentError(violation)
    assert err.code == "EMPTY_VERT"
    assert err.category == ErrorCategory.STRUCTURE
    assert err.to_response()["error"]["context"]["path"] == [0, 2]


def test_cell_transform_message():
    err = CellTransformError("Empty cell value: ''", "upper")
    assert str(err) == "Cell transform 'upper' failed: Empty cell value: ''"
    assert err.http_status == 422


def test_unfold_shape_error_is_critical():
    err = UnfoldShapeError("Cell")
    assert isinstance(err, DocMatrixError)
    assert err.severity == ErrorSeverity.CRITICAL
    assert err.http_status == 500


def test_client_errors_are_flagged():
    assert DocumentNotFoundError("x").is_client_error
    assert not UnfoldShapeError("Cell").is_client_error
