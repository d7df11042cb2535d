"""Error Hierarchy — typed, categorized exceptions for Document Matrix failure modes.

Invariants:
    - Every error carries a code, an ErrorCategory, an ErrorSeverity and an HTTP status
    - 400-level errors are the caller's fault and recoverable; 500-level errors are critical
    - to_response() is the only REST envelope for domain errors
    - Messages name the document, operation or path involved, never Python internals

Design Decisions:
    - One DocMatrixError base so a single FastAPI handler covers every subclass
    - Per-class defaults (code, category, severity, http_status) are class attributes;
      subclasses only build the message and fill the context
    - Structural problems found by validate() are values (StructuralError), not exceptions;
      the shell raises InvalidDocumentError only when it decides to reject the tree
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    STRUCTURE = "structure"
    RESOURCE_NOT_FOUND = "resource_not_found"
    TRANSFORM = "transform"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the failure happened: which sample, which operation, which child path."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    sample: str | None = None
    operation: str | None = None
    path: tuple[int, ...] | None = None
    debug_info: dict[str, Any] | None = None

    def to_dict(self) -> dict:
        return {
            "sample": self.sample,
            "operation": self.operation,
            "path": list(self.path) if self.path is not None else None,
        }


class DocMatrixError(Exception):
    """Base exception for all Document Matrix errors."""

    code = "DOCMATRIX_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        code: str | None = None,
        severity: ErrorSeverity | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        if code is not None:
            self.code = code
        if severity is not None:
            self.severity = severity

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.http_status < 500

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": self.context.to_dict(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class DocumentNotFoundError(DocMatrixError):
    """Requested sample document does not exist."""
    code = "DOCUMENT_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.sample = name
        super().__init__(f"Document '{name}' not found", ctx)
        self.name = name


class InvalidDocumentError(DocMatrixError):
    """Document failed structural validation; code is the violation's code (EMPTY_HORIZ, ...)."""
    category = ErrorCategory.STRUCTURE
    http_status = 400

    def __init__(self, violation, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = tuple(violation.path)
        super().__init__(violation.message, ctx, code=str(violation.code.value))
        self.violation = violation


class DocumentDecodeError(DocMatrixError):
    """Serialized document is not a well-formed cell/horiz/vert tree."""
    code = "DOCUMENT_DECODE_ERROR"
    category = ErrorCategory.VALIDATION
    http_status = 400

    def __init__(
        self, message: str, path: tuple[int, ...] = (), context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.path = tuple(path)
        super().__init__(message, ctx)


class CellTransformError(DocMatrixError):
    """A leaf function signalled failure while traversing a document."""
    code = "CELL_TRANSFORM_FAILED"
    category = ErrorCategory.TRANSFORM
    http_status = 422

    def __init__(self, reason: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(f"Cell transform '{operation}' failed: {reason}", ctx)
        self.reason = reason


# ─── Caller errors in the core (500-level) ──────────────────────

class UnfoldShapeError(DocMatrixError):
    """Coalgebra produced something other than a Horiz/Vert layer."""
    code = "UNFOLD_SHAPE_ERROR"
    severity = ErrorSeverity.CRITICAL

    def __init__(self, produced: str, context: ErrorContext | None = None):
        super().__init__(
            f"Coalgebra must return a Horiz or Vert layer, got {produced}", context,
        )
        self.produced = produced
