"""Legacy Route — GET /document returns the API sample as a plain-text tree.

Invariants:
    - Response body is exactly render_tree(API sample), text/plain
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from docmatrix.core.render import RenderFormat
from docmatrix.core.samples import API
from docmatrix.services import document_service

router = APIRouter(tags=["legacy"])


@router.get("/document", response_class=PlainTextResponse)
async def get_document():
    return document_service.render_document(API, RenderFormat.TREE)
