"""API test fixtures — httpx client over the ASGI app.

Invariants:
    - Every test starts with zeroed request metrics
    - No network: requests go through ASGITransport straight into the app
"""

import pytest
from httpx import ASGITransport, AsyncClient

from docmatrix.infrastructure.metrics import request_metrics
from docmatrix.main import app


@pytest.fixture
async def client():
    request_metrics.reset()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    request_metrics.reset()


@pytest.fixture
def sample_payload():
    return {
        "type": "vert",
        "children": [
            {"type": "cell", "value": "Header"},
            {"type": "horiz", "children": [
                {"type": "cell", "value": "left"},
                {"type": "cell", "value": "right"},
            ]},
        ],
    }


@pytest.fixture
def empty_horiz_payload():
    return {
        "type": "vert",
        "children": [
            {"type": "cell", "value": "Header"},
            {"type": "horiz", "children": []},
        ],
    }
