"""Tests for sample documents and balanced_grid."""

from decimal import Decimal

import pytest

from docmatrix.core.document import Horiz, Vert
from docmatrix.core.errors import DocumentNotFoundError
from docmatrix.core.recursion_schemes import count_cells, flatten, max_depth
from docmatrix.core.samples import (
    API, FINANCIAL, SAMPLES, FinancialEntry, balanced_grid, get_sample,
)


def test_get_sample_returns_shared_value():
    assert get_sample("api") is API


def test_get_sample_unknown_name():
    with pytest.raises(DocumentNotFoundError) as exc_info:
        get_sample("missing")
    assert exc_info.value.http_status == 404
    assert exc_info.value.context.sample == "missing"


def test_sample_names():
    assert sorted(SAMPLES) == ["api", "complex", "invoice", "sample"]


def test_financial_entry_str():
    entry = FinancialEntry("Revenue", Decimal("100000"))
    assert str(entry) == "Revenue: 100000 USD"


def test_financial_sample_shape():
    assert count_cells(FINANCIAL) == 6
    assert all(isinstance(entry, FinancialEntry) for entry in flatten(FINANCIAL))


def test_balanced_grid_counts():
    doc = balanced_grid(3, branching=2)
    assert count_cells(doc) == 8
    assert max_depth(doc) == 4
    assert set(flatten(doc)) == {"leaf"}


def test_balanced_grid_depth_zero_is_single_leaf():
    assert count_cells(balanced_grid(0, leaf="x")) == 1
    assert flatten(balanced_grid(0, leaf="x")) == ["x"]


def test_balanced_grid_orientations():
    assert isinstance(balanced_grid(1, orientation="vert"), Vert)
    alternate = balanced_grid(2, orientation="alternate")
    assert isinstance(alternate, Horiz)
    assert all(isinstance(child, Vert) for child in alternate.children)


def test_balanced_grid_branching():
    assert count_cells(balanced_grid(2, branching=3)) == 9
