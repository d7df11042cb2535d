"""Tests for document analytics — pure structural summary, no IO."""

from docmatrix.core.analytics import (
    analyze_document, analyze_structure, classify_complexity, distinct_values,
    is_balanced, orientation_changes,
)
from docmatrix.core.document import cell, horiz, vert
from docmatrix.core.samples import API, COMPLEX, SAMPLE


def test_classify_complexity_boundaries():
    assert classify_complexity(0) == "Simple"
    assert classify_complexity(3) == "Simple"
    assert classify_complexity(4) == "Moderate"
    assert classify_complexity(10) == "Moderate"
    assert classify_complexity(11) == "Complex"
    assert classify_complexity(20) == "Complex"
    assert classify_complexity(21) == "Very Complex"


def test_is_balanced_looks_at_root_children():
    assert is_balanced(cell("a"))
    assert is_balanced(vert(cell("a")))
    assert is_balanced(API)  # 1, 2, 1
    assert not is_balanced(SAMPLE)  # 1, 3, 1


def test_orientation_changes():
    assert orientation_changes(cell("a")) == 0
    assert orientation_changes(horiz(horiz(cell("a")))) == 0
    assert orientation_changes(SAMPLE) == 2
    assert orientation_changes(COMPLEX) == 4


def test_distinct_values_keeps_first_occurrence_order():
    doc = vert(cell("b"), horiz(cell("a"), cell("b")), cell("a"))
    assert distinct_values(doc) == ["b", "a"]


def test_distinct_values_handles_unhashable_values():
    assert distinct_values(horiz(cell([1]), cell([1]), cell([2]))) == [[1], [2]]
    assert distinct_values(horiz()) == []


def test_analyze_structure_flags_divisions():
    only_horiz = analyze_structure(horiz(cell("a"), cell("b")))
    assert only_horiz.has_horizontal_divisions
    assert not only_horiz.has_vertical_divisions
    assert not analyze_structure(cell("a")).has_horizontal_divisions


def test_analyze_document_sample():
    analytics = analyze_document(SAMPLE)
    assert analytics.total_cells == 5
    assert analytics.max_depth == 4
    assert analytics.unique_values == 5
    assert analytics.structure.complexity == "Moderate"
    assert analytics.structure.is_balanced is False


def test_analyze_document_to_dict_nests_structure():
    data = analyze_document(COMPLEX).to_dict()
    assert data["total_cells"] == 7
    assert data["max_depth"] == 5
    assert data["structure"] == {
        "has_horizontal_divisions": True,
        "has_vertical_divisions": True,
        "is_balanced": False,
        "complexity": "Moderate",
        "orientation_changes": 4,
    }


def test_empty_container_analytics():
    analytics = analyze_document(horiz())
    assert analytics.total_cells == 0
    assert analytics.max_depth == 0
    assert analytics.structure.complexity == "Simple"
