"""Tests for the fragment and selection data model."""

from __future__ import annotations

import math

import pytest

from selection_table_extractor.structures import Fragment, SelectionRect, parse_bbox


def test_fragment_derived_edges(frag):
    f = frag("x", 3, 4, w=10, h=5)
    assert f.right == 13
    assert f.bottom == 9


def test_fragment_is_immutable(frag):
    f = frag("x", 0, 0)
    with pytest.raises(AttributeError):
        f.x = 5


@pytest.mark.parametrize(
    "text, x, y, w, h",
    [
        ("", 0, 0, 1, 1),
        ("   ", 0, 0, 1, 1),
        ("a", math.nan, 0, 1, 1),
        ("a", 0, math.inf, 1, 1),
        ("a", 0, 0, -1, 1),
        ("a", 0, 0, 1, -0.5),
    ],
)
def test_fragment_degenerate_geometry(text, x, y, w, h):
    assert not Fragment(text=text, x=x, y=y, width=w, height=h).is_well_formed()


def test_zero_size_fragment_is_well_formed():
    assert Fragment(text="a", x=0, y=0, width=0, height=0).is_well_formed()


def test_from_drag_positive_delta():
    rect = SelectionRect.from_drag(10, 20, 30, 40)
    assert (rect.left, rect.top, rect.right, rect.bottom) == (10, 20, 40, 60)
    assert rect.width == 30
    assert rect.height == 40


def test_from_drag_negative_delta_is_normalized():
    rect = SelectionRect.from_drag(100, 80, -60, -50)
    assert (rect.left, rect.top, rect.right, rect.bottom) == (40, 30, 100, 80)


def test_from_drag_mixed_signs():
    rect = SelectionRect.from_drag(100, 10, -20, 15)
    assert (rect.left, rect.top, rect.right, rect.bottom) == (80, 10, 100, 25)


def test_unnormalized_rect_is_rejected():
    with pytest.raises(ValueError):
        SelectionRect(left=10, top=0, right=5, bottom=10)


def test_contains_is_inclusive_on_the_boundary(frag):
    rect = SelectionRect(left=0, top=0, right=100, bottom=50)
    assert rect.contains(frag("edge", 0, 0, w=100, h=50))
    assert rect.contains(frag("corner", 90, 40, w=10, h=10))


def test_contains_rejects_one_unit_outside(frag):
    rect = SelectionRect(left=0, top=0, right=100, bottom=50)
    assert not rect.contains(frag("right", 50, 10, w=51, h=10))
    assert not rect.contains(frag("bottom", 10, 41, w=10, h=10))
    assert not rect.contains(frag("left", -1, 10, w=10, h=10))
    assert not rect.contains(frag("top", 10, -1, w=10, h=10))


def test_is_too_small():
    assert SelectionRect.from_drag(0, 0, 4, 100).is_too_small()
    assert SelectionRect.from_drag(0, 0, 100, -4).is_too_small()
    assert not SelectionRect.from_drag(0, 0, 5, 5).is_too_small()


def test_as_crop_box_rounds_to_pixels():
    rect = SelectionRect(left=10.4, top=19.6, right=50.5, bottom=60.2)
    assert rect.as_crop_box() == (10, 20, 50, 60)


def test_parse_bbox():
    assert parse_bbox("bbox 10 20 30 40; x_wconf 95") == (10, 20, 30, 40)
    assert parse_bbox("x_wconf 95") is None
    assert parse_bbox("") is None
