"""Tests for containment-based fragment selection."""

from __future__ import annotations

import math

from selection_table_extractor.selector import select_fragments
from selection_table_extractor.structures import Fragment, SelectionRect


def test_only_fully_contained_fragments_are_selected(frag):
    rect = SelectionRect(left=0, top=0, right=100, bottom=100)
    inside = frag("in", 10, 10)
    straddling = frag("half", 95, 10, w=20)
    outside = frag("out", 200, 200)
    assert select_fragments([inside, straddling, outside], rect) == [inside]


def test_fragment_on_the_edge_is_included(frag):
    rect = SelectionRect(left=0, top=0, right=100, bottom=100)
    edge = frag("edge", 90, 90)
    assert select_fragments([edge], rect) == [edge]


def test_mostly_overlapping_fragment_is_excluded(frag):
    rect = SelectionRect(left=0, top=0, right=100, bottom=100)
    assert select_fragments([frag("big", 1, 1, w=100, h=10)], rect) == []


def test_empty_result_is_not_an_error(frag):
    rect = SelectionRect(left=0, top=0, right=5, bottom=5)
    assert select_fragments([frag("far", 50, 50)], rect) == []
    assert select_fragments([], rect) == []


def test_input_order_is_preserved(frag):
    rect = SelectionRect(left=0, top=0, right=100, bottom=100)
    items = [frag("b", 50, 50), frag("a", 0, 0), frag("c", 20, 70)]
    assert [f.text for f in select_fragments(items, rect)] == ["b", "a", "c"]


def test_degenerate_fragments_are_skipped(frag):
    rect = SelectionRect(left=-1000, top=-1000, right=1000, bottom=1000)
    good = frag("ok", 0, 0)
    bad = [
        Fragment(text="nan", x=math.nan, y=0, width=1, height=1),
        Fragment(text="neg", x=0, y=0, width=-3, height=1),
        Fragment(text="", x=0, y=0, width=1, height=1),
    ]
    assert select_fragments(bad + [good], rect) == [good]
