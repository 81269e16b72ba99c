"""Shared fixtures for the extraction tests."""

from __future__ import annotations

import pytest

from selection_table_extractor.structures import Fragment


def make_fragment(text, x, y, w=10, h=10, source="test"):
    return Fragment(text=text, x=float(x), y=float(y), width=float(w), height=float(h), source=source)


@pytest.fixture
def frag():
    return make_fragment


@pytest.fixture
def scenario_fragments():
    """Two rows: A and B share a band (y jitter 1), C sits alone further down."""
    return [
        make_fragment("A", 0, 0),
        make_fragment("B", 30, 1),
        make_fragment("C", 0, 40),
    ]
