#!/usr/bin/env python3
"""
Tests for flattening and expanding candidate bindings.
"""

from lichen.binding.keys import DataClassKey
from lichen.binding.selection import expand_binding, flatten_binding, non_empty_subsets

X = DataClassKey("X", "x")
Y = DataClassKey("Y", "y", True)


def test_flatten_binding():
    assert flatten_binding({X: ["1", "2"], Y: ["a"]}) == [{X: "1"}, {X: "2"}, {Y: "a"}]


def test_non_empty_subsets():
    assert non_empty_subsets(["a", "b", "c"]) == [
        ("a",), ("b",), ("c",),
        ("a", "b"), ("a", "c"), ("b", "c"),
        ("a", "b", "c"),
    ]


def test_expand_picks_one_plain_value_and_any_subset():
    choices = expand_binding({X: ["1", "2"], Y: ["a", "b"]})

    assert len(choices) == 6
    assert {X: "1", Y: ("a", "b")} in choices
    assert {X: "2", Y: ("b",)} in choices
    assert all(isinstance(choice[X], str) for choice in choices)


def test_expand_empty_binding():
    assert expand_binding({}) == [{}]


def test_expand_empty_values():
    assert expand_binding({X: []}) == []
