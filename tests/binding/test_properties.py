#!/usr/bin/env python3
"""
Property-based tests for binding resolution.

Run with: pytest tests/binding/test_properties.py -v
"""

import pytest
from hypothesis import given, settings, strategies as st

from lichen.binding import DataClassKey, get_valid_input_bindings, merge_links
from lichen.binding.links import merge_overlapping_links
from lichen.model.builder import NetBuilder

VALUES = st.sampled_from(["1", "2", "3", "4", "5"])
KEYS = st.sampled_from([DataClassKey(name, name.lower()) for name in "ABCDEF"])
LINKS = st.lists(KEYS, min_size=1, max_size=3, unique=True).map(tuple)


def inhibited_net(values, blocked):
    builder = NetBuilder("properties")
    i = builder.data_class("I", "i")
    source = builder.place("source", tokens=[{i: value} for value in values])
    block = builder.place("block", tokens=[{i: value} for value in blocked])
    t = builder.transition("t")
    builder.arc(source, t, {i: "i"})
    builder.arc(block, t, {i: "i"}, inhibitor=True)
    return builder.build()


def linked_net(pairs):
    builder = NetBuilder("properties")
    i = builder.data_class("I", "i")
    o = builder.data_class("O", "o")
    source = builder.place("source", tokens=[{i: a, o: b} for a, b in pairs])
    t = builder.transition("t")
    builder.arc(source, t, {i: "i", o: "o"})
    return builder.build()


class TestResolutionProperties:
    """Invariants that hold for every marking"""

    @pytest.mark.slow
    @given(values=st.lists(VALUES, min_size=1, max_size=8), blocked=st.lists(VALUES, max_size=4))
    @settings(max_examples=100, deadline=None)
    def test_deterministic(self, values, blocked):
        net = inhibited_net(values, blocked)
        assert get_valid_input_bindings(net, "t") == get_valid_input_bindings(net, "t")

    @pytest.mark.slow
    @given(values=st.lists(VALUES, min_size=1, max_size=8), extra=VALUES)
    @settings(max_examples=100, deadline=None)
    def test_adding_a_token_never_removes_values(self, values, extra):
        key = DataClassKey("I", "i")
        before = get_valid_input_bindings(inhibited_net(values, []), "t")
        after = get_valid_input_bindings(inhibited_net(values + [extra], []), "t")

        assert set(before[0][key]) <= set(after[0][key])

    @pytest.mark.slow
    @given(values=st.lists(VALUES, min_size=1, max_size=8), blocked=st.lists(VALUES, max_size=4))
    @settings(max_examples=100, deadline=None)
    def test_inhibited_values_never_bound(self, values, blocked):
        key = DataClassKey("I", "i")
        bindings = get_valid_input_bindings(inhibited_net(values, blocked), "t")

        remaining = set(values) - set(blocked)
        if remaining:
            assert [set(binding[key]) for binding in bindings] == [remaining]
        else:
            assert bindings == []

    @pytest.mark.slow
    @given(pairs=st.lists(st.tuples(VALUES, VALUES), min_size=1, max_size=6))
    @settings(max_examples=100, deadline=None)
    def test_linked_values_stay_paired(self, pairs):
        i, o = DataClassKey("I", "i"), DataClassKey("O", "o")
        bindings = get_valid_input_bindings(linked_net(pairs), "t")

        assert {(b[i][0], b[o][0]) for b in bindings} == set(pairs)
        assert all(len(b[i]) == len(b[o]) == 1 for b in bindings)


class TestMergeProperties:
    """Link merging is idempotent, lossless and order independent"""

    @given(link=LINKS)
    def test_merge_with_itself(self, link):
        assert merge_links(link, link) == link

    @given(link_a=LINKS, link_b=LINKS)
    def test_merge_keeps_every_role(self, link_a, link_b):
        assert set(merge_links(link_a, link_b)) == set(link_a) | set(link_b)

    @given(links=st.lists(LINKS, max_size=6), data=st.data())
    def test_merge_order_independent(self, links, data):
        shuffled = data.draw(st.permutations(links))

        merged = {frozenset(link) for link in merge_overlapping_links(links)}
        assert merged == {frozenset(link) for link in merge_overlapping_links(shuffled)}

    @given(links=st.lists(LINKS, max_size=6))
    def test_merged_components_partition_roles(self, links):
        merged = merge_overlapping_links(links)

        roles = [key for link in merged for key in link]
        assert len(roles) == len(set(roles))
        assert set(roles) == {key for link in links for key in link}
