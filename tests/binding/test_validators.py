#!/usr/bin/env python3
"""
Tests for the early-return validators.
"""

import pytest

from lichen.binding.arc_place_info import build_arc_place_info_dict
from lichen.binding.validators import (
    UnboundOutputs,
    find_unbound_outputs,
    has_available_tokens_for_all_arcs,
    has_mismatched_variable_types,
)


@pytest.fixture
def colors(builder):
    return builder.data_class("Order", "o"), builder.data_class("Item", "i")


# =============================================================================
# Unbound outputs
# =============================================================================


class TestUnboundOutputs:

    def test_bound_outputs(self, builder, colors):
        order, _ = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"}).arc(dst, inscription={order: "o"})

        assert find_unbound_outputs(builder.build(), t) == UnboundOutputs(False, [])

    def test_output_variable_not_read(self, builder, colors):
        order, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"})
        builder.arc(t, dst, {order: "o", item: "i"})

        assert find_unbound_outputs(builder.build(), "t") == UnboundOutputs(True, ["i"])

    def test_generated_outputs_need_no_input(self, builder, colors):
        order, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"})
        builder.arc(t, dst, {order: "o", item: "i"}, generated=[item])

        assert not find_unbound_outputs(builder.build(), "t").has_unbound

    def test_variable_output_needs_variable_input(self, builder, colors):
        order, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o", item: "i"})
        builder.arc(t, dst, {order: "o", item: "i"}, variable=item)

        assert find_unbound_outputs(builder.build(), "t") == UnboundOutputs(True, ["i[]"])

    def test_inhibitor_input_supplies_nothing(self, builder, colors):
        order, _ = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"}, inhibitor=True)
        builder.arc(t, dst, {order: "o"})

        assert find_unbound_outputs(builder.build(), "t") == UnboundOutputs(True, ["o"])

    def test_empty_output_inscription(self, builder, colors):
        order, _ = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"})
        builder.arc(t, dst)

        assert find_unbound_outputs(builder.build(), "t") == UnboundOutputs(True, [])

    def test_unbound_names_listed_once(self, builder, colors):
        order, _ = colors
        d1, d2 = builder.place("d1"), builder.place("d2")
        t = builder.transition("t")
        builder.arc(t, d1, {order: "x"})
        builder.arc(t, d2, {order: "x"})

        assert find_unbound_outputs(builder.build(), "t").variables == ["x"]


# =============================================================================
# Mismatched variable types
# =============================================================================


class TestMismatchedVariableTypes:

    def test_generated_variable_output_without_variable_input(self, builder, colors):
        order, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"})
        builder.arc(t, dst, {item: "i"}, variable=item, generated=[item])
        net = builder.build()

        assert has_mismatched_variable_types(net.incoming(t), net.outgoing(t))

    def test_matching_variable_arcs(self, builder, colors):
        order, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {item: "i"}, variable=item)
        builder.arc(t, dst, {item: "i"}, variable=item)
        net = builder.build()

        assert not has_mismatched_variable_types(net.incoming(t), net.outgoing(t))

    def test_only_checked_with_inputs_and_outputs(self, builder, colors):
        _, item = colors
        dst = builder.place("dst")
        t = builder.transition("t")
        builder.arc(t, dst, {item: "i"}, variable=item, generated=[item])
        net = builder.build()

        assert not has_mismatched_variable_types(net.incoming(t), net.outgoing(t))

    def test_inhibitor_inputs_do_not_count(self, builder, colors):
        _, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {item: "i"}, variable=item, inhibitor=True)
        builder.arc(t, dst, {item: "i"}, variable=item, generated=[item])
        net = builder.build()

        assert not has_mismatched_variable_types(net.incoming(t), net.outgoing(t))


# =============================================================================
# Token availability
# =============================================================================


class TestAvailableTokens:

    def test_empty_input_place(self, builder, colors):
        order, _ = colors
        full = builder.place("full", tokens=[{order: "1"}])
        empty = builder.place("empty")
        t = builder.transition("t")
        builder.arc(full, t, {order: "o"})
        builder.arc(empty, t, {order: "p"})
        net = builder.build()

        infos = build_arc_place_info_dict(net, net.incoming(t))
        assert not has_available_tokens_for_all_arcs(infos)

    def test_empty_inhibitor_place(self, builder, colors):
        order, _ = colors
        full = builder.place("full", tokens=[{order: "1"}])
        empty = builder.place("empty")
        t = builder.transition("t")
        builder.arc(full, t, {order: "o"})
        builder.arc(empty, t, {order: "o"}, inhibitor=True)
        net = builder.build()

        infos = build_arc_place_info_dict(net, net.incoming(t))
        assert has_available_tokens_for_all_arcs(infos)
