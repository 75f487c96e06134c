#!/usr/bin/env python3
"""
Tests for structural verification of transitions.
"""

import logging

import pytest

from lichen.verification import (
    IssueKind,
    StructuralIssue,
    format_issue_title,
    verify_net,
    verify_transition,
)


@pytest.fixture
def colors(builder):
    return builder.data_class("Order", "o"), builder.data_class("Item", "i")


class TestVerifyTransition:

    def test_well_formed(self, builder, colors):
        order, _ = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"}).arc(dst, inscription={order: "o"})

        assert verify_transition(builder.build(), "t") == []

    def test_unbound_output(self, builder, colors):
        order, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"})
        builder.arc(t, dst, {order: "o", item: "i"}, variable=item)

        assert verify_transition(builder.build(), t) == [
            StructuralIssue("t", IssueKind.UNBOUND_OUTPUT, ["i[]"]),
        ]

    def test_missing_inscription(self, builder, colors):
        order, _ = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"})
        builder.arc(t, dst)

        [issue] = verify_transition(builder.build(), "t")
        assert issue.kind is IssueKind.MISSING_INSCRIPTION

    def test_mismatched_variable_type(self, builder, colors):
        order, item = colors
        src, dst = builder.place("src"), builder.place("dst")
        t = builder.transition("t")
        builder.arc(src, t, {order: "o"})
        builder.arc(t, dst, {item: "i"}, variable=item, generated=[item])

        [issue] = verify_transition(builder.build(), "t")
        assert issue.kind is IssueKind.MISMATCHED_VARIABLE_TYPE

    def test_issues_are_logged(self, builder, colors, caplog):
        order, _ = colors
        dst = builder.place("dst")
        t = builder.transition("t")
        builder.arc(t, dst, {order: "o"})

        with caplog.at_level(logging.WARNING, logger="lichen"):
            verify_transition(builder.build(), "t")

        assert "[verify] t: UNBOUND_OUTPUT" in caplog.text


class TestTitles:

    def test_unbound_title(self):
        issue = StructuralIssue("t", IssueKind.UNBOUND_OUTPUT, ["o", "i[]"])
        assert issue.title == (
            "This transition cannot be fired.\n"
            "Please check unbound output variable(s): o, i[]"
        )

    def test_missing_inscription_title(self):
        issue = StructuralIssue("t", IssueKind.MISSING_INSCRIPTION)
        assert format_issue_title(issue) == (
            "This transition cannot be fired.\nPlease add properties to all Places."
        )


class TestVerifyNet:

    def test_reports_only_broken_transitions(self, builder, colors):
        order, _ = colors
        src, dst = builder.place("src"), builder.place("dst")
        good = builder.transition("good")
        bad = builder.transition("bad")
        builder.arc(src, good, {order: "o"}).arc(dst, inscription={order: "o"})
        builder.arc(bad, dst, {order: "x"})

        report = verify_net(builder.build())

        assert list(report) == ["bad"]
        assert report["bad"][0].variables == ["x"]
