#!/usr/bin/env python3
"""Tests for Status enum."""

from registry import Status


class TestStatus:
    """Tests for Status enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Status.OVERDUE.value < Status.DUE_SOON.value
        assert Status.DUE_SOON.value < Status.OK.value
        assert Status.OK.value < Status.UNKNOWN.value
