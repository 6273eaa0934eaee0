"""Unit tests for the time window overlap check."""

from datetime import datetime

import pytest

from airops.scheduling import overlaps


def t(hour, minute=0):
    return datetime(2024, 1, 1, hour, minute)


class TestOverlaps:

    @pytest.mark.parametrize("a, b, expected", [
        ((t(8), t(10)), (t(11), t(12)), False),   # disjoint, a first
        ((t(11), t(12)), (t(8), t(10)), False),   # disjoint, b first
        ((t(8), t(10)), (t(9), t(11)), True),     # partial overlap at the end
        ((t(9), t(11)), (t(8), t(10)), True),     # partial overlap at the start
        ((t(8), t(12)), (t(9), t(10)), True),     # b inside a
        ((t(9), t(10)), (t(8), t(12)), True),     # a inside b
        ((t(8), t(10)), (t(8), t(10)), True),     # identical
    ])
    def test_cases(self, a, b, expected):
        assert overlaps(*a, *b) is expected

    def test_shared_boundary_instant_conflicts(self):
        """Back-to-back windows touching at one instant count as overlapping."""
        assert overlaps(t(8), t(10), t(10), t(12))
        assert overlaps(t(10), t(12), t(8), t(10))

    def test_one_minute_gap_is_free(self):
        assert not overlaps(t(8), t(10), t(10, 1), t(12))

    def test_symmetric(self):
        a, b = (t(8), t(9, 30)), (t(9), t(11))
        assert overlaps(*a, *b) == overlaps(*b, *a)
