"""Tests for half-up rounding."""

from __future__ import annotations

from periodization_engine.math.rounding import round_half_up


class TestRoundHalfUp:
    def test_halves_go_up(self) -> None:
        # round() would give 2 and 4
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_below_half_goes_down(self) -> None:
        assert round_half_up(10.49) == 10

    def test_negative_half(self) -> None:
        assert round_half_up(-0.5) == 0

    def test_returns_int(self) -> None:
        assert isinstance(round_half_up(7.0), int)
