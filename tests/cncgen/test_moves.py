"""Tests for cncgen/moves.py move descriptors."""
import dataclasses

import pytest

from cncgen.moves import InvalidMove, MoveDescriptor, MoveKind, feed_move, rapid


class TestRapidMoves:
    """Contract for rapid (G0) moves."""

    def test_rapid_xy(self):
        move = rapid(x=1.0, y=2.0)
        assert move.kind is MoveKind.RAPID
        assert move.command == 'G0'
        assert move.is_rapid
        assert move.feed is None

    def test_rapid_rejects_feed(self):
        with pytest.raises(InvalidMove):
            MoveDescriptor(MoveKind.RAPID, x=1.0, feed=100.0)

    def test_rapid_rejects_negative_z(self):
        """Rapids never plunge below the reference surface."""
        with pytest.raises(InvalidMove):
            rapid(z=-0.1)

    def test_rapid_allows_zero_z(self):
        assert rapid(z=0.0).z == 0.0

    def test_rapid_requires_axis(self):
        with pytest.raises(InvalidMove):
            rapid()

    def test_rapid_rotary_only(self):
        assert rapid(a=45.0).a == 45.0


class TestFeedMoves:
    """Contract for feed (G1) moves."""

    def test_feed_xyz(self):
        move = feed_move(300.0, x=1.0, y=2.0, z=-0.5)
        assert move.kind is MoveKind.FEED
        assert move.command == 'G1'
        assert not move.is_rapid

    def test_feed_requires_feed_rate(self):
        with pytest.raises(InvalidMove):
            feed_move(None, x=1.0)

    def test_feed_requires_axis(self):
        with pytest.raises(InvalidMove):
            feed_move(300.0)

    def test_feed_allows_negative_z(self):
        assert feed_move(100.0, z=-2.0).z == -2.0

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidMove):
            feed_move(100.0, x=float('nan'))
        with pytest.raises(InvalidMove):
            feed_move(float('inf'), x=1.0)

    def test_invalid_move_is_value_error(self):
        with pytest.raises(ValueError):
            feed_move(None, x=1.0)


class TestMoveDescriptor:
    """General MoveDescriptor behaviour."""

    def test_immutable(self):
        move = rapid(x=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            move.x = 2.0

    def test_axis_words_canonical_order(self):
        move = feed_move(100.0, a=90.0, z=-1.0, y=2.0, x=1.0)
        assert move.axis_words() == [('X', 1.0), ('Y', 2.0), ('Z', -1.0), ('A', 90.0)]

    def test_axis_words_sparse(self):
        assert rapid(y=3.0, a=10.0).axis_words() == [('Y', 3.0), ('A', 10.0)]

    def test_equality(self):
        assert rapid(x=1.0, y=2.0) == rapid(x=1.0, y=2.0)
        assert rapid(x=1.0) != feed_move(100.0, x=1.0)
