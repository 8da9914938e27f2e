"""
Unit tests for the `Pair` data structure and pair coercion.

This module validates the behavior of the `Pair` dataclass, which represents
a single predicted base pair, and of `coerce_pairs`, which turns the raw
tuples produced by folding engines into `Pair` objects.
"""
import numpy as np
import pytest
from dataclasses import FrozenInstanceError

from primer_align.structures.pairing import Pair, coerce_pairs


def test_pair_properties_span_and_loop_len():
    """
    Validates the `span` and `loop_len` computed properties.

    - `span`: The index distance between the paired bases (j - i).
    - `loop_len`: The number of nucleotides enclosed by the pair (j - i - 1).
    """
    base_pair = Pair(base_i=2, base_j=6)
    assert base_pair.span == 4
    assert base_pair.loop_len == 3


def test_pair_adjacent_bases_enclose_nothing():
    """
    Adjacent bases enclose no nucleotides, so the loop length is 0.
    """
    p = Pair(0, 1)
    assert p.span == 1
    assert p.loop_len == 0


def test_pair_contains_and_encloses():
    """
    `contains` checks membership of an index; `encloses` checks strict nesting.
    """
    outer = Pair(0, 11)
    inner = Pair(3, 8)

    assert outer.contains(0) and outer.contains(11)
    assert not outer.contains(5)

    assert outer.encloses(inner)
    assert not inner.encloses(outer)
    # A pair sharing an endpoint is not strictly enclosed.
    assert not outer.encloses(Pair(0, 5))


def test_pair_as_tuple_and_from_tuple_round_trip():
    """
    `from_tuple` accepts raw (i, j) tuples and `as_tuple` returns them.
    """
    base_pair = Pair.from_tuple((10, 20))
    assert base_pair == Pair(10, 20)
    assert base_pair.as_tuple() == (10, 20)


def test_from_tuple_orders_indices_and_passes_pairs_through():
    """
    Engines occasionally report (j, i); `from_tuple` restores i < j.
    Existing `Pair` objects are returned unchanged.
    """
    assert Pair.from_tuple((8, 3)) == Pair(3, 8)

    existing = Pair(1, 4)
    assert Pair.from_tuple(existing) is existing


def test_coerce_pairs_handles_none_and_mixed_inputs():
    """
    `coerce_pairs` normalizes None, tuples and `Pair` objects, keeping order.
    """
    assert coerce_pairs(None) == ()
    assert coerce_pairs([]) == ()
    assert coerce_pairs([(3, 8), Pair(0, 11)]) == (Pair(3, 8), Pair(0, 11))


def test_pair_is_frozen_and_slotted():
    """
    Confirms that the `Pair` dataclass is immutable and slotted.
    """
    base_pair = Pair(base_i=1, base_j=3)

    with pytest.raises(FrozenInstanceError):
        base_pair.base_i = 2

    with pytest.raises((AttributeError, TypeError)):
        setattr(base_pair, "new_field", 123)


def test_pair_hashable_and_equality():
    """
    Validates that `Pair` objects are hashable and compare by value.
    """
    p1 = Pair(5, 9)
    p2 = Pair(5, 9)
    p3 = Pair(5, 8)

    assert p1 == p2
    assert p1 != p3

    s = {p1, p2, p3}
    assert len(s) == 2


def test_coerce_pairs_accepts_numpy_pair_array():
    """
    An ``(n, 2)`` integer array is converted row by row into plain-int pairs.
    """
    pairs = coerce_pairs(np.array([[0, 11], [10, 1]]))

    assert pairs == (Pair(0, 11), Pair(1, 10))
    assert all(type(p.base_i) is int and type(p.base_j) is int for p in pairs)
    assert coerce_pairs(np.empty((0, 2), dtype=int)) == ()
