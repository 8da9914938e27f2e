from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

PairLike = Union["Pair", Tuple[int, int]]


@dataclass(frozen=True, slots=True)
class Pair:
    """
    Immutable (i, j) index pair used to represent a predicted base pair.

    Parameters
    ----------
    base_i : int
        5' index (0-based).
    base_j : int
        3' index (0-based), must satisfy j > i in valid uses.

    Notes
    -----
    - `span` is the distance between the paired indices (j - i).
    - `loop_len` is the number of nts enclosed between `i` and `j` (`j - i - 1`).
    """
    base_i: int
    base_j: int

    @property
    def span(self) -> int:
        """
        Index distance between the paired bases.

        Returns
        -------
        int
            ``j - i``. Used to pick the innermost pair of a stem.
        """
        return self.base_j - self.base_i

    @property
    def loop_len(self) -> int:
        """
        Number of nucleotides enclosed by the pair.

        Returns
        -------
        int
            ``j - i - 1``.
        """
        return self.base_j - self.base_i - 1

    def contains(self, index: int) -> bool:
        """Return True if `index` is one of the two paired positions."""
        return index == self.base_i or index == self.base_j

    def encloses(self, other: Pair) -> bool:
        """Return True if `other` sits strictly inside this pair."""
        return self.base_i < other.base_i and other.base_j < self.base_j

    def as_tuple(self) -> tuple[int, int]:
        """
        Pair indices as a tuple.

        Returns
        -------
        tuple[int, int]
            The pair ``(i, j)``.
        """
        return self.base_i, self.base_j

    @classmethod
    def from_tuple(cls, raw: PairLike) -> Pair:
        """
        Build a `Pair` from an ``(i, j)`` tuple, passing `Pair` instances through.

        The two indices are ordered so that ``base_i < base_j`` regardless of
        how the folding engine reported them.
        """
        if isinstance(raw, Pair):
            return raw
        first, second = int(raw[0]), int(raw[1])
        return cls(min(first, second), max(first, second))


def coerce_pairs(pairs: Iterable[PairLike] | None) -> tuple[Pair, ...]:
    """
    Normalize a base-pair collection into a tuple of `Pair` objects.

    Parameters
    ----------
    pairs : Iterable[Pair | tuple[int, int]] or None
        Pairs as produced by a folding engine, including an ``(n, 2)``
        integer array. `None` is treated as empty.

    Returns
    -------
    tuple[Pair, ...]
        Pairs in their original order.
    """
    if pairs is None:
        return ()
    return tuple(Pair.from_tuple(raw) for raw in pairs)
