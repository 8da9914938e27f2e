from __future__ import annotations
from typing import Iterable, Optional, Set

import numpy as np

from primer_align.rules import COMPLEMENT
from primer_align.structures import PairLike, coerce_pairs
from primer_align.utils.nucleotide_utils import gc_count

# Half-width of the composition window around the queried position.
LOCAL_WINDOW = 5

# Contribution of each complementary base in the window.
COMPLEMENT_WEIGHT = 0.1

# Contribution of the window GC fraction.
GC_WEIGHT = 0.5


def pairing_probability(sequence: str, index: int, pairs: Optional[Iterable[PairLike]]) -> float:
    """
    Heuristic probability that the base at `index` is paired.

    A base listed in `pairs` is paired with certainty. Otherwise the score
    grows with the GC fraction of the surrounding ±5 nt window and with the
    number of complementary bases in that window.

    Parameters
    ----------
    sequence : str
        Upper-case sequence.
    index : int
        Zero-based position to score.
    pairs : Iterable[Pair | tuple[int, int]]
        Base pairs from the folding engine; may be empty.

    Returns
    -------
    float
        Value in [0, 1]; 0.0 for an out-of-range index.
    """
    if index < 0 or index >= len(sequence):
        return 0.0

    if any(pr.contains(index) for pr in coerce_pairs(pairs)):
        return 1.0

    return _local_pairing_estimate(sequence, index)


def pairing_probabilities(sequence: str, pairs: Optional[Iterable[PairLike]]) -> np.ndarray:
    """Per-position `pairing_probability` for the whole sequence."""
    paired: Set[int] = set()
    for pr in coerce_pairs(pairs):
        paired.add(pr.base_i)
        paired.add(pr.base_j)

    return np.array(
        [1.0 if i in paired else _local_pairing_estimate(sequence, i) for i in range(len(sequence))],
        dtype=np.float64,
    )


def _local_pairing_estimate(sequence: str, index: int) -> float:
    start = max(0, index - LOCAL_WINDOW)
    end = min(len(sequence), index + LOCAL_WINDOW + 1)
    window = sequence[start:end]

    gc_ratio = gc_count(window) / len(window)

    # Position-unaware count over the whole window
    target = COMPLEMENT.get(sequence[index])
    pairing_potential = sum(COMPLEMENT_WEIGHT for base in window if base == target)

    return min(1.0, gc_ratio * GC_WEIGHT + pairing_potential)
