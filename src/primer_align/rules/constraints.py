from __future__ import annotations
from typing import Final, Mapping

from primer_align.utils.nucleotide_utils import normalize_base

# Size of the 3'-terminal region used by structure views (hairpins, arcs).
THREE_PRIME_REGION_SIZE: Final[int] = 10

# Terminal window used to flag dimers that touch a strand end.
TERMINAL_WINDOW: Final[int] = 5

# ---- Pairing rules (DNA) -----------------------------------------------------

# Watson-Crick complements only; wobble pairs are not accepted.
COMPLEMENT: Final[Mapping[str, str]] = {"A": "T", "T": "A", "G": "C", "C": "G"}

_DNA_ALLOWED_PAIRS: Final[frozenset[str]] = frozenset({"AT", "TA", "GC", "CG"})


def can_pair(base_i: str, base_j: str) -> bool:
    """
    Return True if nucleotides `base_i` and `base_j` form a Watson-Crick pair.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides, case-insensitive. Expected in {A, C, G, T}.

    Returns
    -------
    bool
        True if (a, b) is in {AT, TA, GC, CG}; False otherwise, including
        G-T wobbles and ambiguity codes.
    """
    if not isinstance(base_i, str) or not isinstance(base_j, str):
        return False

    if len(base_i) != 1 or len(base_j) != 1:
        return False

    return (normalize_base(base_i) + normalize_base(base_j)) in _DNA_ALLOWED_PAIRS


def complement_base(base: str) -> str:
    """Complement of a single base; unknown characters pass through unchanged."""
    return COMPLEMENT.get(base, base)


def reverse_complement(seq: str) -> str:
    """
    Reverse complement of a DNA sequence.

    Characters outside {A, C, G, T} are kept in place (after reversal).
    """
    return "".join(complement_base(base) for base in reversed(seq))


def three_prime_region_start(seq_len: int, region_size: int = THREE_PRIME_REGION_SIZE) -> int:
    """
    First index of the 3'-terminal region of a sequence.

    Returns ``seq_len - region_size``. The value is negative for sequences
    shorter than the region, in which case every index lies inside it.
    """
    return seq_len - region_size


def is_in_three_prime_region(pos: int, seq_len: int, region_size: int = THREE_PRIME_REGION_SIZE) -> bool:
    """Return True if `pos` lies in the last `region_size` nts."""
    return pos >= three_prime_region_start(seq_len, region_size)
