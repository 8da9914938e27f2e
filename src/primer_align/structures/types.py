from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from primer_align.structures.pairing import Pair, PairLike, coerce_pairs

__all__ = [
    "FoldResult",
    "DimerPairing",
    "DimerAlignment",
    "BindingMethod",
    "BindingSpan",
    "StructureDecomposition",
    "HairpinSeverity",
    "HairpinAnalysis",
    "PairArc",
]


@dataclass(frozen=True, slots=True)
class FoldResult:
    """
    Output of the external folding engine.

    Attributes
    ----------
    free_energy : float
        Folding free energy in kcal/mol. May be non-finite when the engine
        fails to converge.
    pairs : Tuple[Pair, ...]
        Nested, non-crossing base pairs.
    """
    free_energy: float
    pairs: Tuple[Pair, ...] = ()

    @classmethod
    def from_raw(cls, free_energy: float, pairs: list[PairLike] | None) -> FoldResult:
        return cls(free_energy=free_energy, pairs=coerce_pairs(pairs))


@dataclass(frozen=True, slots=True)
class DimerPairing:
    """One complementary position in a dimer alignment."""
    index_1: int
    index_2: int
    base_1: str
    base_2: str


@dataclass(frozen=True, slots=True)
class DimerAlignment:
    """
    Best-scoring offset alignment between two single strands.

    Attributes
    ----------
    offset : int
        Shift of sequence 1 relative to the reverse complement of sequence 2.
    score : float
        Accumulated pair-energy magnitude plus the consecutive-run bonus.
    pairs : Tuple[DimerPairing, ...]
        Complementary positions, ordered by index into sequence 1.
    max_consecutive : int
        Longest uninterrupted run of complementary positions.
    involves_3prime_1, involves_3prime_2 : bool
        Whether any pair touches the terminal window at the 3' end of
        sequence 1 / sequence 2.
    involves_5prime_1, involves_5prime_2 : bool
        Same for the 5' ends.
    """
    offset: int
    score: float
    pairs: Tuple[DimerPairing, ...]
    max_consecutive: int
    involves_3prime_1: bool
    involves_3prime_2: bool
    involves_5prime_1: bool
    involves_5prime_2: bool


class BindingMethod(str, Enum):
    """Strategy that produced a `BindingSpan`, in priority order."""
    EXPLICIT = "explicit"
    EXACT = "exact"
    MUTATION_ANCHOR = "mutation_anchor"
    DUAL_ANCHOR = "dual_anchor"
    ANCHOR_3PRIME = "anchor_3prime"
    WEIGHTED_ALIGNMENT = "weighted_alignment"


@dataclass(frozen=True, slots=True)
class BindingSpan:
    """
    Half-open template interval a primer is believed to bind.

    Attributes
    ----------
    start, end : int
        Half-open range ``[start, end)`` into the template.
    confidence : float
        Heuristic confidence in [0, 1].
    method : BindingMethod
        Strategy that located the span.
    """
    start: int
    end: int
    confidence: float
    method: BindingMethod

    @property
    def match_length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class StructureDecomposition:
    """
    Stem/loop description of a hairpin-like fold.

    Attributes
    ----------
    stem_pairs : Tuple[Pair, ...]
        All supplied pairs sorted by 5' index (outer to inner for a hairpin).
    innermost_pair : Pair
        Pair with the smallest ``j - i``; the first one seen wins ties.
    loop_start, loop_end : int
        Half-open loop interval. ``loop_start == -1`` means no loop was found.
    loop_sequence : str
        ``sequence[loop_start:loop_end]``, empty when there is no loop.
    three_prime_region : int
        First index of the 3'-terminal region (last 10 nts).
    has_3prime_in_stem : bool
        Any stem pair touches the 3'-terminal region.
    has_3prime_in_loop : bool
        The loop starts inside the 3'-terminal region.
    """
    stem_pairs: Tuple[Pair, ...]
    innermost_pair: Pair
    loop_start: int
    loop_end: int
    loop_sequence: str
    three_prime_region: int
    has_3prime_in_stem: bool
    has_3prime_in_loop: bool

    @property
    def has_loop(self) -> bool:
        return self.loop_start >= 0

    @property
    def has_3prime_structure(self) -> bool:
        return self.has_3prime_in_stem or self.has_3prime_in_loop


class HairpinSeverity(str, Enum):
    """Stability band of a hairpin, from its folding free energy."""
    MINIMAL = "minimal"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


@dataclass(frozen=True, slots=True)
class HairpinAnalysis:
    """
    Folding free energy of a primer together with its stem/loop view.

    Attributes
    ----------
    free_energy : float
        Finite ΔG in kcal/mol; a non-finite engine result is reported as 0.0.
    severity : HairpinSeverity
        Band of `free_energy`.
    decomposition : Optional[StructureDecomposition]
        Stem/loop decomposition, or None when the fold has no pairs.
    """
    free_energy: float
    severity: HairpinSeverity
    decomposition: Optional[StructureDecomposition] = None


@dataclass(frozen=True, slots=True)
class PairArc:
    """A base pair annotated for arc-diagram display."""
    pair: Pair
    span: int
    involves_3prime: bool
