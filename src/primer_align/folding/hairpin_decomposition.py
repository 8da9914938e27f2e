from __future__ import annotations
import logging
import math
from typing import Dict, Final, Iterable, List, Optional, Tuple

from primer_align.folding.contracts import REFERENCE_TEMP_C, FoldFn
from primer_align.rules import THREE_PRIME_REGION_SIZE, is_in_three_prime_region, three_prime_region_start
from primer_align.structures import (
    HairpinAnalysis, HairpinSeverity, PairArc, PairLike, StructureDecomposition, coerce_pairs,
)

logger = logging.getLogger(__name__)


def decompose_hairpin(
    sequence: str,
    pairs: Optional[Iterable[PairLike]],
    region_size: int = THREE_PRIME_REGION_SIZE,
) -> Optional[StructureDecomposition]:
    """
    Split a folded primer into stem pairs and a hairpin loop.

    Pairs are sorted by 5' index and walked in order. A pair with at least
    one enclosed nucleotide and no enclosed pair closes a hairpin loop; when
    several such pairs exist, the one with the largest 5' index wins.

    Parameters
    ----------
    sequence : str
        Folded sequence.
    pairs : Iterable[Pair | tuple[int, int]]
        Nested base pairs from the folding engine.
    region_size : int, optional
        Length of the 3'-terminal region checked for structure, by default 10.

    Returns
    -------
    Optional[StructureDecomposition]
        The decomposition, or None if `pairs` is empty.
    """
    sorted_pairs = sorted(coerce_pairs(pairs), key=lambda pr: pr.base_i)
    if not sorted_pairs:
        return None

    partner: Dict[int, int] = {}
    for pr in sorted_pairs:
        partner[pr.base_i] = pr.base_j
        partner[pr.base_j] = pr.base_i

    # min() keeps the first of equally tight pairs
    innermost = min(sorted_pairs, key=lambda pr: pr.span)

    loop_start = -1
    loop_end = -1
    for pr in sorted_pairs:
        i, j = pr.base_i, pr.base_j
        if pr.loop_len <= 0:
            continue
        if loop_start != -1 and i <= loop_start:
            continue
        if not _encloses_any_pair(i, j, partner):
            loop_start = i + 1
            loop_end = j

    loop_sequence = sequence[loop_start:loop_end] if loop_start >= 0 else ""

    seq_len = len(sequence)
    region_start = three_prime_region_start(seq_len, region_size)
    has_3prime_in_stem = any(pr.base_i >= region_start or pr.base_j >= region_start for pr in sorted_pairs)
    has_3prime_in_loop = loop_start >= 0 and loop_start >= region_start

    logger.debug(
        f"Decomposed {len(sorted_pairs)} pairs: loop=[{loop_start}, {loop_end}) "
        f"3' stem={has_3prime_in_stem} 3' loop={has_3prime_in_loop}"
    )

    return StructureDecomposition(
        stem_pairs=tuple(sorted_pairs),
        innermost_pair=innermost,
        loop_start=loop_start,
        loop_end=loop_end,
        loop_sequence=loop_sequence,
        three_prime_region=region_start,
        has_3prime_in_stem=has_3prime_in_stem,
        has_3prime_in_loop=has_3prime_in_loop,
    )


# Lower bounds (kcal/mol, inclusive) of each stability band, least stable first.
HAIRPIN_SEVERITY_BANDS: Final[Tuple[Tuple[float, HairpinSeverity], ...]] = (
    (-1.0, HairpinSeverity.MINIMAL),
    (-2.0, HairpinSeverity.LOW),
    (-3.0, HairpinSeverity.MODERATE),
    (-4.0, HairpinSeverity.HIGH),
)


def classify_hairpin_energy(free_energy: float) -> HairpinSeverity:
    """
    Map a hairpin folding free energy to a stability band.

    Parameters
    ----------
    free_energy : float
        ΔG in kcal/mol; more negative is more stable.

    Returns
    -------
    HairpinSeverity
        ``MINIMAL`` for ΔG >= -1, ``LOW`` for >= -2, ``MODERATE`` for >= -3,
        ``HIGH`` for >= -4 and ``SEVERE`` below that.
    """
    for lower_bound, severity in HAIRPIN_SEVERITY_BANDS:
        if free_energy >= lower_bound:
            return severity
    return HairpinSeverity.SEVERE


def fold_and_decompose(
    sequence: str,
    fold_fn: FoldFn,
    temp_c: float = REFERENCE_TEMP_C,
) -> HairpinAnalysis:
    """
    Fold `sequence` with the external engine, then grade and decompose the result.

    A non-finite free energy from the engine is reported as 0.0.
    """
    fold = fold_fn(sequence, temp_c)
    free_energy = float(fold.free_energy)
    if not math.isfinite(free_energy):
        logger.debug(f"Non-finite fold energy {free_energy} clamped to 0.0")
        free_energy = 0.0

    return HairpinAnalysis(
        free_energy=free_energy,
        severity=classify_hairpin_energy(free_energy),
        decomposition=decompose_hairpin(sequence, fold.pairs),
    )


def _encloses_any_pair(i: int, j: int, partner: Dict[int, int]) -> bool:
    for k in range(i + 1, j):
        mate = partner.get(k)
        if mate is not None and k < mate < j:
            return True
    return False


def annotate_pair_arcs(
    sequence: str,
    pairs: Optional[Iterable[PairLike]],
    region_size: int = THREE_PRIME_REGION_SIZE,
) -> List[PairArc]:
    """
    Annotate each base pair with its span and 3'-region involvement.

    Pairs that fall outside the sequence are skipped.
    """
    seq_len = len(sequence)
    arcs: List[PairArc] = []
    for pr in coerce_pairs(pairs):
        if pr.base_i < 0 or pr.base_j >= seq_len:
            continue
        involves_3prime = (is_in_three_prime_region(pr.base_i, seq_len, region_size)
                           or is_in_three_prime_region(pr.base_j, seq_len, region_size))
        arcs.append(PairArc(pair=pr, span=pr.span, involves_3prime=involves_3prime))

    return arcs
