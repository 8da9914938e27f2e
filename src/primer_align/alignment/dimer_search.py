from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Optional

from primer_align.energies.energy_ops import pair_energy_magnitude
from primer_align.energies.energy_types import DIMER_PAIR_ENERGIES, PairEnergyTable
from primer_align.rules import TERMINAL_WINDOW, can_pair, reverse_complement
from primer_align.structures import DimerAlignment, DimerPairing
from primer_align.utils.nucleotide_utils import normalize_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DimerSearchConfig:
    """
    Tunable constants for the offset-alignment dimer search.

    Attributes
    ----------
    pair_energies : PairEnergyTable
        Single base-pair energies (kcal/mol); magnitudes are accumulated.
    run_weight : float
        Bonus per base of the longest consecutive run of pairs.
    min_overlap : int
        Minimum potential overlap between the two strands; bounds the
        offset window.
    terminal_window : int
        Number of terminal nts at each end used for the 5'/3' flags.
    """
    pair_energies: PairEnergyTable = field(default_factory=lambda: DIMER_PAIR_ENERGIES)
    run_weight: float = 2.0
    min_overlap: int = 3
    terminal_window: int = TERMINAL_WINDOW


DEFAULT_DIMER_CONFIG = DimerSearchConfig()


def find_best_dimer_alignment(
    seq1: str,
    seq2: str,
    config: Optional[DimerSearchConfig] = None,
) -> Optional[DimerAlignment]:
    """
    Find the highest-scoring offset alignment between two single strands.

    Sequence 1 is slid along the reverse complement of sequence 2. At each
    offset every overlapping position is tested for Watson-Crick
    complementarity; paired positions add the magnitude of their pair energy,
    and the longest consecutive run adds ``run_weight`` per base.

    Parameters
    ----------
    seq1, seq2 : str
        Strands read 5'->3'. Pass the same sequence twice for self-dimers.
    config : DimerSearchConfig, optional
        Search constants. Defaults to `DEFAULT_DIMER_CONFIG`.

    Returns
    -------
    Optional[DimerAlignment]
        The best alignment, or None when no offset yields a complementary pair.

    Notes
    -----
    Offsets are scanned from ``-(len(seq2) - min_overlap)`` up to, but not
    including, ``len(seq1) - min_overlap``. The best alignment is replaced
    only on a strictly greater score, so the lowest offset wins ties.
    """
    cfg = config or DEFAULT_DIMER_CONFIG
    seq1 = normalize_sequence(seq1)
    seq2 = normalize_sequence(seq2)
    len1, len2 = len(seq1), len(seq2)

    rc2 = reverse_complement(seq2)
    best_score = 0.0
    best_alignment: Optional[DimerAlignment] = None

    for offset in range(-(len2 - cfg.min_overlap), len1 - cfg.min_overlap):
        score = 0.0
        pairs: List[DimerPairing] = []
        consecutive = 0
        max_consecutive = 0

        for i in range(len1):
            j = i - offset
            if j < 0 or j >= len(rc2):
                continue

            # Position j of rc2 faces this base of seq2
            idx2 = len2 - 1 - j
            partner = seq2[idx2]
            if can_pair(seq1[i], partner):
                score += pair_energy_magnitude(seq1[i], partner, cfg.pair_energies)
                pairs.append(DimerPairing(index_1=i, index_2=idx2, base_1=seq1[i], base_2=partner))
                consecutive += 1
                max_consecutive = max(max_consecutive, consecutive)
            else:
                consecutive = 0

        weighted_score = score + max_consecutive * cfg.run_weight

        if weighted_score > best_score:
            best_score = weighted_score
            best_alignment = _build_alignment(offset, weighted_score, pairs, max_consecutive, len1, len2, cfg)

    if best_alignment is None:
        logger.debug(f"No complementary offset between {len1} nt and {len2} nt strands")
    else:
        logger.debug(
            f"Best dimer offset={best_alignment.offset} score={best_alignment.score:.2f} "
            f"run={best_alignment.max_consecutive}"
        )

    return best_alignment


def _build_alignment(
    offset: int,
    score: float,
    pairs: List[DimerPairing],
    max_consecutive: int,
    len1: int,
    len2: int,
    cfg: DimerSearchConfig,
) -> DimerAlignment:
    window = cfg.terminal_window
    return DimerAlignment(
        offset=offset,
        score=score,
        pairs=tuple(pairs),
        max_consecutive=max_consecutive,
        involves_3prime_1=any(p.index_1 >= len1 - window for p in pairs),
        involves_3prime_2=any(p.index_2 >= len2 - window for p in pairs),
        involves_5prime_1=any(p.index_1 < window for p in pairs),
        involves_5prime_2=any(p.index_2 < window for p in pairs),
    )


# --------------------------
# Severity classification
# --------------------------
class DimerSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    SAFE = "safe"


class DimerType(str, Enum):
    THREE_PRIME_EXTENSIBLE = "3prime_extensible"
    INTERNAL_WITH_3PRIME = "internal_with_3prime"
    LIGATION_JUNCTION = "ligation_junction"
    INTERNAL = "internal"
    MINOR = "minor"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class DimerAssessment:
    """
    Risk classification of a dimer alignment.

    Attributes
    ----------
    severity : DimerSeverity
        Overall risk for PCR.
    dimer_type : DimerType
        Which ends of the strands are engaged.
    has_ligation_junction : bool
        True in mutagenesis mode when only the 5' ends overlap, which is the
        expected design for overlapping mutagenic primers.
    """
    severity: DimerSeverity
    dimer_type: DimerType
    has_ligation_junction: bool = False


def classify_dimer(alignment: Optional[DimerAlignment], mutagenesis_mode: bool = False) -> DimerAssessment:
    """
    Classify how harmful a dimer alignment is.

    A dimer whose 3' ends are both hybridized can be extended by the
    polymerase and is critical. Internal or 5'-only dimers are tolerated in
    most PCRs, and in mutagenesis designs a 5'-only overlap is intentional.

    Parameters
    ----------
    alignment : Optional[DimerAlignment]
        Result of `find_best_dimer_alignment`.
    mutagenesis_mode : bool
        Whether the primers are overlapping site-directed mutagenesis primers.

    Returns
    -------
    DimerAssessment
    """
    if alignment is None or not alignment.pairs:
        return DimerAssessment(DimerSeverity.SAFE, DimerType.NONE)

    any_3prime = alignment.involves_3prime_1 or alignment.involves_3prime_2
    only_5prime = (alignment.involves_5prime_1 or alignment.involves_5prime_2) and not any_3prime
    ligation_junction = mutagenesis_mode and only_5prime
    run = alignment.max_consecutive

    if alignment.involves_3prime_1 and alignment.involves_3prime_2 and run >= 4:
        return DimerAssessment(DimerSeverity.CRITICAL, DimerType.THREE_PRIME_EXTENSIBLE, ligation_junction)
    if any_3prime and run >= 3:
        return DimerAssessment(DimerSeverity.WARNING, DimerType.INTERNAL_WITH_3PRIME, ligation_junction)
    if ligation_junction:
        return DimerAssessment(DimerSeverity.SAFE, DimerType.LIGATION_JUNCTION, ligation_junction)
    if run >= 4:
        return DimerAssessment(DimerSeverity.WARNING, DimerType.INTERNAL, ligation_junction)

    return DimerAssessment(DimerSeverity.SAFE, DimerType.MINOR, ligation_junction)
