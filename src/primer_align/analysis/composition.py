from __future__ import annotations
from enum import Enum
from typing import List

from primer_align.rules import TERMINAL_WINDOW
from primer_align.utils.nucleotide_utils import gc_count

_GC = frozenset("GC")

# Per-base binding strength scale used by the heatmap view.
GC_STRENGTH = 0.8
AT_STRENGTH = 0.4
THREE_PRIME_BONUS = 0.2


class GCClamp(str, Enum):
    STRONG = "strong"
    WEAK = "weak"
    NONE = "none"


def gc_content(seq: str) -> float:
    """
    GC content in percent.

    Returns 0.0 for an empty sequence.
    """
    if not seq:
        return 0.0
    return 100.0 * gc_count(seq) / len(seq)


def gc_clamp(seq: str) -> GCClamp:
    """
    Classify the 3' GC clamp from the last two bases.

    Both G/C is a strong clamp, one G/C a weak clamp.
    """
    n_gc = sum(1 for base in seq[-2:] if base in _GC)
    if n_gc == 2:
        return GCClamp.STRONG
    if n_gc == 1:
        return GCClamp.WEAK
    return GCClamp.NONE


def binding_strength(seq: str) -> List[float]:
    """
    Relative binding strength of each base.

    G/C bases score 0.8 and A/T bases 0.4; bases within the 3'-terminal
    window get a further 0.2, capped at 1.0.
    """
    seq_len = len(seq)
    strengths: List[float] = []
    for i, base in enumerate(seq):
        score = GC_STRENGTH if base in _GC else AT_STRENGTH
        if i >= seq_len - TERMINAL_WINDOW:
            score = min(1.0, score + THREE_PRIME_BONUS)
        strengths.append(score)

    return strengths
