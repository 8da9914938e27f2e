from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from primer_align.rules import reverse_complement
from primer_align.structures import BindingMethod, BindingSpan
from primer_align.utils.nucleotide_utils import normalize_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BindingOptions:
    """
    Caller-supplied hints for locating a primer.

    Attributes
    ----------
    position_hint : Optional[Tuple[int, int]]
        Known ``(start, end)`` of the primer on the template. When present it
        is returned as-is and no search is performed.
    mutation_position : Optional[int]
        Zero-based template index of a designed mutation. Only consulted when
        `is_mutagenesis` is True and the primer does not match exactly, in
        which case the binding site is estimated around this position.
    is_mutagenesis : bool
        Whether the primer is a site-directed mutagenesis primer that is not
        expected to match the template perfectly.
    """
    position_hint: Optional[Tuple[int, int]] = None
    mutation_position: Optional[int] = None
    is_mutagenesis: bool = False


@dataclass(frozen=True, slots=True)
class BindingSearchConfig:
    """
    Constants of the fallback search.

    Attributes
    ----------
    mutation_flank_fraction : float
        Fraction of the primer placed 5' of the mutation for forward primers.
    reverse_mutation_flank : int
        Distance between the mutation and the estimated end of a reverse primer.
    dual_anchor_max_fraction : float
        Longest anchor tried, as a fraction of the primer length.
    min_anchor_fraction : float
        Shortest anchor tried, as a fraction of the primer length.
    min_anchor_len : int
        Shortest anchor tried, in nts; the larger of the two minima wins.
    anchor_tolerance : int
        Allowed deviation (nts) between the observed and expected distance of
        the 5' and 3' anchors.
    three_prime_window : int
        Number of 3'-terminal positions weighted more heavily when scoring.
    three_prime_weight : int
        Score per match inside the 3' window (other matches score 1).
    min_three_prime_matches : int
        Matches required inside the 3' window for a window to be accepted.
    mutation_confidence : float
        Confidence reported for mutation-anchored estimates.
    """
    mutation_flank_fraction: float = 0.4
    reverse_mutation_flank: int = 10
    dual_anchor_max_fraction: float = 0.5
    min_anchor_fraction: float = 0.4
    min_anchor_len: int = 8
    anchor_tolerance: int = 2
    three_prime_window: int = 10
    three_prime_weight: int = 2
    min_three_prime_matches: int = 7
    mutation_confidence: float = 0.85


DEFAULT_BINDING_CONFIG = BindingSearchConfig()


@dataclass(frozen=True, slots=True)
class BindingSearch:
    """
    Normalized inputs shared by every strategy.

    Attributes
    ----------
    template : str
        Upper-cased template.
    search_seq : str
        Primer as it appears on the template strand (reverse complemented for
        reverse primers).
    is_reverse : bool
        Primer orientation.
    options : BindingOptions
        Caller hints.
    config : BindingSearchConfig
        Search constants.
    """
    template: str
    search_seq: str
    is_reverse: bool
    options: BindingOptions = field(default_factory=BindingOptions)
    config: BindingSearchConfig = field(default_factory=BindingSearchConfig)

    @property
    def primer_len(self) -> int:
        return len(self.search_seq)

    @property
    def min_anchor_len(self) -> int:
        return max(self.config.min_anchor_len, math.floor(self.primer_len * self.config.min_anchor_fraction))


BindingStrategy = Callable[[BindingSearch], Optional[BindingSpan]]


# --------------------------
# Strategies (priority order)
# --------------------------
def match_explicit_hint(search: BindingSearch) -> Optional[BindingSpan]:
    """Trust a caller-supplied ``(start, end)`` unconditionally."""
    hint = search.options.position_hint
    if hint is None:
        return None
    start, end = hint
    return BindingSpan(start=start, end=end, confidence=1.0, method=BindingMethod.EXPLICIT)


def match_exact(search: BindingSearch) -> Optional[BindingSpan]:
    """Leftmost exact occurrence of the search sequence."""
    idx = search.template.find(search.search_seq)
    if idx == -1:
        return None
    return BindingSpan(start=idx, end=idx + search.primer_len, confidence=1.0, method=BindingMethod.EXACT)


def match_mutation_anchor(search: BindingSearch) -> Optional[BindingSpan]:
    """
    Estimate the site of a mutagenic primer from the mutation position.

    Forward primers are assumed to carry the mutation 40% of the way along;
    reverse primers are assumed to end a fixed flank before the mutation.
    The estimate is clamped into the template.
    """
    opts, cfg = search.options, search.config
    if not opts.is_mutagenesis or opts.mutation_position is None:
        return None

    primer_len = search.primer_len
    if search.is_reverse:
        estimated_end = opts.mutation_position - cfg.reverse_mutation_flank
        estimated_start = estimated_end - primer_len
    else:
        estimated_start = opts.mutation_position - math.floor(primer_len * cfg.mutation_flank_fraction)

    template_len = len(search.template)
    start = max(0, min(template_len - primer_len, estimated_start))
    end = min(start + primer_len, template_len)

    return BindingSpan(start=start, end=end, confidence=cfg.mutation_confidence, method=BindingMethod.MUTATION_ANCHOR)


def match_dual_anchor(search: BindingSearch) -> Optional[BindingSpan]:
    """
    Fuzzy match using the primer's 5' and 3' ends as independent anchors.

    Anchor lengths shrink from half the primer down to the minimum anchor
    length. The first pair of anchor hits whose spacing agrees with the
    primer length (within the tolerance) wins.
    """
    cfg = search.config
    primer_len = search.primer_len
    longest = math.floor(primer_len * cfg.dual_anchor_max_fraction)

    for anchor_len in range(longest, search.min_anchor_len - 1, -1):
        if anchor_len <= 0:
            break
        anchor_5 = search.search_seq[:anchor_len]
        anchor_3 = search.search_seq[-anchor_len:]
        positions_5 = find_all_occurrences(search.template, anchor_5)
        positions_3 = find_all_occurrences(search.template, anchor_3)
        expected_distance = primer_len - anchor_len

        for pos_5 in positions_5:
            for pos_3 in positions_3:
                if abs((pos_3 - pos_5) - expected_distance) <= cfg.anchor_tolerance:
                    logger.debug(f"Dual anchor hit: anchor_len={anchor_len} 5'@{pos_5} 3'@{pos_3}")
                    return BindingSpan(
                        start=pos_5,
                        end=pos_3 + anchor_len,
                        confidence=min(1.0, (anchor_len * 2) / primer_len),
                        method=BindingMethod.DUAL_ANCHOR,
                    )

    return None


def match_three_prime_anchor(search: BindingSearch) -> Optional[BindingSpan]:
    """
    Match the longest 3'-terminal substring of the primer found in the template.

    The 5' end is back-projected from the anchor hit and clamped to 0.
    """
    primer_len = search.primer_len

    for anchor_len in range(primer_len - 1, search.min_anchor_len - 1, -1):
        if anchor_len <= 0:
            break
        idx_3 = search.template.find(search.search_seq[-anchor_len:])
        if idx_3 == -1:
            continue

        start = max(0, idx_3 - (primer_len - anchor_len))
        return BindingSpan(
            start=start,
            end=idx_3 + anchor_len,
            confidence=anchor_len / primer_len,
            method=BindingMethod.ANCHOR_3PRIME,
        )

    return None


def match_weighted_alignment(search: BindingSearch) -> Optional[BindingSpan]:
    """
    Ungapped sliding alignment with extra weight on the 3' end.

    Each window scores one point per matching base and `three_prime_weight`
    points per match inside the 3' window. Windows with too few 3' matches
    are rejected because such a primer could not be extended.
    """
    cfg = search.config
    template, search_seq = search.template, search.search_seq
    primer_len = search.primer_len
    three_prime_start = primer_len - cfg.three_prime_window

    best_score = 0
    best_start: Optional[int] = None

    for i in range(len(template) - primer_len + 1):
        score = 0
        matches_3prime = 0
        for j in range(primer_len):
            if template[i + j] != search_seq[j]:
                continue
            if j >= three_prime_start:
                score += cfg.three_prime_weight
                matches_3prime += 1
            else:
                score += 1

        if score > best_score and matches_3prime >= cfg.min_three_prime_matches:
            best_score = score
            best_start = i

    if best_start is None:
        return None

    return BindingSpan(
        start=best_start,
        end=best_start + primer_len,
        confidence=best_score / (primer_len + cfg.three_prime_window),
        method=BindingMethod.WEIGHTED_ALIGNMENT,
    )


BINDING_STRATEGIES: Tuple[BindingStrategy, ...] = (
    match_explicit_hint,
    match_exact,
    match_mutation_anchor,
    match_dual_anchor,
    match_three_prime_anchor,
    match_weighted_alignment,
)


def first_success(
    strategies: Sequence[BindingStrategy],
    search: BindingSearch,
) -> Optional[BindingSpan]:
    """
    Run `strategies` in order and return the first non-None span.
    """
    for strategy in strategies:
        span = strategy(search)
        if span is not None:
            return span
    return None


def locate_primer_binding(
    template: str,
    primer: str,
    is_reverse: bool = False,
    options: Optional[BindingOptions] = None,
    config: Optional[BindingSearchConfig] = None,
) -> Optional[BindingSpan]:
    """
    Locate where a primer binds a template.

    Strategies are tried in strict priority order (explicit hint, exact match,
    mutation anchor, dual anchor, 3' anchor, weighted alignment); an earlier
    strategy always wins even if a later one would score higher.

    Parameters
    ----------
    template : str
        Template sequence (top strand, 5'->3').
    primer : str
        Primer sequence, 5'->3'.
    is_reverse : bool
        True for a reverse primer, which binds as its reverse complement.
    options : BindingOptions, optional
        Position hint and mutagenesis context.
    config : BindingSearchConfig, optional
        Search constants.

    Returns
    -------
    Optional[BindingSpan]
        The located span as indices into `template` exactly as passed, or
        None if every strategy fails.
    """
    # Upper-case only: spans must index the caller's template unchanged
    template_norm = template.upper() if template else ""
    primer_norm = normalize_sequence(primer)
    if not template_norm.strip() or not primer_norm:
        return None

    search = BindingSearch(
        template=template_norm,
        search_seq=reverse_complement(primer_norm) if is_reverse else primer_norm,
        is_reverse=is_reverse,
        options=options or BindingOptions(),
        config=config or DEFAULT_BINDING_CONFIG,
    )

    span = first_success(BINDING_STRATEGIES, search)
    if span is None:
        logger.debug(f"No binding site found for {len(primer_norm)} nt primer")
    else:
        logger.debug(f"Primer bound at [{span.start}, {span.end}) via {span.method.value}")

    return span


def find_all_occurrences(text: str, pattern: str) -> List[int]:
    """All (possibly overlapping) start indices of `pattern` in `text`."""
    positions: List[int] = []
    if not pattern:
        return positions

    idx = text.find(pattern)
    while idx != -1:
        positions.append(idx)
        idx = text.find(pattern, idx + 1)

    return positions
