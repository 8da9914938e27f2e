from primer_align.structures.pairing import Pair, PairLike, coerce_pairs
from primer_align.structures.types import (
    FoldResult,
    DimerPairing,
    DimerAlignment,
    BindingMethod,
    BindingSpan,
    StructureDecomposition,
    HairpinSeverity,
    HairpinAnalysis,
    PairArc,
)

__all__ = [
    "Pair",
    "PairLike",
    "coerce_pairs",
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
