from primer_align.structures import (
    Pair,
    FoldResult,
    DimerAlignment,
    BindingMethod,
    BindingSpan,
    StructureDecomposition,
)
from primer_align.alignment import (
    BindingOptions,
    find_best_dimer_alignment,
    classify_dimer,
    locate_primer_binding,
)
from primer_align.folding import (
    decompose_hairpin,
    positional_energy_profile,
    pairing_probability,
)

__version__ = "0.1.0"

__all__ = [
    "Pair",
    "FoldResult",
    "DimerAlignment",
    "BindingMethod",
    "BindingSpan",
    "StructureDecomposition",
    "BindingOptions",
    "find_best_dimer_alignment",
    "classify_dimer",
    "locate_primer_binding",
    "decompose_hairpin",
    "positional_energy_profile",
    "pairing_probability",
]
