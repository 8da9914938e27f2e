from primer_align.folding.contracts import REFERENCE_TEMP_C, FoldFn, WindowEnergyFn
from primer_align.folding.hairpin_decomposition import (
    decompose_hairpin,
    fold_and_decompose,
    annotate_pair_arcs,
    classify_hairpin_energy,
)
from primer_align.folding.energy_profile import (
    ProfileConfig,
    PositionalEnergyProfiler,
    clamp_non_finite,
    positional_energy_profile,
)
from primer_align.folding.pairing_probability import pairing_probability, pairing_probabilities
from primer_align.folding.dot_bracket import pairs_to_dotbracket, dotbracket_to_pairs

__all__ = [
    "REFERENCE_TEMP_C",
    "FoldFn",
    "WindowEnergyFn",
    "decompose_hairpin",
    "fold_and_decompose",
    "annotate_pair_arcs",
    "classify_hairpin_energy",
    "ProfileConfig",
    "PositionalEnergyProfiler",
    "clamp_non_finite",
    "positional_energy_profile",
    "pairing_probability",
    "pairing_probabilities",
    "pairs_to_dotbracket",
    "dotbracket_to_pairs",
]
