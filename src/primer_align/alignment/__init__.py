from primer_align.alignment.dimer_search import (
    DimerSearchConfig,
    DimerSeverity,
    DimerType,
    DimerAssessment,
    find_best_dimer_alignment,
    classify_dimer,
)
from primer_align.alignment.binding_locator import (
    BindingOptions,
    BindingSearchConfig,
    BINDING_STRATEGIES,
    first_success,
    locate_primer_binding,
)

__all__ = [
    "DimerSearchConfig",
    "DimerSeverity",
    "DimerType",
    "DimerAssessment",
    "find_best_dimer_alignment",
    "classify_dimer",
    "BindingOptions",
    "BindingSearchConfig",
    "BINDING_STRATEGIES",
    "first_success",
    "locate_primer_binding",
]
