from __future__ import annotations
from types import MappingProxyType
from typing import Final, Mapping

PairEnergyTable = Mapping[str, float]

__all__ = [
    "PairEnergyTable",
    "DIMER_PAIR_ENERGIES",
    "freeze_table",
]


def freeze_table(table: Mapping[str, float]) -> PairEnergyTable:
    """Read-only copy of a pair-energy table."""
    return MappingProxyType(dict(table))


# Single base-pair free energies (kcal/mol) used to score dimer alignments.
# Symmetric by pair type; the search uses the magnitude of each entry.
DIMER_PAIR_ENERGIES: Final[PairEnergyTable] = freeze_table({
    "GC": -2.4, "CG": -2.4,
    "AT": -1.5, "TA": -1.5,
    "GT": -0.5, "TG": -0.5,
    # Purine-pyrimidine mismatches
    "GA": 0.0, "AG": 0.0, "CA": 0.0, "AC": 0.0, "CT": 0.0, "TC": 0.0,
    # Same-base mismatches
    "AA": 0.5, "TT": 0.5, "GG": 0.5, "CC": 0.5,
})
