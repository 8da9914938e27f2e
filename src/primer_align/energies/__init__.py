from primer_align.energies.energy_types import DIMER_PAIR_ENERGIES, PairEnergyTable
from primer_align.energies.energy_ops import pair_energy, pair_energy_magnitude

__all__ = [
    "DIMER_PAIR_ENERGIES",
    "PairEnergyTable",
    "pair_energy",
    "pair_energy_magnitude",
]
