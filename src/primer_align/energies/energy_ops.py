from __future__ import annotations

from primer_align.energies.energy_types import DIMER_PAIR_ENERGIES, PairEnergyTable
from primer_align.utils.nucleotide_utils import pair_key


def pair_energy(base_a: str, base_b: str, table: PairEnergyTable = DIMER_PAIR_ENERGIES) -> float:
    """
    Look up the free energy of a single base pair.

    Parameters
    ----------
    base_a, base_b : str
        Single nucleotides; order does not matter for the bundled table.
    table : PairEnergyTable, optional
        Energies keyed by two-letter pair (``"GC"``, ``"AT"``, ...).

    Returns
    -------
    float
        Tabulated energy in kcal/mol, or 0.0 for pairs missing from the table.
    """
    return table.get(pair_key(base_a, base_b), 0.0)


def pair_energy_magnitude(base_a: str, base_b: str, table: PairEnergyTable = DIMER_PAIR_ENERGIES) -> float:
    """Absolute value of `pair_energy`; the contribution of one pair to a dimer score."""
    return abs(pair_energy(base_a, base_b, table))
