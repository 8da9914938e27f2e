from __future__ import annotations
from typing import Any, Dict, Iterable, Mapping

from primer_align.energies.energy_types import PairEnergyTable, freeze_table

_BASES = frozenset("ACGT")


# ---------- Generic helpers ----------

def get_section(data: Mapping[str, Any], name: str) -> Dict[str, Any]:
    """
    Fetch an optional mapping section from the YAML tree.

    Raises
    ------
    ValueError
        If the section is present but is not a mapping.
    """
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{name}' must be a mapping.")
    return section


def check_known_keys(section: Mapping[str, Any], allowed: Iterable[str], where: str) -> None:
    """
    Reject keys that do not correspond to a setting.

    Raises
    ------
    ValueError
        Naming the first unknown key.
    """
    allowed_set = set(allowed)
    for key in section:
        if key not in allowed_set:
            raise ValueError(f"Unknown key '{key}' in '{where}'. Allowed: {sorted(allowed_set)}.")


def get_float(node: Mapping[str, Any], key: str, default: float) -> float:
    value = node.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{key}' must be a number, got {value!r}.") from e


def get_int(node: Mapping[str, Any], key: str, default: int) -> int:
    value = node.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise ValueError(f"'{key}' must be an integer, got {value!r}.")
    return int(value)


# ---------- Pair energy table ----------

def parse_pair_energies(data: Mapping[str, Any], base_table: PairEnergyTable) -> PairEnergyTable:
    """
    Parse ``pair_energies`` overrides and merge them over `base_table`.

    Keys are two-letter base pairs (case-insensitive), values kcal/mol.
    Each override is applied symmetrically, so ``GC: -3.0`` also sets ``CG``.

    Parameters
    ----------
    data : Mapping[str, Any]
        Parsed YAML tree.
    base_table : PairEnergyTable
        Table to start from.

    Returns
    -------
    PairEnergyTable
        Read-only merged table.

    Raises
    ------
    ValueError
        If a key is not a pair of A/C/G/T or a value is not numeric.
    """
    section = get_section(data, "pair_energies")
    merged = dict(base_table)
    for raw_key in section:
        key = str(raw_key).upper()
        if len(key) != 2 or not set(key) <= _BASES:
            raise ValueError(f"Invalid pair key '{raw_key}' in 'pair_energies'.")
        energy = get_float(section, raw_key, 0.0)
        merged[key] = energy
        merged[key[::-1]] = energy

    return freeze_table(merged)
