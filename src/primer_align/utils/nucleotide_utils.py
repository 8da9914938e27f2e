from typing import Optional


def normalize_base(base_raw: str) -> str:
    """
    Upper-case a single DNA nucleotide so lookups can be applied uniformly.

    Parameters
    ----------
    base_raw : str
        One DNA base as typed by the user, any case.

    Returns
    -------
    str
        Upper-cased base. Non-string or multi-character inputs are returned
        unchanged.
    """
    if not isinstance(base_raw, str):
        return base_raw

    if len(base_raw) != 1:
        return base_raw

    return base_raw.upper()


def normalize_sequence(seq_raw: Optional[str]) -> str:
    """
    Trim surrounding whitespace and upper-case a sequence; `None` becomes "".
    """
    if not seq_raw:
        return ""
    return seq_raw.strip().upper()


def pair_key(base_a: str, base_b: str) -> str:
    """
    Build a two-letter base-pair key such as ``"GC"`` or ``"AT"``.

    Parameters
    ----------
    base_a : str
        Base on the first strand.
    base_b : str
        Base on the opposing strand.

    Returns
    -------
    str
        Two-character upper-case key.
    """
    return normalize_base(base_a) + normalize_base(base_b)


def gc_count(seq: str) -> int:
    """Number of G or C bases in `seq` (case-sensitive, callers normalize)."""
    return sum(1 for base in seq if base == "G" or base == "C")
