from __future__ import annotations
from typing import Iterable, List, Optional

from primer_align.structures import Pair, PairLike, coerce_pairs


def pairs_to_dotbracket(seq_len: int, pairs: Optional[Iterable[PairLike]]) -> str:
    """
    Converts a list of base pairs into a single-layer dot-bracket string.

    Parameters
    ----------
    seq_len : int
        The total length of the sequence.
    pairs : Iterable[Pair | tuple[int, int]]
        Nested base pairs. Pairs outside ``[0, seq_len)`` are ignored.

    Returns
    -------
    str
        Dot-bracket string with ``(`` / ``)`` for paired and ``.`` for unpaired bases.
    """
    chars = ['.'] * seq_len
    for pr in coerce_pairs(pairs):
        i, j = pr.base_i, pr.base_j
        if 0 <= i < j < seq_len:
            chars[i] = '('
            chars[j] = ')'
    return ''.join(chars)


def dotbracket_to_pairs(db: str) -> tuple[Pair, ...]:
    """
    Parses a single-layer dot-bracket string into base pairs.

    Parameters
    ----------
    db : str
        String of ``(``, ``)`` and ``.`` characters.

    Returns
    -------
    tuple[Pair, ...]
        Pairs sorted by 5' index.

    Raises
    ------
    ValueError
        If the string contains other characters or the brackets are unbalanced.
    """
    stack: List[int] = []
    out: List[Pair] = []
    for idx, ch in enumerate(db):
        if ch == '(':
            stack.append(idx)
        elif ch == ')':
            if not stack:
                raise ValueError(f"Unmatched ')' at position {idx}.")
            out.append(Pair(stack.pop(), idx))
        elif ch != '.':
            raise ValueError(f"Invalid dot-bracket character '{ch}' at position {idx}.")

    if stack:
        raise ValueError(f"Unmatched '(' at position {stack[-1]}.")

    return tuple(sorted(out, key=lambda pr: pr.base_i))
