from __future__ import annotations
from typing import Protocol

from primer_align.structures import FoldResult

# Reference temperature (°C) used when querying the folding engine.
REFERENCE_TEMP_C = 37.0


# --- Protocols for the external nearest-neighbour folding engine
class FoldFn(Protocol):
    def __call__(self, seq: str, temp_c: float) -> FoldResult: ...


class WindowEnergyFn(Protocol):
    def __call__(self, seq: str, temp_c: float) -> float: ...
