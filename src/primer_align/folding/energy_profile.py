from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Iterable, Optional

import numpy as np
from tqdm import tqdm

from primer_align.folding.contracts import REFERENCE_TEMP_C, WindowEnergyFn

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileConfig:
    """
    Configuration for the sliding-window energy profile.

    Attributes
    ----------
    window_size : int
        Nominal window width; the window spans ``window_size // 2`` nts on
        each side of the position. Defaults to 10.
    temp_c : float
        Temperature passed to the folding engine. Defaults to 37 °C.
    min_window_len : int
        Windows shorter than this (at the sequence ends of short inputs) are
        not folded and contribute 0.0.
    """
    window_size: int = 10
    temp_c: float = REFERENCE_TEMP_C
    min_window_len: int = 6


def clamp_non_finite(values: Iterable[float]) -> np.ndarray:
    """
    Replace NaN and ±inf with 0.0.

    Parameters
    ----------
    values : Iterable[float]
        Raw energies returned by the folding engine.

    Returns
    -------
    np.ndarray
        Float64 array of the same length with every value finite.
    """
    arr = np.asarray(list(values), dtype=np.float64)
    return np.where(np.isfinite(arr), arr, 0.0)


@dataclass(slots=True)
class PositionalEnergyProfiler:
    """
    Computes a per-position free-energy profile by folding sliding windows.

    Each call to `profile` issues one engine call per position whose window
    reaches `min_window_len`, so long sequences are expensive and should be
    profiled off any latency-critical path.

    Attributes
    ----------
    energy_fn : WindowEnergyFn
        External engine returning the folding free energy of a subsequence.
    config : ProfileConfig
        Window and temperature settings.
    show_progress : bool
        If True, display a tqdm progress bar.
    """
    energy_fn: WindowEnergyFn
    config: ProfileConfig = field(default_factory=ProfileConfig)
    show_progress: bool = False

    def profile(self, sequence: str) -> np.ndarray:
        """
        Free energy of the window centred on every position of `sequence`.

        Returns
        -------
        np.ndarray
            One finite value per input position.
        """
        seq_len = len(sequence)
        half_window = self.config.window_size // 2
        raw_energies = []

        positions = tqdm(range(seq_len), desc="Energy profile", leave=False, disable=not self.show_progress)
        for i in positions:
            start = max(0, i - half_window)
            end = min(seq_len, i + half_window + 1)
            window = sequence[start:end]
            if len(window) >= self.config.min_window_len:
                raw_energies.append(float(self.energy_fn(window, self.config.temp_c)))
            else:
                raw_energies.append(0.0)

        raw = np.asarray(raw_energies, dtype=np.float64)
        n_clamped = int(np.count_nonzero(~np.isfinite(raw)))
        if n_clamped:
            logger.debug(f"Clamped {n_clamped} non-finite window energies to 0.0")

        return clamp_non_finite(raw)


def positional_energy_profile(
    sequence: str,
    energy_fn: WindowEnergyFn,
    window_size: int = 10,
    config: Optional[ProfileConfig] = None,
    show_progress: bool = False,
) -> np.ndarray:
    """
    Convenience wrapper around `PositionalEnergyProfiler`.

    Parameters
    ----------
    sequence : str
        Sequence to profile.
    energy_fn : WindowEnergyFn
        External per-window free-energy function.
    window_size : int, optional
        Window width, by default 10. Ignored when `config` is given.
    config : ProfileConfig, optional
        Full profile configuration.
    show_progress : bool, optional
        Display a progress bar.

    Returns
    -------
    np.ndarray
        Finite energies, one per position.
    """
    cfg = config or ProfileConfig(window_size=window_size)
    return PositionalEnergyProfiler(energy_fn=energy_fn, config=cfg, show_progress=show_progress).profile(sequence)
