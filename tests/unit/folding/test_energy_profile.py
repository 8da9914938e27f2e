"""
Unit tests for the sliding-window positional energy profile.

The folding engine is replaced by small stubs so window boundaries, the
minimum window length and non-finite clamping can be checked exactly.
"""
import math

import numpy as np
import numpy.testing as npt
import pytest

from primer_align.folding.energy_profile import (
    PositionalEnergyProfiler,
    ProfileConfig,
    clamp_non_finite,
    positional_energy_profile,
)


def _negative_length(seq, temp_c):
    return -float(len(seq))


def test_profile_length_matches_sequence():
    """
    One value is produced per position.
    """
    sequence = "ACGTACGTACGTACGTACGT"
    profile = positional_energy_profile(sequence, _negative_length)

    assert isinstance(profile, np.ndarray)
    assert profile.shape == (len(sequence),)


def test_window_boundaries():
    """
    Windows extend 5 nt either side and are truncated at the ends.

    For 12 nt the windows grow from 6 nt at the ends to 11 nt in the middle.
    """
    profile = positional_energy_profile("ACGTACGTACGT", _negative_length)

    expected = [-6, -7, -8, -9, -10, -11, -11, -10, -9, -8, -7, -6]
    npt.assert_array_equal(profile, np.array(expected, dtype=float))


def test_short_windows_are_not_folded():
    """
    Windows under 6 nt contribute 0.0 without calling the engine.
    """
    calls = []

    def recording(seq, temp_c):
        calls.append(seq)
        return -1.0

    profile = positional_energy_profile("ACGTA", recording)

    npt.assert_array_equal(profile, np.zeros(5))
    assert calls == []


@pytest.mark.parametrize("bad_value", [math.nan, math.inf, -math.inf])
def test_non_finite_engine_results_become_zero(bad_value):
    """
    Failed engine calls never leak NaN or inf into the profile.
    """
    profile = positional_energy_profile("ACGTACGTACGT", lambda seq, temp_c: bad_value)

    assert np.all(np.isfinite(profile))
    npt.assert_array_equal(profile, np.zeros(12))


def test_mixed_finite_and_non_finite_results():
    """
    Only the non-finite positions are replaced.
    """
    def flaky(seq, temp_c):
        return math.nan if len(seq) == 11 else -1.5

    profile = positional_energy_profile("ACGTACGTACGT", flaky)

    assert profile[5] == 0.0 and profile[6] == 0.0
    assert profile[0] == pytest.approx(-1.5)


def test_temperature_is_forwarded():
    """
    The configured temperature is passed to every engine call.
    """
    temps = set()

    def recording(seq, temp_c):
        temps.add(temp_c)
        return 0.0

    profiler = PositionalEnergyProfiler(energy_fn=recording, config=ProfileConfig(temp_c=25.0))
    profiler.profile("ACGTACGTAC")

    assert temps == {25.0}


def test_custom_window_size():
    """
    A 14-nt window reaches 7 nt either side.
    """
    profile = positional_energy_profile("A" * 20, _negative_length, window_size=14)
    assert profile[10] == -15.0
    assert profile[0] == -8.0


def test_empty_sequence_gives_empty_profile():
    """
    No positions, no values.
    """
    assert positional_energy_profile("", _negative_length).shape == (0,)


def test_progress_bar_does_not_change_results():
    """
    Enabling tqdm output leaves the values untouched.
    """
    quiet = positional_energy_profile("ACGTACGTACGT", _negative_length)
    loud = positional_energy_profile("ACGTACGTACGT", _negative_length, show_progress=True)
    npt.assert_array_equal(quiet, loud)


def test_clamp_non_finite():
    """
    NaN and both infinities are replaced by 0.0; finite values are kept.
    """
    clamped = clamp_non_finite([1.0, math.nan, math.inf, -math.inf, -2.5])

    assert clamped.dtype == np.float64
    npt.assert_array_equal(clamped, np.array([1.0, 0.0, 0.0, 0.0, -2.5]))
