from __future__ import annotations
from dataclasses import dataclass, field, fields
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from primer_align.alignment.binding_locator import BindingSearchConfig
from primer_align.alignment.dimer_search import DimerSearchConfig
from primer_align.energies.data.parsers import (
    check_known_keys, get_float, get_int, get_section, parse_pair_energies,
)
from primer_align.energies.data.yaml_io import read_yaml
from primer_align.energies.energy_types import DIMER_PAIR_ENERGIES
from primer_align.folding.energy_profile import ProfileConfig

logger = logging.getLogger(__name__)

_TOP_LEVEL_SECTIONS = ("dimer", "binding", "profile", "pair_energies")


@dataclass(frozen=True, slots=True)
class PrimerAlignSettings:
    """
    Bundle of every tunable used by the alignment and structure components.

    Attributes
    ----------
    dimer : DimerSearchConfig
        Dimer search constants, including the pair-energy table.
    binding : BindingSearchConfig
        Primer binding fallback-search constants.
    profile : ProfileConfig
        Sliding-window energy profile settings.
    """
    dimer: DimerSearchConfig = field(default_factory=DimerSearchConfig)
    binding: BindingSearchConfig = field(default_factory=BindingSearchConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)


class SettingsLoader:
    """
    Loads `PrimerAlignSettings` from an optional YAML file.

    The file may contain any of the sections ``dimer``, ``binding``,
    ``profile`` and ``pair_energies``; absent sections and keys keep their
    defaults. Example::

        dimer:
          run_weight: 2.0
          terminal_window: 5
        binding:
          anchor_tolerance: 2
        profile:
          window_size: 10
          temp_c: 37.0
        pair_energies:
          GC: -2.4
    """
    def load(self, yaml_path: str | Path | None = None) -> PrimerAlignSettings:
        """
        Build settings from `yaml_path`, or return defaults when it is None.

        Raises
        ------
        ValueError
            If the file is not YAML, has unknown sections or keys, or holds
            values of the wrong type.
        """
        if yaml_path is None:
            return PrimerAlignSettings()

        logger.info(f"Loading settings from: {yaml_path}")
        data = read_yaml(yaml_path)
        check_known_keys(data, _TOP_LEVEL_SECTIONS, "settings")

        return PrimerAlignSettings(
            dimer=self._parse_dimer(data),
            binding=self._parse_binding(get_section(data, "binding")),
            profile=self._parse_profile(get_section(data, "profile")),
        )

    @staticmethod
    def _parse_dimer(data: Mapping[str, Any]) -> DimerSearchConfig:
        node = get_section(data, "dimer")
        defaults = DimerSearchConfig()
        check_known_keys(node, ("run_weight", "min_overlap", "terminal_window"), "dimer")

        return DimerSearchConfig(
            pair_energies=parse_pair_energies(data, DIMER_PAIR_ENERGIES),
            run_weight=get_float(node, "run_weight", defaults.run_weight),
            min_overlap=get_int(node, "min_overlap", defaults.min_overlap),
            terminal_window=get_int(node, "terminal_window", defaults.terminal_window),
        )

    @staticmethod
    def _parse_binding(node: Mapping[str, Any]) -> BindingSearchConfig:
        defaults = BindingSearchConfig()
        check_known_keys(node, (f.name for f in fields(BindingSearchConfig)), "binding")

        values: Dict[str, Any] = {}
        for f in fields(BindingSearchConfig):
            default = getattr(defaults, f.name)
            if isinstance(default, int):
                values[f.name] = get_int(node, f.name, default)
            else:
                values[f.name] = get_float(node, f.name, default)

        return BindingSearchConfig(**values)

    @staticmethod
    def _parse_profile(node: Mapping[str, Any]) -> ProfileConfig:
        defaults = ProfileConfig()
        check_known_keys(node, ("window_size", "temp_c", "min_window_len"), "profile")

        return ProfileConfig(
            window_size=get_int(node, "window_size", defaults.window_size),
            temp_c=get_float(node, "temp_c", defaults.temp_c),
            min_window_len=get_int(node, "min_window_len", defaults.min_window_len),
        )


def load_settings(yaml_path: Optional[str | Path] = None) -> PrimerAlignSettings:
    """Shortcut for ``SettingsLoader().load(yaml_path)``."""
    return SettingsLoader().load(yaml_path)
