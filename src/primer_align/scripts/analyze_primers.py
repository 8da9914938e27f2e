#!/usr/bin/env python3
"""
Analyze primers from the command line: dimers, template binding and hairpins.

Base pairs for the structure commands are given in dot-bracket notation, as
produced by any nearest-neighbour folding tool.

Examples:
  - primer-align dimer AAAAACCCCC GGGGGTTTTT
  - primer-align --json locate ATCGATCGGGGCCCATG CCCATG
  - primer-align locate --reverse --mutation-position 120 TEMPLATE PRIMER
  - primer-align hairpin --dg -3.4 GGGGAAAACCCC "((((....))))"
  - primer-align pairing --index 5 GGGGAAAACCCC "((((....))))"
  - primer-align -vv --config settings.yaml dimer ACGTACGTAC GTACGTACGT
"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional

# --- Local Application Imports ---
from primer_align.utils.logging_utils import PACKAGE_LOGGER, level_for_verbosity, setup_logger
from primer_align.energies.settings_loader import PrimerAlignSettings, load_settings
from primer_align.alignment import (
    BindingOptions,
    classify_dimer,
    find_best_dimer_alignment,
    locate_primer_binding,
)
from primer_align.folding import (
    annotate_pair_arcs,
    classify_hairpin_energy,
    decompose_hairpin,
    dotbracket_to_pairs,
    pairing_probabilities,
    pairing_probability,
)
from primer_align.analysis import binding_strength, gc_clamp, gc_content

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_INVALID_INPUT = 2

_ALLOWED_BASES = frozenset("ACGT")


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, quiet: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configures logging for the package based on command-line arguments.

    Parameters
    ----------
    verbose_level : int
        The verbosity level: 0 for WARNING, 1 for INFO, 2 for DEBUG.
    quiet : bool
        Keep the console at WARNING regardless of `verbose_level`.
    log_file : Optional[str]
        The path to a log file, if file logging is wanted.
    """
    setup_logger(PACKAGE_LOGGER, level=level_for_verbosity(verbose_level, quiet), log_file=log_file)


# --------------------------
# Helpers
# --------------------------
def validate_and_normalize_seq(raw_sequence: str, label: str = "Sequence") -> str:
    """
    Validates and normalizes a DNA sequence.

    Strips whitespace, upper-cases, maps U to T and checks for invalid characters.

    Raises
    ------
    ValueError
        If the sequence is empty or contains characters other than A, C, G, T.
    """
    normalized_sequence = "".join(raw_sequence.split()).upper().replace("U", "T")

    if not normalized_sequence:
        raise ValueError(f"{label} is empty.")

    for pos, char in enumerate(normalized_sequence):
        if char not in _ALLOWED_BASES:
            raise ValueError(
                f"{label}: invalid character at position {pos} ('{char}'). Only A,C,G,T are allowed."
            )

    logger.info(f"{label} validated: length={len(normalized_sequence)}")
    return normalized_sequence


def parse_structure(sequence: str, dot_bracket: str) -> tuple:
    """Parse a dot-bracket string that must match the sequence length."""
    if len(dot_bracket) != len(sequence):
        raise ValueError(
            f"Dot-bracket length {len(dot_bracket)} does not match sequence length {len(sequence)}."
        )
    return dotbracket_to_pairs(dot_bracket)


def _jsonable(obj: Any) -> Any:
    """Dataclass → plain dict with enums flattened to their values."""
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    if isinstance(obj, dict):
        return {k: _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, Enum):
        return obj.value
    return obj


# --------------------------
# Commands
# --------------------------
def run_dimer(args: argparse.Namespace, settings: PrimerAlignSettings) -> Dict[str, Any]:
    seq1 = validate_and_normalize_seq(args.seq1, "Sequence 1")
    seq2 = validate_and_normalize_seq(args.seq2, "Sequence 2")
    alignment = find_best_dimer_alignment(seq1, seq2, settings.dimer)
    assessment = classify_dimer(alignment, mutagenesis_mode=args.mutagenesis)

    return {
        "found": alignment is not None,
        "alignment": _jsonable(alignment),
        "assessment": _jsonable(assessment),
    }


def run_locate(args: argparse.Namespace, settings: PrimerAlignSettings) -> Dict[str, Any]:
    template = validate_and_normalize_seq(args.template, "Template")
    primer = validate_and_normalize_seq(args.primer, "Primer")
    options = BindingOptions(
        position_hint=tuple(args.hint) if args.hint else None,
        mutation_position=args.mutation_position,
        is_mutagenesis=args.mutation_position is not None,
    )
    span = locate_primer_binding(template, primer, args.reverse, options, settings.binding)

    result: Dict[str, Any] = {"found": span is not None}
    if span is not None:
        result.update(_jsonable(span))
        result["match_length"] = span.match_length
    return result


def run_hairpin(args: argparse.Namespace, settings: PrimerAlignSettings) -> Dict[str, Any]:
    sequence = validate_and_normalize_seq(args.sequence)
    pairs = parse_structure(sequence, args.dot_bracket)
    decomposition = decompose_hairpin(sequence, pairs)

    result: Dict[str, Any] = {"found": decomposition is not None}
    if args.dg is not None:
        result["free_energy"] = args.dg
        result["severity"] = classify_hairpin_energy(args.dg).value
    if decomposition is not None:
        result.update(_jsonable(decomposition))
        result["has_3prime_structure"] = decomposition.has_3prime_structure
        result["arcs"] = _jsonable(annotate_pair_arcs(sequence, pairs))
    return result


def run_pairing(args: argparse.Namespace, settings: PrimerAlignSettings) -> Dict[str, Any]:
    sequence = validate_and_normalize_seq(args.sequence)
    pairs = parse_structure(sequence, args.dot_bracket)

    if args.index is not None:
        return {"found": True, "index": args.index, "probability": pairing_probability(sequence, args.index, pairs)}
    return {"found": True, "probabilities": pairing_probabilities(sequence, pairs).tolist()}


def run_composition(args: argparse.Namespace, settings: PrimerAlignSettings) -> Dict[str, Any]:
    sequence = validate_and_normalize_seq(args.sequence)
    return {
        "found": True,
        "gc_content": gc_content(sequence),
        "gc_clamp": gc_clamp(sequence).value,
        "binding_strength": binding_strength(sequence),
    }


def _print_human(result: Dict[str, Any]) -> None:
    for key, value in result.items():
        print(f"{key:<22}: {value}")


# --------------------------
# Command-Line Interface
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primer-align",
        description="Primer-template alignment and structure inference.",
    )
    parser.add_argument("--config", default=None,
                        help="Path to a settings YAML (defaults to built-in constants).")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of human-readable text.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Also write logs to this file.")
    parser.add_argument("--quiet", action="store_true",
                        help="Only log errors; results are still printed.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    dimer = subparsers.add_parser("dimer", help="Best cross-/self-dimer alignment.")
    dimer.add_argument("seq1")
    dimer.add_argument("seq2")
    dimer.add_argument("--mutagenesis", action="store_true",
                       help="Treat 5'-only overlaps as intended mutagenesis junctions.")
    dimer.set_defaults(handler=run_dimer)

    locate = subparsers.add_parser("locate", help="Locate a primer on a template.")
    locate.add_argument("template")
    locate.add_argument("primer")
    locate.add_argument("--reverse", action="store_true", help="Primer binds the bottom strand.")
    locate.add_argument("--hint", type=int, nargs=2, metavar=("START", "END"), default=None,
                        help="Known binding span; returned without searching.")
    locate.add_argument("--mutation-position", type=int, default=None,
                        help="Zero-based mutation position (enables mutagenesis mode).")
    locate.set_defaults(handler=run_locate)

    hairpin = subparsers.add_parser("hairpin", help="Stem/loop decomposition of a fold.")
    hairpin.add_argument("sequence")
    hairpin.add_argument("dot_bracket")
    hairpin.add_argument("--dg", type=float, default=None,
                         help="Folding free energy (kcal/mol) to grade alongside the structure.")
    hairpin.set_defaults(handler=run_hairpin)

    pairing = subparsers.add_parser("pairing", help="Heuristic pairing probability.")
    pairing.add_argument("sequence")
    pairing.add_argument("dot_bracket")
    pairing.add_argument("--index", type=int, default=None, help="Single position to score.")
    pairing.set_defaults(handler=run_pairing)

    composition = subparsers.add_parser("composition", help="GC content, clamp and binding strength.")
    composition.add_argument("sequence")
    composition.set_defaults(handler=run_composition)

    return parser


def main(argv=None) -> int:
    """
    Parses command-line arguments and runs the requested analysis.
    """
    cli_args = build_parser().parse_args(argv)

    setup_cli_logging(cli_args.verbose, cli_args.quiet, cli_args.log_file)

    try:
        settings = load_settings(cli_args.config)
    except (OSError, ValueError) as e:
        logger.debug("Settings load failed", exc_info=True)
        print(f"Failed to load settings: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        result = cli_args.handler(cli_args, settings)
    except ValueError as e:
        logger.debug("Input rejected", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if cli_args.json:
        print(json.dumps(result, indent=2))
    else:
        _print_human(result)

    return EXIT_OK if result.get("found") else EXIT_NO_RESULT


if __name__ == "__main__":
    raise SystemExit(main())
