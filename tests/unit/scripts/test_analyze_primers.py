"""
Unit tests for the `primer-align` command-line interface.

`main` is called in-process with an argv list; results are read back from
captured stdout in JSON mode.
"""
import json

import pytest

from primer_align.scripts.analyze_primers import (
    EXIT_INVALID_INPUT,
    EXIT_NO_RESULT,
    EXIT_OK,
    main,
    validate_and_normalize_seq,
)


def _run_json(capsys, argv):
    code = main(["--quiet", "--json", *argv])
    out = capsys.readouterr().out
    return code, json.loads(out)


def test_dimer_command_reports_alignment(capsys):
    """
    The fully complementary pair aligns at offset 0 and is critical.
    """
    code, result = _run_json(capsys, ["dimer", "AAAAACCCCC", "GGGGGTTTTT"])

    assert code == EXIT_OK
    assert result["found"] is True
    assert result["alignment"]["offset"] == 0
    assert result["alignment"]["max_consecutive"] == 10
    assert len(result["alignment"]["pairs"]) == 10
    assert result["assessment"]["severity"] == "critical"


def test_dimer_command_without_pairs_exits_no_result(capsys):
    """
    Non-complementary strands produce exit code 1 and a null alignment.
    """
    code, result = _run_json(capsys, ["dimer", "AAAAAAAAAA", "AAAAAAAAAA"])

    assert code == EXIT_NO_RESULT
    assert result["alignment"] is None
    assert result["assessment"]["dimer_type"] == "none"


def test_locate_command_exact(capsys):
    """
    The locate command reports the span, method name and match length.
    """
    code, result = _run_json(capsys, ["locate", "ATCGATCGGGGCCCATG", "CCCATG"])

    assert code == EXIT_OK
    assert (result["start"], result["end"]) == (11, 17)
    assert result["method"] == "exact"
    assert result["match_length"] == 6


def test_locate_command_with_mutation_position(capsys):
    """
    Passing a mutation position enables the mutation-anchored estimate.
    """
    code, result = _run_json(
        capsys, ["locate", "--mutation-position", "50", "A" * 100, "C" * 20],
    )

    assert code == EXIT_OK
    assert result["method"] == "mutation_anchor"
    assert (result["start"], result["end"]) == (42, 62)


def test_locate_command_with_hint(capsys):
    """
    A hint is echoed back as an explicit span.
    """
    code, result = _run_json(capsys, ["locate", "--hint", "2", "8", "ACGTACGTAC", "TTTTTT"])

    assert code == EXIT_OK
    assert result["method"] == "explicit"
    assert (result["start"], result["end"]) == (2, 8)


def test_hairpin_command(capsys):
    """
    The hairpin command decomposes a dot-bracket structure.
    """
    code, result = _run_json(capsys, ["hairpin", "GGGGAAAACCCC", "((((....))))"])

    assert code == EXIT_OK
    assert result["loop_start"] == 4
    assert result["loop_end"] == 8
    assert result["loop_sequence"] == "AAAA"
    assert result["has_3prime_structure"] is True
    assert len(result["arcs"]) == 4


def test_hairpin_command_grades_free_energy(capsys):
    """
    With --dg the structure is reported together with its stability band.
    """
    code, result = _run_json(capsys, ["hairpin", "--dg", "-3.4", "GGGGAAAACCCC", "((((....))))"])

    assert code == EXIT_OK
    assert result["free_energy"] == pytest.approx(-3.4)
    assert result["severity"] == "high"


def test_hairpin_command_unstructured(capsys):
    """
    An all-dot structure has nothing to decompose.
    """
    code, result = _run_json(capsys, ["hairpin", "GGGGAAAACCCC", "............"])

    assert code == EXIT_NO_RESULT
    assert result["found"] is False


def test_pairing_command_single_index(capsys):
    """
    A paired index has probability 1.0.
    """
    code, result = _run_json(capsys, ["pairing", "--index", "0", "GGGGAAAACCCC", "((((....))))"])

    assert code == EXIT_OK
    assert result["probability"] == 1.0


def test_pairing_command_full_vector(capsys):
    """
    Without an index the whole per-base vector is returned.
    """
    code, result = _run_json(capsys, ["pairing", "GGGGAAAACCCC", "((((....))))"])

    assert code == EXIT_OK
    assert len(result["probabilities"]) == 12


def test_composition_command(capsys):
    """
    Composition reports GC content, clamp class and per-base strengths.
    """
    code, result = _run_json(capsys, ["composition", "ATGC"])

    assert code == EXIT_OK
    assert result["gc_content"] == pytest.approx(50.0)
    assert result["gc_clamp"] == "strong"
    assert len(result["binding_strength"]) == 4


@pytest.mark.parametrize("argv", [
    ["dimer", "ACGTX", "ACGT"],
    ["hairpin", "GGGGAAAACCCC", "(((...)))"],
    ["hairpin", "GGGGAAAACCCC", "((((....)))."],
])
def test_invalid_input_exits_with_code_two(capsys, argv):
    """
    Invalid bases, length mismatches and unbalanced brackets are input errors.
    """
    assert main(["--quiet", *argv]) == EXIT_INVALID_INPUT
    err = capsys.readouterr().err
    assert err.count("Error:") == 1


@pytest.mark.parametrize("flags", [[], ["-v"]])
def test_input_error_is_reported_once(capsys, flags):
    """
    The message appears on stderr once, whatever the verbosity.
    """
    assert main([*flags, "dimer", "ACGTX", "ACGT"]) == EXIT_INVALID_INPUT
    err = capsys.readouterr().err
    assert err.count("invalid character at position 4") == 1


def test_bad_config_exits_with_code_two(tmp_path, capsys):
    """
    A settings file with unknown keys is reported before any analysis runs.
    """
    config = tmp_path / "settings.yaml"
    config.write_text("dimer:\n  bogus: 1\n", encoding="utf-8")

    code = main(["--quiet", "--config", str(config), "dimer", "ACGT", "ACGT"])

    assert code == EXIT_INVALID_INPUT
    assert "Failed to load settings" in capsys.readouterr().err


def test_config_values_reach_the_search(tmp_path, capsys):
    """
    A run weight of zero removes the consecutive-run bonus from the score.
    """
    config = tmp_path / "settings.yaml"
    config.write_text("dimer:\n  run_weight: 0.0\n", encoding="utf-8")

    code, result = _run_json(capsys, ["--config", str(config), "dimer", "AAAAACCCCC", "GGGGGTTTTT"])

    assert code == EXIT_OK
    assert result["alignment"]["score"] == pytest.approx(19.5)


def test_human_readable_output(capsys):
    """
    Without --json results are printed as aligned key/value lines.
    """
    assert main(["--quiet", "composition", "ATGC"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "gc_content" in out
    assert "strong" in out


def test_validate_and_normalize_seq_maps_rna_to_dna():
    """
    Whitespace is stripped, input upper-cased and U mapped to T.
    """
    assert validate_and_normalize_seq(" acgu \n") == "ACGT"


@pytest.mark.parametrize("raw", ["", "   ", "ACGN"])
def test_validate_and_normalize_seq_rejects_bad_input(raw):
    """
    Empty sequences and non-ACGT characters raise ValueError.
    """
    with pytest.raises(ValueError):
        validate_and_normalize_seq(raw)
